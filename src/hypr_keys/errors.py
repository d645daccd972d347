from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from hypr_keys.guard.models.report import ValidationReport


class HyprKeysError(Exception):
    """Base class for every error raised by hypr-keys."""


class SettingsError(HyprKeysError):
    """Settings file is unreadable or holds invalid values."""


class ParseError(HyprKeysError, ValueError):
    """A bind line could not be parsed; aborts the whole file."""

    def __init__(self, line: int, message: str) -> None:
        super().__init__(f"Parse error on line {line}: {message}")
        self.line = line
        self.message = message


class SecurityViolation(HyprKeysError):
    """Layer 1 rejection of a binding."""


class InvalidDispatcher(SecurityViolation):
    def __init__(self, dispatcher: str) -> None:
        super().__init__(f"Invalid dispatcher {dispatcher!r}: not in whitelist")
        self.dispatcher = dispatcher


class InvalidKey(SecurityViolation):
    def __init__(self, key: str) -> None:
        super().__init__(f"Invalid key name {key!r}")
        self.key = key


class ShellMetacharacters(SecurityViolation):
    def __init__(self, found: Iterable[str]) -> None:
        self.found = tuple(found)
        shown = ", ".join(repr(token) for token in self.found)
        super().__init__(f"Dangerous shell metacharacters detected in arguments: {shown}")


class ArgumentTooLong(SecurityViolation):
    def __init__(self, length: int, limit: int) -> None:
        super().__init__(f"Argument too long: {length} characters (max {limit})")
        self.length = length
        self.limit = limit


class ValidationFailed(SecurityViolation):
    """Candidate content produced Error-level issues; nothing was written."""

    def __init__(self, report: ValidationReport) -> None:
        self.report = report
        self.error_count = len(report.errors())
        lines = [f"{self.error_count} validation error(s) detected"]
        lines.extend(
            f"  binding {issue.binding_index}: {issue.message}" for issue in report.errors()
        )
        super().__init__("\n".join(lines))


class DangerBlocked(HyprKeysError):
    """Candidate content contains a Critical command; nothing was written."""

    def __init__(self, report: ValidationReport) -> None:
        self.report = report
        lines = ["Critical danger detected - commit blocked"]
        for index, assessment in report.critical_dangers():
            lines.append(f"  binding {index}: {assessment.reason}")
            lines.append(f"    recommendation: {assessment.recommendation}")
        super().__init__("\n".join(lines))


class TransactionError(HyprKeysError):
    """Transaction used outside its lifecycle (e.g. committed twice)."""


class BackupFailure(HyprKeysError):
    """A backup could not be created, read or restored."""


class WriteFailure(HyprKeysError):
    """The temp-file write or the rename into place failed."""


class IoFailure(HyprKeysError):
    """Generic read/stat failure."""


class ConfigNotFound(IoFailure):
    def __init__(self, path: object) -> None:
        super().__init__(f"Config file not found: {path}")
        self.path = path
