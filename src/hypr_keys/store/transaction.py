"""Backup-guarded atomic writes of the config file.

``begin`` snapshots the file first, so every transaction object has a
recovery point. Commits go through temp-file + rename; rollbacks rewrite the
snapshot the same way and may be repeated.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, List

from hypr_keys.errors import (
    BackupFailure,
    DangerBlocked,
    IoFailure,
    TransactionError,
    ValidationFailed,
)
from hypr_keys.guard.models.report import ValidationIssue
from hypr_keys.guard.validator import ConfigValidator

from .io import FileStore

if TYPE_CHECKING:
    from .manager import ConfigManager


_LOGGER = logging.getLogger(__name__)


class TransactionState(str, Enum):
    BEGUN = "begun"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class ConfigTransaction:
    """One begin -> commit / rollback cycle over a config file."""

    def __init__(
        self,
        config_path: Path,
        backup_path: Path,
        *,
        store: FileStore,
        validator: ConfigValidator,
    ) -> None:
        self.config_path = config_path
        self.backup_path = backup_path
        self.state = TransactionState.BEGUN
        self._committed = False
        self._store = store
        self._validator = validator

    @classmethod
    def begin(cls, manager: ConfigManager) -> ConfigTransaction:
        """Snapshot the current file; raises BackupFailure if that is impossible."""

        try:
            content = manager.read_config()
        except IoFailure as exc:
            raise BackupFailure(f"Cannot snapshot {manager.config_path}: {exc}") from exc

        backup_path = manager.backups.create(content)
        return cls(
            manager.config_path,
            backup_path,
            store=manager.store,
            validator=manager.validator,
        )

    def commit_with_validation(self, content: str) -> List[ValidationIssue]:
        """Validate ``content`` and commit it; return the (non-blocking) warnings."""

        report = self._validator.validate_config(content)

        if report.has_errors():
            for issue in report.errors():
                _LOGGER.error("Binding %d: %s", issue.binding_index, issue.message)
            _LOGGER.error(
                "Refusing to write %s: %d validation error(s)",
                self.config_path,
                len(report.errors()),
            )
            raise ValidationFailed(report)

        if report.has_critical_dangers():
            for index, assessment in report.critical_dangers():
                _LOGGER.error(
                    "Binding %d: %s (recommendation: %s)",
                    index,
                    assessment.reason,
                    assessment.recommendation,
                )
            _LOGGER.error("Refusing to write %s: critical danger detected", self.config_path)
            raise DangerBlocked(report)

        warnings = report.warnings()
        for issue in warnings:
            if issue.suggestion:
                _LOGGER.warning(
                    "Binding %d: %s (suggestion: %s)",
                    issue.binding_index,
                    issue.message,
                    issue.suggestion,
                )
            else:
                _LOGGER.warning("Binding %d: %s", issue.binding_index, issue.message)

        self.commit(content)
        return warnings

    def commit(self, content: str) -> None:
        """Atomically replace the config; the backup stays for manual rollback."""

        if self._committed:
            raise TransactionError("Transaction already committed")

        self._store.write_atomic(self.config_path, content)
        self._committed = True
        self.state = TransactionState.COMMITTED
        _LOGGER.info("Committed %s (backup %s)", self.config_path, self.backup_path.name)

    def rollback(self) -> None:
        """Restore the content captured at begin; may be called repeatedly."""

        try:
            content = self._store.read_text(self.backup_path)
        except IoFailure as exc:
            raise BackupFailure(f"Cannot read backup {self.backup_path}: {exc}") from exc

        self._store.write_atomic(self.config_path, content)
        self.state = TransactionState.ROLLED_BACK
        _LOGGER.info("Rolled back %s from %s", self.config_path, self.backup_path.name)
