"""Layer 2: heuristic danger classification of exec arguments.

Rules run in a fixed order and the first match wins:

1. safe first word (fast path)
2. critical regexes (root delete, disk overwrite, fork bomb)
3. contextual argument rules (chmod 777, curl | sh, ...)
4. dangerous command names
5. encoded payloads (hex before base64, tokens before quoted strings)
6. suspicious command names
"""

from __future__ import annotations

from typing import List, Optional

from . import entropy, patterns
from .models.danger import DangerAssessment, DangerLevel


MIN_ENCODED_LENGTH = 8


class DangerDetector:
    """Classify a command string into a DangerLevel."""

    def __init__(self) -> None:
        self._critical_patterns = tuple(patterns.build_critical_patterns())
        self._argument_rules = tuple(patterns.build_argument_rules())
        self._dangerous_commands = patterns.build_dangerous_commands()
        self._suspicious_commands = patterns.build_suspicious_commands()
        self._safe_commands = patterns.build_safe_commands()

    def assess_command(self, command: str) -> DangerAssessment:
        words = command.split()

        if words and words[0] in self._safe_commands:
            return DangerAssessment(level=DangerLevel.SAFE, reason="Known safe command")

        for critical in self._critical_patterns:
            if critical.pattern.search(command):
                return DangerAssessment(
                    level=DangerLevel.CRITICAL,
                    reason=critical.reason,
                    recommendation=critical.recommendation,
                    matched_pattern=critical.label,
                )

        for rule in self._argument_rules:
            if rule.matches(command):
                return DangerAssessment(
                    level=rule.level,
                    reason=rule.reason,
                    recommendation=rule.recommendation,
                    matched_pattern=rule.label,
                )

        for word in words:
            if self._is_dangerous_command(word):
                return DangerAssessment(
                    level=DangerLevel.DANGEROUS,
                    reason=f"Command '{word}' can cause serious security issues or data loss",
                    recommendation=(
                        "Review this command carefully. Consider safer alternatives "
                        "or additional safeguards."
                    ),
                    matched_pattern=word,
                )

        encoded = self._check_encoded_tokens(words) or self._check_quoted_strings(command)
        if encoded is not None:
            return encoded

        for word in words:
            if word in self._suspicious_commands:
                return DangerAssessment(
                    level=DangerLevel.SUSPICIOUS,
                    reason=(
                        f"Command '{word}' is often used in malicious contexts "
                        "but may be legitimate"
                    ),
                    recommendation="Verify this command is necessary. Ensure you trust its source.",
                    matched_pattern=word,
                )

        return DangerAssessment(level=DangerLevel.SAFE, reason="No dangerous patterns detected")

    def _is_dangerous_command(self, word: str) -> bool:
        # mkfs.ext4, mkfs.btrfs, ...
        return word in self._dangerous_commands or word.startswith("mkfs.")

    def _is_known_command(self, word: str) -> bool:
        return (
            word in self._safe_commands
            or word in self._suspicious_commands
            or self._is_dangerous_command(word)
        )

    def _check_encoded_tokens(self, words: List[str]) -> Optional[DangerAssessment]:
        for word in words:
            if len(word) < MIN_ENCODED_LENGTH or self._is_known_command(word):
                continue

            if entropy.is_likely_hex(word):
                return DangerAssessment(
                    level=DangerLevel.SUSPICIOUS,
                    reason=(
                        f"Possible hex-encoded data detected: '{word}'. "
                        "High entropy suggests obfuscation."
                    ),
                    recommendation=f"Decode and inspect before executing: echo {word} | xxd -r -p",
                    matched_pattern="hex encoding",
                )

            if entropy.is_likely_base64(word):
                return DangerAssessment(
                    level=DangerLevel.SUSPICIOUS,
                    reason=(
                        f"Possible base64-encoded command detected: '{word}'. "
                        "This may hide malicious intent."
                    ),
                    recommendation=f"Decode and inspect before executing: echo {word} | base64 -d",
                    matched_pattern="base64 encoding",
                )
        return None

    def _check_quoted_strings(self, command: str) -> Optional[DangerAssessment]:
        # Odd-indexed pieces of a split on '"' are the quoted contents.
        for quoted in command.split('"')[1::2]:
            if len(quoted) < MIN_ENCODED_LENGTH:
                continue

            if entropy.is_likely_hex(quoted):
                return DangerAssessment(
                    level=DangerLevel.SUSPICIOUS,
                    reason=(
                        f'Possible hex-encoded payload in quotes: "{quoted}". '
                        "High entropy suggests obfuscation."
                    ),
                    recommendation="Decode and inspect the quoted string before executing.",
                    matched_pattern="hex in quotes",
                )

            if entropy.is_likely_base64(quoted):
                return DangerAssessment(
                    level=DangerLevel.SUSPICIOUS,
                    reason=(
                        f'Possible base64-encoded payload in quotes: "{quoted}". '
                        "This may hide malicious commands."
                    ),
                    recommendation="Decode and inspect the quoted string before executing.",
                    matched_pattern="base64 in quotes",
                )
        return None


def assess_command(command: str) -> DangerAssessment:
    return DangerDetector().assess_command(command)
