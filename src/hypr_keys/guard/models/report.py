from __future__ import annotations

from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

from .danger import DangerAssessment, DangerLevel


class Severity(str, Enum):
    """ERROR blocks a commit, WARNING only informs."""

    ERROR = "error"
    WARNING = "warning"


class ValidationIssue(BaseModel):
    binding_index: int
    severity: Severity
    message: str
    suggestion: Optional[str] = None


class ValidationReport(BaseModel):
    """Outcome of one validation pass over a config file."""

    issues: List[ValidationIssue] = Field(default_factory=list)
    highest_danger: DangerLevel = DangerLevel.SAFE
    dangers: List[Tuple[int, DangerAssessment]] = Field(default_factory=list)

    def errors(self) -> List[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity is Severity.ERROR]

    def warnings(self) -> List[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity is Severity.WARNING]

    def has_errors(self) -> bool:
        return any(issue.severity is Severity.ERROR for issue in self.issues)

    def has_critical_dangers(self) -> bool:
        return self.highest_danger == DangerLevel.CRITICAL

    def critical_dangers(self) -> List[Tuple[int, DangerAssessment]]:
        return [
            (index, assessment)
            for index, assessment in self.dangers
            if assessment.level == DangerLevel.CRITICAL
        ]

    def add_error(self, binding_index: int, message: str) -> None:
        self.issues.append(
            ValidationIssue(binding_index=binding_index, severity=Severity.ERROR, message=message)
        )

    def add_warning(
        self, binding_index: int, message: str, suggestion: Optional[str] = None
    ) -> None:
        self.issues.append(
            ValidationIssue(
                binding_index=binding_index,
                severity=Severity.WARNING,
                message=message,
                suggestion=suggestion,
            )
        )

    def observe(self, level: DangerLevel) -> None:
        if level > self.highest_danger:
            self.highest_danger = level

    def record_danger(self, binding_index: int, assessment: DangerAssessment) -> None:
        """Store the assessment and raise ``highest_danger`` if needed."""

        self.observe(assessment.level)
        self.dangers.append((binding_index, assessment))
