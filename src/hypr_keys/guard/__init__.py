from __future__ import annotations

from .danger import DangerDetector, assess_command
from .entropy import calculate_entropy, is_likely_base64, is_likely_hex
from .injection import validate_keybinding
from .models.danger import DangerAssessment, DangerLevel
from .models.report import Severity, ValidationIssue, ValidationReport
from .validator import ConfigValidator

__all__ = [
    "ConfigValidator",
    "DangerAssessment",
    "DangerDetector",
    "DangerLevel",
    "Severity",
    "ValidationIssue",
    "ValidationReport",
    "assess_command",
    "calculate_entropy",
    "is_likely_base64",
    "is_likely_hex",
    "validate_keybinding",
]
