"""Layer 3: run Layer 1 and Layer 2 over every binding in a config file."""

from __future__ import annotations

import logging

from hypr_keys.binding.frontend import BindingFrontend
from hypr_keys.errors import ParseError, SecurityViolation

from .danger import DangerDetector
from .injection import validate_keybinding
from .models.danger import DangerLevel
from .models.report import ValidationReport


_LOGGER = logging.getLogger(__name__)

EXEC_DISPATCHERS = frozenset({"exec", "execr"})


class ConfigValidator:
    """Validate complete config content into a ValidationReport."""

    def __init__(self) -> None:
        self._frontend = BindingFrontend()
        self._detector = DangerDetector()

    def validate_config(self, content: str) -> ValidationReport:
        report = ValidationReport()

        try:
            bindings = self._frontend.parse_config(content)
        except ParseError as exc:
            report.add_error(0, str(exc))
            return report

        for index, binding in enumerate(bindings):
            try:
                validate_keybinding(binding)
            except SecurityViolation as exc:
                # An injection attempt is conclusive; skip the danger check.
                report.add_error(index, f"Security violation: {exc}")
                continue

            if binding.dispatcher.lower() not in EXEC_DISPATCHERS or binding.args is None:
                continue

            assessment = self._detector.assess_command(binding.args)
            if assessment.level == DangerLevel.CRITICAL:
                report.record_danger(index, assessment)
            elif assessment.level == DangerLevel.DANGEROUS:
                report.record_danger(index, assessment)
                report.add_warning(
                    index, f"Dangerous command: {assessment.reason}", assessment.recommendation
                )
            elif assessment.level == DangerLevel.SUSPICIOUS:
                report.observe(assessment.level)
                report.add_warning(
                    index, f"Suspicious command: {assessment.reason}", assessment.recommendation
                )

        _LOGGER.debug(
            "Validated %d bindings: %d errors, %d warnings, highest danger %s",
            len(bindings),
            len(report.errors()),
            len(report.warnings()),
            report.highest_danger.name,
        )
        return report
