from __future__ import annotations

from hypr_keys.guard.models.danger import DangerLevel
from hypr_keys.guard.models.report import Severity
from hypr_keys.guard.validator import ConfigValidator


def test_clean_config_has_no_issues() -> None:
    report = ConfigValidator().validate_config(
        "$mod = SUPER\nbind = $mod, Return, exec, kitty\nbind = $mod, Q, killactive\n"
    )

    assert report.issues == []
    assert report.highest_danger is DangerLevel.SAFE
    assert not report.has_errors()


def test_parse_failure_is_single_error() -> None:
    report = ConfigValidator().validate_config("bind = SUPER, K, exec, kitty\nbind = SUPER\n")

    assert len(report.issues) == 1
    issue = report.issues[0]
    assert issue.severity is Severity.ERROR
    assert issue.binding_index == 0
    assert "line 2" in issue.message


def test_layer1_failure_is_error_and_skips_danger_check() -> None:
    content = "\n".join(
        [
            "bind = SUPER, T, exec, kitty",
            "bind = SUPER, X, exec, firefox; rm -rf /",
            "bind = SUPER, Y, spawn, whatever",
        ]
    )
    report = ConfigValidator().validate_config(content)

    errors = report.errors()
    assert [issue.binding_index for issue in errors] == [1, 2]
    assert all(issue.message.startswith("Security violation:") for issue in errors)
    # the rm -rf / behind the ';' never reaches the danger detector
    assert report.dangers == []
    assert report.highest_danger is DangerLevel.SAFE


def test_critical_is_recorded_as_danger_not_error() -> None:
    report = ConfigValidator().validate_config(
        "bind = SUPER, T, exec, kitty\nbind = SUPER, X, exec, rm -rf /\n"
    )

    assert not report.has_errors()
    assert report.warnings() == []
    assert report.has_critical_dangers()
    [(index, assessment)] = report.critical_dangers()
    assert index == 1
    assert assessment.level is DangerLevel.CRITICAL


def test_dangerous_and_suspicious_are_warnings() -> None:
    report = ConfigValidator().validate_config(
        "bind = SUPER, A, exec, sudo reboot\nbind = SUPER, B, exec, wget -q example.org\n"
    )

    warnings = report.warnings()
    assert [issue.binding_index for issue in warnings] == [0, 1]
    assert warnings[0].message.startswith("Dangerous command:")
    assert warnings[1].message.startswith("Suspicious command:")
    assert warnings[0].suggestion

    # only the Dangerous one is kept as a recorded danger
    assert [index for index, _ in report.dangers] == [0]
    assert report.highest_danger is DangerLevel.DANGEROUS


def test_highest_danger_tracks_maximum() -> None:
    report = ConfigValidator().validate_config(
        "\n".join(
            [
                "bind = SUPER, A, exec, wget -q example.org",
                "bind = SUPER, B, exec, dd if=/dev/zero of=/dev/sda",
                "bind = SUPER, C, exec, sudo reboot",
            ]
        )
    )
    assert report.highest_danger is DangerLevel.CRITICAL


def test_only_exec_dispatchers_are_assessed() -> None:
    report = ConfigValidator().validate_config(
        "bind = SUPER, 1, workspace, 1\nbind = SUPER, R, execr, sudo reboot\n"
    )
    assert [issue.binding_index for issue in report.warnings()] == [1]


def test_argument_cap_is_fixed() -> None:
    validator = ConfigValidator()

    report = validator.validate_config("bind = SUPER, A, exec, notify-send " + "a" * 5000)
    assert [issue.message for issue in report.errors()] == [
        "Security violation: Argument too long: 5012 characters (max 1000)"
    ]

    report = validator.validate_config("bind = SUPER, A, exec, " + "a" * 1000)
    assert report.issues == []
