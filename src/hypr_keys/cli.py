from __future__ import annotations

from pathlib import Path
import argparse
import logging

from hypr_keys.errors import HyprKeysError
from hypr_keys.guard.models.danger import DangerLevel
from hypr_keys.guard.models.report import ValidationReport
from hypr_keys.settings import Settings, load_settings
from hypr_keys.store.manager import ConfigManager


_LOGGER = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def format_report(report: ValidationReport) -> list[str]:
    """Render a ValidationReport as printable lines."""

    lines: list[str] = []
    for issue in report.errors():
        lines.append(f"error   binding {issue.binding_index}: {issue.message}")
    for index, assessment in report.critical_dangers():
        lines.append(f"critical binding {index}: {assessment.reason}")
        if assessment.recommendation:
            lines.append(f"         {assessment.recommendation}")
    for issue in report.warnings():
        lines.append(f"warning binding {issue.binding_index}: {issue.message}")
        if issue.suggestion:
            lines.append(f"        {issue.suggestion}")
    lines.append(f"highest danger: {report.highest_danger.name}")
    return lines


def _check(manager: ConfigManager) -> int:
    report = manager.validator.validate_config(manager.read_config())
    for line in format_report(report):
        print(line)
    if report.has_errors() or report.highest_danger == DangerLevel.CRITICAL:
        return 1
    return 0


def _list(manager: ConfigManager) -> int:
    bindings = manager.parse_bindings()
    for binding in bindings:
        print(binding)
    print(f"{len(bindings)} binding(s)")
    return 0


def _conflicts(manager: ConfigManager) -> int:
    conflicts = manager.find_conflicts()
    if not conflicts:
        print("No conflicts found")
        return 0
    for conflict in conflicts:
        print(f"{conflict.key_combo} is bound {len(conflict.bindings)} times:")
        for binding in conflict.bindings:
            print(f"  {binding}")
    return 0


def _backups(manager: ConfigManager, cleanup: int | None) -> int:
    if cleanup is not None:
        deleted = manager.cleanup_old_backups(cleanup)
        print(f"Deleted {deleted} backup(s)")
        return 0

    backups = manager.list_backups()
    if not backups:
        print("No backups found")
    for backup in backups:
        print(f"{backup.timestamp.isoformat(sep=' ')}  {backup.path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Inspect and safely manage Hyprland keybindings."
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    parser.add_argument("--settings", help="Settings toml path")

    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="Validate every binding in a config")
    check.add_argument("config", help="Hyprland config path (e.g. hyprland.conf)")

    listing = sub.add_parser("list", help="Print every binding in a config")
    listing.add_argument("config", help="Hyprland config path")

    conflicts = sub.add_parser("conflicts", help="List key combos bound more than once")
    conflicts.add_argument("config", help="Hyprland config path")

    backups = sub.add_parser("backups", help="List or prune config backups")
    backups.add_argument("config", help="Hyprland config path")
    backups.add_argument("--cleanup", type=int, metavar="N", help="Keep only the N newest backups")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format=LOG_FORMAT)

    try:
        settings = load_settings(args.settings) if args.settings else Settings()
        manager = ConfigManager(Path(args.config), settings=settings)
        if args.command == "check":
            return _check(manager)
        if args.command == "list":
            return _list(manager)
        if args.command == "conflicts":
            return _conflicts(manager)
        return _backups(manager, args.cleanup)
    except (HyprKeysError, ValueError) as exc:
        _LOGGER.error("%s", exc)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
