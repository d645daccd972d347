from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from hypr_keys.binding.conflict import Conflict, find_conflicts
from hypr_keys.binding.dsl import BindSyntaxError, is_bind_line, parse_bind_kind
from hypr_keys.binding.frontend import BindingFrontend
from hypr_keys.binding.ir import Keybinding
from hypr_keys.errors import BackupFailure, ConfigNotFound, IoFailure
from hypr_keys.guard.models.report import ValidationIssue
from hypr_keys.guard.validator import ConfigValidator
from hypr_keys.settings import Settings

from .backups import BackupInfo, BackupStore
from .io import FileStore, LocalFileStore
from .transaction import ConfigTransaction


_LOGGER = logging.getLogger(__name__)

EXPORT_HEADER = "# Exported Hyprland Keybindings\n\n"
SECTION_HEADER = "# Keybindings"


def _is_directive(line: str) -> bool:
    text = line.strip()
    if not is_bind_line(text):
        return False
    try:
        parse_bind_kind(text)
    except BindSyntaxError:
        return False
    return True


class ConfigManager:
    """Read, edit and safely rewrite one compositor config file."""

    def __init__(
        self,
        config_path: str | Path,
        *,
        settings: Optional[Settings] = None,
        store: Optional[FileStore] = None,
    ) -> None:
        self.config_path = Path(config_path).expanduser()
        if not self.config_path.exists():
            raise ConfigNotFound(self.config_path)
        if self.config_path.is_symlink():
            _LOGGER.warning(
                "%s is a symlink; writes will replace its target %s",
                self.config_path,
                self.config_path.resolve(),
            )

        self.settings = settings or Settings()
        self.store: FileStore = store or LocalFileStore()
        self.backup_dir = self.config_path.parent / self.settings.backup_dir_name
        try:
            self.backup_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise BackupFailure(f"Cannot create backup directory {self.backup_dir}: {exc}") from exc

        self.backups = BackupStore(self.config_path, self.backup_dir, store=self.store)
        self.validator = ConfigValidator()
        self._frontend = BindingFrontend()

    def read_config(self) -> str:
        return self.store.read_text(self.config_path)

    def parse_bindings(self) -> List[Keybinding]:
        return self._frontend.parse_config(self.read_config())

    def find_conflicts(self) -> List[Conflict]:
        return find_conflicts(self.parse_bindings())

    def create_backup(self) -> Path:
        try:
            content = self.read_config()
        except IoFailure as exc:
            raise BackupFailure(f"Cannot back up {self.config_path}: {exc}") from exc
        return self.backups.create(content)

    def list_backups(self) -> List[BackupInfo]:
        return self.backups.list_backups()

    def cleanup_old_backups(self, keep: Optional[int] = None) -> int:
        if keep is None:
            keep = self.settings.keep_backups
        return self.backups.cleanup(keep)

    def restore_backup(self, backup_path: str | Path) -> Path:
        """Restore ``backup_path`` over the config; return the safety backup taken first.

        The backup is read before anything is touched, so an unreadable backup
        leaves the config as it was.
        """

        backup_path = Path(backup_path)
        if not backup_path.exists():
            raise BackupFailure(f"Backup file does not exist: {backup_path}")
        if not backup_path.is_file():
            raise BackupFailure(f"Backup path is not a file: {backup_path}")

        try:
            content = self.store.read_text(backup_path)
        except IoFailure as exc:
            raise BackupFailure(f"Failed to read backup file: {exc}") from exc

        safety = self.create_backup()
        self.store.write_atomic(self.config_path, content)
        _LOGGER.info("Restored %s from %s (safety backup %s)", self.config_path, backup_path, safety.name)
        return safety

    def begin(self) -> ConfigTransaction:
        return ConfigTransaction.begin(self)

    def rebuild_config(self, original: str, bindings: Iterable[Keybinding]) -> str:
        """Swap the bind directives of ``original`` for ``bindings``.

        New directives take the place of the first run of bind lines; bind lines
        elsewhere are dropped and every other line is kept. CRLF files stay CRLF.
        """

        newline = "\r\n" if "\r\n" in original else "\n"
        rendered = [binding.to_line() for binding in bindings]
        result: List[str] = []
        written = False
        in_section = False

        for line in original.splitlines():
            if _is_directive(line):
                if not written:
                    in_section = True
                continue
            if in_section and not written:
                result.extend(rendered)
                written = True
            result.append(line)

        if in_section and not written:
            result.extend(rendered)
            written = True

        if not written:
            result.extend(["", SECTION_HEADER, *rendered])

        return newline.join(result) + newline

    def write_bindings(self, bindings: Iterable[Keybinding]) -> List[ValidationIssue]:
        """Validate and write ``bindings`` back; return the non-blocking warnings."""

        content = self.rebuild_config(self.read_config(), bindings)
        transaction = self.begin()
        return transaction.commit_with_validation(content)

    def export_to(self, export_path: str | Path, bindings: Iterable[Keybinding]) -> None:
        content = EXPORT_HEADER + "".join(f"{binding.to_line()}\n" for binding in bindings)
        self.store.write_atomic(Path(export_path), content)
        _LOGGER.info("Exported keybindings to %s", export_path)
