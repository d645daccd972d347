from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, List, Optional

from pydantic import BaseModel

from hypr_keys.errors import BackupFailure, IoFailure

from .io import FileStore, LocalFileStore


_LOGGER = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d_%H%M%S"
_TIMESTAMP_RE = re.compile(r"\d{4}-\d{2}-\d{2}_\d{6}")

# Same-second collisions advance the timestamp; give up after this many tries.
_MAX_NAME_ATTEMPTS = 120


class BackupInfo(BaseModel):
    path: Path
    timestamp: datetime


def backup_name(config_name: str, timestamp: datetime) -> str:
    return f"{config_name}.{timestamp.strftime(TIMESTAMP_FORMAT)}"


def parse_backup_name(name: str, config_name: str) -> Optional[datetime]:
    """Return the timestamp of ``<config_name>.<YYYY-MM-DD_HHMMSS>``, else None."""

    prefix = f"{config_name}."
    if not name.startswith(prefix):
        return None
    stamp = name[len(prefix):]
    if not _TIMESTAMP_RE.fullmatch(stamp):
        return None
    try:
        return datetime.strptime(stamp, TIMESTAMP_FORMAT)
    except ValueError:
        return None


class BackupStore:
    """Timestamped full-content snapshots of one config file."""

    def __init__(
        self,
        config_path: Path,
        backup_dir: Path,
        *,
        store: Optional[FileStore] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.config_path = Path(config_path)
        self.backup_dir = Path(backup_dir)
        self._store = store or LocalFileStore()
        self._clock = clock

    def create(self, content: str) -> Path:
        """Write ``content`` to a new backup file; never overwrites an existing one."""

        timestamp = self._clock().replace(microsecond=0)
        for _ in range(_MAX_NAME_ATTEMPTS):
            path = self.backup_dir / backup_name(self.config_path.name, timestamp)
            try:
                self._store.write_new(path, content)
            except FileExistsError:
                timestamp += timedelta(seconds=1)
                continue
            except OSError as exc:
                raise BackupFailure(f"Failed to create backup {path}: {exc}") from exc
            _LOGGER.info("Created backup %s", path)
            return path

        raise BackupFailure(f"No free backup name for {self.config_path.name} in {self.backup_dir}")

    def list_backups(self) -> List[BackupInfo]:
        """Valid backups of this config, newest first."""

        if not self.backup_dir.is_dir():
            return []

        try:
            entries = list(self.backup_dir.iterdir())
        except OSError as exc:
            raise IoFailure(f"Failed to list {self.backup_dir}: {exc}") from exc

        backups: List[BackupInfo] = []
        for entry in entries:
            timestamp = parse_backup_name(entry.name, self.config_path.name)
            if timestamp is None or not entry.is_file():
                continue
            backups.append(BackupInfo(path=entry, timestamp=timestamp))

        backups.sort(key=lambda backup: backup.timestamp, reverse=True)
        return backups

    def cleanup(self, keep: int) -> int:
        """Delete all but the ``keep`` newest backups; return how many were deleted."""

        if keep < 0:
            raise ValueError(f"keep must be >= 0, got {keep}")

        deleted = 0
        for backup in self.list_backups()[keep:]:
            try:
                backup.path.unlink()
            except OSError as exc:
                raise IoFailure(f"Failed to delete backup {backup.path}: {exc}") from exc
            deleted += 1

        if deleted:
            _LOGGER.info("Deleted %d old backup(s) of %s", deleted, self.config_path.name)
        return deleted
