from __future__ import annotations

from .backups import BackupInfo, BackupStore
from .io import FileStore, LocalFileStore
from .manager import ConfigManager
from .transaction import ConfigTransaction, TransactionState

__all__ = [
    "BackupInfo",
    "BackupStore",
    "ConfigManager",
    "ConfigTransaction",
    "FileStore",
    "LocalFileStore",
    "TransactionState",
]
