from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Protocol

from hypr_keys.errors import IoFailure, WriteFailure


class FileStore(Protocol):
    """The single I/O seam of the persistence layer."""

    def read_text(self, path: Path) -> str: ...

    def write_atomic(self, path: Path, content: str) -> None: ...

    def write_new(self, path: Path, content: str) -> None: ...


class LocalFileStore:
    """Local-disk store; content is kept byte-for-byte (no newline translation)."""

    def read_text(self, path: Path) -> str:
        try:
            with open(path, "r", encoding="utf-8", newline="") as fh:
                return fh.read()
        except OSError as exc:
            raise IoFailure(f"Failed to read {path}: {exc}") from exc

    def write_new(self, path: Path, content: str) -> None:
        """Create ``path`` exclusively; FileExistsError propagates."""

        with open(path, "x", encoding="utf-8", newline="") as fh:
            fh.write(content)
            fh.flush()
            os.fsync(fh.fileno())

    def write_atomic(self, path: Path, content: str) -> None:
        """Write to a temp file next to ``path``, fsync, then rename it into place."""

        # Resolve so a symlinked config keeps its link and the target is replaced.
        path = Path(path).resolve()
        directory = path.parent
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=directory)
        except OSError as exc:
            raise WriteFailure(f"Failed to create temp file in {directory}: {exc}") from exc

        tmp_path = Path(tmp_name)
        try:
            try:
                with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
                    fh.write(content)
                    fh.flush()
                    os.fsync(fh.fileno())
                _copy_mode(path, tmp_path)
            except OSError as exc:
                raise WriteFailure(f"Failed to write temp file for {path}: {exc}") from exc

            try:
                os.replace(tmp_path, path)
            except OSError as exc:
                raise WriteFailure(f"Failed to rename temp file onto {path}: {exc}") from exc
        except WriteFailure:
            tmp_path.unlink(missing_ok=True)
            raise

        _fsync_directory(directory)


def _copy_mode(src: Path, dst: Path) -> None:
    # mkstemp creates 0600; keep the target's permissions when it exists.
    try:
        mode = src.stat().st_mode
    except FileNotFoundError:
        return
    os.chmod(dst, mode & 0o7777)


def _fsync_directory(directory: Path) -> None:
    # Makes the rename durable; not supported on every platform.
    try:
        fd = os.open(directory, os.O_RDONLY)
    except OSError:
        return
    try:
        os.fsync(fd)
    except OSError:
        pass
    finally:
        os.close(fd)
