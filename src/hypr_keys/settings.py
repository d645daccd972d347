from __future__ import annotations

from pathlib import Path
import tomllib

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from hypr_keys.errors import SettingsError


class Settings(BaseModel):
    """Backup housekeeping knobs; validation rules are fixed in code."""

    model_config = ConfigDict(extra="forbid")

    backup_dir_name: str = "backups"
    keep_backups: int = Field(default=10, ge=0)


def load_settings(path: str | Path | None = None) -> Settings:
    """Load settings from a TOML file; a missing file yields the defaults."""

    if path is None:
        return Settings()

    path = Path(path)
    if not path.is_file():
        return Settings()

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise SettingsError(f"Settings file {path} could not be read: {exc}") from exc

    try:
        return Settings.model_validate(data)
    except ValidationError as exc:
        raise SettingsError(f"Settings file {path} is invalid: {exc}") from exc
