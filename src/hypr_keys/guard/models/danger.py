from __future__ import annotations

from enum import IntEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class DangerLevel(IntEnum):
    """Totally ordered severity of a command."""

    SAFE = 0
    SUSPICIOUS = 1
    DANGEROUS = 2
    CRITICAL = 3


class DangerAssessment(BaseModel):
    """Result of assessing one command string."""

    model_config = ConfigDict(frozen=True)

    level: DangerLevel
    reason: str
    recommendation: str = ""
    matched_pattern: Optional[str] = None
