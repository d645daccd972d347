from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator


class Modifier(str, Enum):
    """Modifier keys; declaration order is the canonical order."""

    SUPER = "SUPER"
    CTRL = "CTRL"
    SHIFT = "SHIFT"
    ALT = "ALT"


_MODIFIER_ORDER = {mod: index for index, mod in enumerate(Modifier)}


def canonical_modifiers(mods: Iterable[Modifier]) -> Tuple[Modifier, ...]:
    """Deduplicate and sort modifiers by ordinal."""

    return tuple(sorted(set(mods), key=_MODIFIER_ORDER.__getitem__))


class BindKind(str, Enum):
    """Activation variant of a binding; the value is the config keyword."""

    BIND = "bind"
    BINDE = "binde"  # repeat on hold
    BINDL = "bindl"  # works on locked screen
    BINDM = "bindm"  # mouse
    BINDR = "bindr"  # on release
    BINDEL = "bindel"  # repeat on hold + locked screen


class KeyCombo(BaseModel):
    """A modifier set plus a base key; the unit of conflict detection."""

    model_config = ConfigDict(frozen=True)

    modifiers: Tuple[Modifier, ...] = ()
    key: str

    @field_validator("modifiers")
    @classmethod
    def _normalize_modifiers(cls, value: Tuple[Modifier, ...]) -> Tuple[Modifier, ...]:
        return canonical_modifiers(value)

    @field_validator("key")
    @classmethod
    def _normalize_key(cls, value: str) -> str:
        value = value.strip().upper()
        if not value:
            raise ValueError("key is empty")
        return value

    def __str__(self) -> str:
        return "+".join([*(mod.value for mod in self.modifiers), self.key])


class Keybinding(BaseModel):
    """One parsed bind directive. Edits replace the value via model_copy."""

    model_config = ConfigDict(frozen=True)

    key_combo: KeyCombo
    bind_kind: BindKind = BindKind.BIND
    dispatcher: str
    args: Optional[str] = None

    def display(self) -> str:
        """Human-readable form, e.g. ``bind = SUPER+SHIFT+K, exec, firefox``."""

        text = f"{self.bind_kind.value} = {self.key_combo}, {self.dispatcher}"
        if self.args is not None:
            text += f", {self.args}"
        return text

    def to_line(self) -> str:
        """Config directive form, e.g. ``bind = SUPER SHIFT, K, exec, firefox``."""

        mods = " ".join(mod.value for mod in self.key_combo.modifiers)
        parts: List[str] = [mods, self.key_combo.key, self.dispatcher]
        if self.args is not None:
            parts.append(self.args)
        return f"{self.bind_kind.value} = {', '.join(parts)}"

    def __str__(self) -> str:
        return self.display()
