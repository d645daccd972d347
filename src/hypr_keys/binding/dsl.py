from __future__ import annotations

import re
from typing import List, Mapping, Optional, Tuple

from .ir import BindKind, KeyCombo, Keybinding, Modifier


_MODIFIER_ALIASES: dict[str, Modifier] = {
    "SUPER": Modifier.SUPER,
    "MOD4": Modifier.SUPER,
    "WIN": Modifier.SUPER,
    "CTRL": Modifier.CTRL,
    "CONTROL": Modifier.CTRL,
    "SHIFT": Modifier.SHIFT,
    "ALT": Modifier.ALT,
    "MOD1": Modifier.ALT,
}

# bindel before binde before bind: the keywords share prefixes.
_BIND_KEYWORDS: List[BindKind] = sorted(BindKind, key=lambda kind: len(kind.value), reverse=True)

_DISPATCHER_RE = re.compile(r"[A-Za-z0-9_]+")


class BindSyntaxError(ValueError):
    """Raised by the line grammar; the frontend attaches the line number."""


def collect_variables(content: str) -> dict[str, str]:
    """First pass: ``$name = value`` definitions, last one wins."""

    variables: dict[str, str] = {}
    for line in content.splitlines():
        line = line.strip()
        if not line.startswith("$") or "=" not in line:
            continue
        name, _, value = line[1:].partition("=")
        name = name.strip()
        if name:
            variables[name] = value.strip()
    return variables


def substitute_variables(line: str, variables: Mapping[str, str]) -> str:
    """Literal ``$name`` replacement; unknown variables are left as-is."""

    # Longest names first so $mod does not clobber the prefix of $modShift.
    for name in sorted(variables, key=len, reverse=True):
        line = line.replace(f"${name}", variables[name])
    return line


def is_bind_line(line: str) -> bool:
    return line.strip().startswith("bind")


def parse_bind_kind(text: str) -> Tuple[BindKind, str]:
    """Match the bind keyword and the ``=``; return the kind and the rest."""

    for kind in _BIND_KEYWORDS:
        if not text.startswith(kind.value):
            continue
        rest = text[len(kind.value):].lstrip()
        if rest.startswith("="):
            return kind, rest[1:]
    raise BindSyntaxError(f"expected one of {', '.join(k.value for k in BindKind)} followed by '='")


def parse_modifiers(text: str) -> Tuple[Modifier, ...]:
    """Parse ``SUPER_SHIFT`` / ``SUPER SHIFT`` / ``SUPER+SHIFT``; unknown tokens are dropped."""

    text = text.strip()
    if not text:
        return ()
    if "_" in text:
        tokens = text.split("_")
    else:
        tokens = text.replace("+", " ").split()

    mods: List[Modifier] = []
    for token in tokens:
        mod = _MODIFIER_ALIASES.get(token.strip().upper())
        if mod is not None:
            mods.append(mod)
    return tuple(mods)


def parse_bind_line(line: str) -> Keybinding:
    """Parse ``<kind> = <mods>, <key>, <dispatcher>[, <args>]`` (variables already substituted)."""

    kind, rest = parse_bind_kind(line.strip())

    fields = rest.split(",", 3)
    if len(fields) < 3:
        raise BindSyntaxError("expected '<modifiers>, <key>, <dispatcher>[, <args>]'")

    mods_text, key_text, dispatcher_text = fields[0], fields[1].strip(), fields[2].strip()
    if not key_text or len(key_text.split()) != 1:
        raise BindSyntaxError(f"invalid key field: {fields[1]!r}")
    if not _DISPATCHER_RE.fullmatch(dispatcher_text):
        raise BindSyntaxError(f"invalid dispatcher field: {fields[2]!r}")

    args: Optional[str] = None
    if len(fields) == 4:
        args = fields[3].strip() or None

    return Keybinding(
        key_combo=KeyCombo(modifiers=parse_modifiers(mods_text), key=key_text),
        bind_kind=kind,
        dispatcher=dispatcher_text,
        args=args,
    )
