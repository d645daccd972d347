"""Layer 1: allow-list validation that keeps shell syntax out of bindings.

Dispatchers and keys are checked against what is known to be good; only the
argument text is scanned for known-bad shell syntax.
"""

from __future__ import annotations

import re
from typing import List

from hypr_keys.binding.ir import Keybinding
from hypr_keys.errors import (
    ArgumentTooLong,
    InvalidDispatcher,
    InvalidKey,
    ShellMetacharacters,
)

MAX_ARGUMENT_LENGTH = 1000

ALLOWED_DISPATCHERS = frozenset(
    {
        "exec",
        "execr",
        "killactive",
        "closewindow",
        "workspace",
        "movetoworkspace",
        "movetoworkspacesilent",
        "togglefloating",
        "fullscreen",
        "pseudo",
        "pin",
        "movefocus",
        "movewindow",
        "swapwindow",
        "centerwindow",
        "resizeactive",
        "moveactive",
        "cyclenext",
        "focuswindow",
        "focusmonitor",
        "splitratio",
        "toggleopaque",
        "movecursortocorner",
        "workspaceopt",
        "exit",
        "forcerendererreload",
        "movecurrentworkspacetomonitor",
        "focusurgentorlast",
        "togglespecialworkspace",
        "togglegroup",
        "changegroupactive",
        "moveintogroup",
        "moveoutofgroup",
        "lockgroups",
        "lockactivegroup",
        "movegroupwindow",
        "pass",
        "sendshortcut",
        "layoutmsg",
        "dpms",
        "submap",
        "global",
        "togglesplit",
    }
)

SPECIAL_KEYS = frozenset(
    {
        "RETURN",
        "ESCAPE",
        "SPACE",
        "TAB",
        "BACKSPACE",
        "DELETE",
        "INSERT",
        "HOME",
        "END",
        "PRIOR",
        "NEXT",
        "LEFT",
        "RIGHT",
        "UP",
        "DOWN",
        "PRINT",
        "MOUSE_UP",
        "MOUSE_DOWN",
        "MOUSE_LEFT",
        "MOUSE_RIGHT",
    }
)

SHELL_METACHARACTERS = (";", "&&", "||", "|", "`", "$(", ">", "<", "\n", "\r")

_KEY_RE = re.compile(r"[A-Za-z0-9_]+")
_MOUSE_BUTTON_RE = re.compile(r"MOUSE:\d+", re.IGNORECASE)


def validate_dispatcher(name: str) -> None:
    if name.lower() not in ALLOWED_DISPATCHERS:
        raise InvalidDispatcher(name)


def validate_key(key: str) -> None:
    if _KEY_RE.fullmatch(key):
        return
    if key.upper() in SPECIAL_KEYS or _MOUSE_BUTTON_RE.fullmatch(key):
        return
    raise InvalidKey(key)


def find_shell_metacharacters(text: str) -> List[str]:
    return [token for token in SHELL_METACHARACTERS if token in text]


def check_shell_metacharacters(text: str) -> None:
    found = find_shell_metacharacters(text)
    if found:
        raise ShellMetacharacters(found)


def validate_keybinding(binding: Keybinding) -> None:
    """Raise the SecurityViolation subclass for the first failing check."""

    validate_dispatcher(binding.dispatcher)
    validate_key(binding.key_combo.key)

    if binding.args is not None:
        if len(binding.args) > MAX_ARGUMENT_LENGTH:
            raise ArgumentTooLong(len(binding.args), MAX_ARGUMENT_LENGTH)
        check_shell_metacharacters(binding.args)
