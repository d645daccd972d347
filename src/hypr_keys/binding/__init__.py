from __future__ import annotations

from .conflict import Conflict, ConflictDetector, find_conflicts
from .dsl import collect_variables, parse_bind_line, parse_modifiers, substitute_variables
from .frontend import BindingFrontend, parse_config
from .ir import BindKind, KeyCombo, Keybinding, Modifier

__all__ = [
    "BindKind",
    "BindingFrontend",
    "Conflict",
    "ConflictDetector",
    "KeyCombo",
    "Keybinding",
    "Modifier",
    "collect_variables",
    "find_conflicts",
    "parse_bind_line",
    "parse_config",
    "parse_modifiers",
    "substitute_variables",
]
