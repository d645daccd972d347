from __future__ import annotations

from typing import Dict, Iterable, List

from pydantic import BaseModel

from .ir import KeyCombo, Keybinding


class Conflict(BaseModel):
    """Two or more bindings sharing one key combination."""

    key_combo: KeyCombo
    bindings: List[Keybinding]


class ConflictDetector:
    """Index bindings by normalized KeyCombo; lookups are O(1) on average."""

    def __init__(self) -> None:
        self._by_combo: Dict[KeyCombo, List[Keybinding]] = {}
        self._total = 0

    def add_binding(self, binding: Keybinding) -> None:
        self._by_combo.setdefault(binding.key_combo, []).append(binding)
        self._total += 1

    def extend(self, bindings: Iterable[Keybinding]) -> None:
        for binding in bindings:
            self.add_binding(binding)

    def bindings_for(self, combo: KeyCombo) -> List[Keybinding]:
        return list(self._by_combo.get(combo, ()))

    def has_binding(self, combo: KeyCombo) -> bool:
        return combo in self._by_combo

    def has_conflict(self, combo: KeyCombo) -> bool:
        return len(self._by_combo.get(combo, ())) > 1

    def find_conflicts(self) -> List[Conflict]:
        return [
            Conflict(key_combo=combo, bindings=list(bindings))
            for combo, bindings in self._by_combo.items()
            if len(bindings) > 1
        ]

    @property
    def total_bindings(self) -> int:
        return self._total

    def clear(self) -> None:
        self._by_combo.clear()
        self._total = 0


def find_conflicts(bindings: Iterable[Keybinding]) -> List[Conflict]:
    detector = ConflictDetector()
    detector.extend(bindings)
    return detector.find_conflicts()
