from __future__ import annotations

import pytest
from pydantic import ValidationError

from hypr_keys.binding.ir import BindKind, KeyCombo, Keybinding, Modifier


def test_key_combo_ignores_modifier_order() -> None:
    a = KeyCombo(modifiers=(Modifier.SHIFT, Modifier.SUPER), key="k")
    b = KeyCombo(modifiers=(Modifier.SUPER, Modifier.SHIFT), key="K")

    assert a == b
    assert hash(a) == hash(b)
    assert a.modifiers == (Modifier.SUPER, Modifier.SHIFT)
    assert a.key == "K"


def test_key_combo_drops_duplicate_modifiers() -> None:
    combo = KeyCombo(modifiers=(Modifier.ALT, Modifier.CTRL, Modifier.ALT), key="Tab")
    assert combo.modifiers == (Modifier.CTRL, Modifier.ALT)
    assert str(combo) == "CTRL+ALT+TAB"


def test_key_combo_rejects_empty_key() -> None:
    with pytest.raises(ValidationError):
        KeyCombo(key="  ")


def test_keybinding_renderings() -> None:
    binding = Keybinding(
        key_combo=KeyCombo(modifiers=(Modifier.SHIFT, Modifier.SUPER), key="K"),
        dispatcher="exec",
        args="firefox",
    )

    assert binding.display() == "bind = SUPER+SHIFT+K, exec, firefox"
    assert str(binding) == binding.display()
    assert binding.to_line() == "bind = SUPER SHIFT, K, exec, firefox"


def test_keybinding_without_modifiers_or_args() -> None:
    binding = Keybinding(
        key_combo=KeyCombo(key="Print"),
        bind_kind=BindKind.BINDL,
        dispatcher="killactive",
    )

    assert binding.display() == "bindl = PRINT, killactive"
    assert binding.to_line() == "bindl = , PRINT, killactive"


def test_keybinding_is_immutable() -> None:
    binding = Keybinding(key_combo=KeyCombo(key="Q"), dispatcher="killactive")

    with pytest.raises(ValidationError):
        binding.dispatcher = "exit"

    edited = binding.model_copy(update={"dispatcher": "exit"})
    assert edited.dispatcher == "exit"
    assert binding.dispatcher == "killactive"
