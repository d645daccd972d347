from __future__ import annotations

import pytest

from hypr_keys.binding.dsl import (
    collect_variables,
    parse_bind_line,
    parse_modifiers,
    substitute_variables,
)
from hypr_keys.binding.frontend import BindingFrontend, parse_config
from hypr_keys.binding.ir import BindKind, KeyCombo, Modifier
from hypr_keys.errors import ParseError


SAMPLE_CONFIG = """\
# Hyprland keybindings
$mod = SUPER
$modShift = SUPER SHIFT
$term = kitty

general {
    gaps_in = 5
}

bind = $mod, Return, exec, $term
bind = $modShift, Q, killactive
# bind = $mod, X, exec, commented-out
binde = , XF86AudioRaiseVolume, exec, wpctl set-volume @DEFAULT_AUDIO_SINK@ 5%+
bindm = $mod, mouse:272, movewindow
"""


def test_parse_config_basic() -> None:
    bindings = parse_config(SAMPLE_CONFIG)

    assert len(bindings) == 4

    term = bindings[0]
    assert term.key_combo == KeyCombo(modifiers=(Modifier.SUPER,), key="RETURN")
    assert term.dispatcher == "exec"
    assert term.args == "kitty"

    # $modShift must not be clobbered by the shorter $mod
    kill = bindings[1]
    assert kill.key_combo.modifiers == (Modifier.SUPER, Modifier.SHIFT)
    assert kill.args is None

    volume = bindings[2]
    assert volume.bind_kind is BindKind.BINDE
    assert volume.key_combo.modifiers == ()
    assert volume.args == "wpctl set-volume @DEFAULT_AUDIO_SINK@ 5%+"

    mouse = bindings[3]
    assert mouse.bind_kind is BindKind.BINDM
    assert mouse.key_combo.key == "MOUSE:272"


def test_collect_variables_last_definition_wins() -> None:
    variables = collect_variables("$mod = SUPER\n$mod = ALT\n$ignored\n")
    assert variables == {"mod": "ALT"}


def test_substitute_unknown_variable_left_verbatim() -> None:
    line = substitute_variables("bind = $mod, K, exec, $browser", {"mod": "SUPER"})
    assert line == "bind = SUPER, K, exec, $browser"


def test_longest_keyword_wins() -> None:
    binding = parse_bind_line("bindel=,XF86MonBrightnessUp,exec,brightnessctl s 5%+")
    assert binding.bind_kind is BindKind.BINDEL
    assert binding.key_combo.key == "XF86MONBRIGHTNESSUP"

    binding = parse_bind_line("bindr = SUPER, SUPER_L, exec, rofi")
    assert binding.bind_kind is BindKind.BINDR


@pytest.mark.parametrize(
    "text",
    ["MOD4_CONTROL", "SUPER CTRL", "super+ctrl", "WIN CONTROL", "CTRL_SUPER"],
)
def test_modifier_aliases_and_joiners(text: str) -> None:
    assert set(parse_modifiers(text)) == {Modifier.SUPER, Modifier.CTRL}


def test_unknown_modifier_tokens_are_dropped() -> None:
    assert parse_modifiers("SUPER HYPER") == (Modifier.SUPER,)
    assert parse_modifiers("   ") == ()


def test_args_keep_embedded_commas() -> None:
    binding = parse_bind_line('bind = SUPER, N, exec, notify-send "a, b", c')
    assert binding.args == 'notify-send "a, b", c'


def test_empty_args_become_none() -> None:
    binding = parse_bind_line("bind = SUPER, F, fullscreen,   ")
    assert binding.args is None


def test_parse_error_reports_line_number() -> None:
    content = "$mod = SUPER\n\nbind = $mod, K\nbind = $mod, Q, killactive\n"

    with pytest.raises(ParseError) as excinfo:
        parse_config(content)

    assert excinfo.value.line == 3
    assert "line 3" in str(excinfo.value)


@pytest.mark.parametrize(
    "line",
    [
        "bind SUPER, K, exec, kitty",
        "bind = SUPER, , exec, kitty",
        "bind = SUPER, K K, exec, kitty",
        "bind = SUPER, K, exec kitty",
        "bindx = SUPER, K, exec, kitty",
    ],
)
def test_malformed_lines_abort_the_parse(line: str) -> None:
    with pytest.raises(ParseError):
        parse_config(f"# header\n{line}\n")


def test_round_trip_through_to_line() -> None:
    for binding in parse_config(SAMPLE_CONFIG):
        assert parse_bind_line(binding.to_line()) == binding


def test_load_text_keeps_line_endings(tmp_path) -> None:
    path = tmp_path / "hyprland.conf"
    path.write_bytes(b"bind = SUPER, Q, killactive\r\n")

    frontend = BindingFrontend()
    text = frontend.load_text(path)

    assert text == "bind = SUPER, Q, killactive\r\n"
    assert frontend.parse_config(text)[0].dispatcher == "killactive"
