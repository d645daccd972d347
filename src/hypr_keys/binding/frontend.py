from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from hypr_keys.errors import ParseError

from .dsl import collect_variables, parse_bind_line, substitute_variables
from .ir import Keybinding


_LOGGER = logging.getLogger(__name__)


class BindingFrontend:
    """Parse compositor config text into Keybinding values."""

    def load_text(self, path: str | Path) -> str:
        """Read a config file without newline translation."""

        path = Path(path)
        with path.open("r", encoding="utf-8", newline="") as fh:
            return fh.read()

    def parse_config(self, content: str) -> List[Keybinding]:
        variables = collect_variables(content)

        bindings: List[Keybinding] = []
        for line_no, line in enumerate(content.splitlines(), start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if not line.startswith("bind"):
                continue

            substituted = substitute_variables(line, variables)
            try:
                bindings.append(parse_bind_line(substituted))
            except ValueError as exc:
                raise ParseError(line_no, str(exc)) from exc

        _LOGGER.debug(
            "Parsed %d bindings (%d variables)", len(bindings), len(variables)
        )
        return bindings


def parse_config(content: str) -> List[Keybinding]:
    """Module-level shortcut for ``BindingFrontend().parse_config``."""

    return BindingFrontend().parse_config(content)
