"""
bsptile.core.keybinds - Tabla de keybindings del compositor.

El compositor pasa cada pulsacion de tecla por handle_key() antes de
reenviarla al cliente enfocado. Si la combinacion esta asociada a un
comando, el comando se ejecuta y la tecla se intercepta; si no, se
reenvia al cliente.

Uso tipico:
    table = KeybindTable(dispatcher)
    table.bind("super+v", "split_vertical")
    if not table.handle_key(Modifier.LOGO, "v"):
        forward_to_client(...)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from bsptile.core.combo_parser import (
    ComboParseError,
    Modifier,
    combo_to_str,
    normalize_key,
    parse_combo,
)
from bsptile.core.commands import CommandDispatcher

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Keybind:
    """A key combination bound to a dispatcher command."""

    modifiers: Modifier
    key: str
    command: str
    description: str

    @property
    def combo(self) -> str:
        return combo_to_str(self.modifiers, self.key)


class KeybindTable:
    """
    Maps (modifiers, key) pairs to command names.

    Binding the same combo twice replaces the previous binding
    (useful for hot-reload).
    """

    def __init__(self, dispatcher: CommandDispatcher) -> None:
        self._dispatcher = dispatcher
        self._binds: dict[tuple[Modifier, str], Keybind] = {}

    @property
    def count(self) -> int:
        return len(self._binds)

    @property
    def keybinds(self) -> list[Keybind]:
        return list(self._binds.values())

    def bind(self, combo: str, command: str, description: str = "") -> Keybind:
        """
        Bind a combo string to a command name.

        Args:
            combo:       Combo like "super+shift+r".
            command:     Name of a command in the dispatcher.
            description: Human-readable description.

        Returns:
            The new Keybind.

        Raises:
            ComboParseError: If the combo cannot be parsed.
        """
        modifiers, key = parse_combo(combo)
        keybind = Keybind(modifiers, key, command, description)

        old = self._binds.get((modifiers, key))
        if old is not None:
            log.info("Keybind replaced: %s (%s -> %s)", keybind.combo, old.command, command)

        self._binds[(modifiers, key)] = keybind
        log.debug("Keybind registered: %s -> %s", keybind.combo, command)
        return keybind

    def unbind(self, combo: str) -> bool:
        """Remove a binding. Returns True if it existed."""
        try:
            modifiers, key = parse_combo(combo)
        except ComboParseError:
            return False
        return self._binds.pop((modifiers, key), None) is not None

    def find(self, modifiers: Modifier, key: str) -> Keybind | None:
        """Look up the binding for a pressed combination."""
        canonical = normalize_key(key)
        if canonical is None:
            return None
        return self._binds.get((Modifier(modifiers), canonical))

    def handle_key(self, modifiers: Modifier, key: str) -> bool:
        """
        Process a key press.

        Returns:
            True if the key was intercepted (a bound command ran or was
            attempted), False if it should be forwarded to the client.
        """
        keybind = self.find(modifiers, key)
        if keybind is None:
            return False

        log.debug("Keybind matched: %s -> %s", keybind.combo, keybind.command)
        self._dispatcher.execute(keybind.command)
        return True

    def dump_state(self) -> str:
        """Return a formatted string of all bindings."""
        lines = [
            f"=== KeybindTable: {len(self._binds)} bindings ===",
            "",
        ]
        for kb in self._binds.values():
            desc = f"  {kb.description}" if kb.description else ""
            lines.append(f"  {kb.combo:<20s} {kb.command}{desc}")
        return "\n".join(lines)
