"""
bsptile.config.keybindings - Keybindings por defecto del WM.

Define y registra los atajos:
    Tiling:
        Super + V           -> La proxima division apila arriba / abajo
        Super + O           -> La proxima division pone izquierda / derecha
        Super + T           -> Alternar el eje de la proxima division

    WM:
        Super + Shift + R   -> Retilear todo
"""

from __future__ import annotations

import logging

from bsptile.core.combo_parser import ComboParseError
from bsptile.core.commands import CommandDispatcher
from bsptile.core.keybinds import KeybindTable

log = logging.getLogger(__name__)


# combo -> (comando, descripcion)
DEFAULT_KEYBINDINGS: dict[str, tuple[str, str]] = {
    "super+v": ("split_vertical", "Split vertical"),
    "super+o": ("split_horizontal", "Split horizontal"),
    "super+t": ("toggle_split", "Toggle split axis"),
    "super+shift+r": ("retile", "Retile all"),
}


def register_all_keybindings(
    table: KeybindTable,
    dispatcher: CommandDispatcher,
    bindings: dict[str, tuple[str, str]] | None = None,
) -> int:
    """
    Registra los keybindings, vinculando cada combo a un comando del
    dispatcher. Los comandos desconocidos y los combos invalidos se
    omiten con un warning.

    Args:
        table:      Tabla donde registrar.
        dispatcher: Dispatcher con los comandos ya registrados.
        bindings:   Mapa combo -> (comando, descripcion). Por defecto
                    DEFAULT_KEYBINDINGS.

    Returns:
        Numero de keybindings registrados.
    """
    registered = 0
    for combo, (command, desc) in (bindings or DEFAULT_KEYBINDINGS).items():
        if not dispatcher.has(command):
            log.warning("Keybind %s: command %r not found, skipping", combo, command)
            continue
        try:
            table.bind(combo, command, desc)
        except ComboParseError as exc:
            log.warning("Keybind %s skipped: %s", combo, exc)
            continue
        registered += 1

    log.info("Keybindings registered: %d", registered)
    return registered
