"""
bsptile.tiling.window_index - Indice ventana -> hoja.

Mantiene la correspondencia uno a uno entre cada ventana gestionada y
el id de la hoja que la contiene. El TilingEngine lo actualiza en la
misma operacion que modifica el arbol.
"""

from __future__ import annotations

import logging

from bsptile.tiling.errors import WindowAlreadyTiled, WindowNotFound
from bsptile.tiling.region import WindowId

log = logging.getLogger(__name__)


class WindowIndex:
    """Mapa de ventana a id de hoja. Las claves son unicas."""

    def __init__(self) -> None:
        self._leaves: dict[WindowId, int] = {}

    def __len__(self) -> int:
        return len(self._leaves)

    def __contains__(self, window: object) -> bool:
        try:
            return window in self._leaves
        except TypeError:
            # Objetos no hashables nunca estan en el indice
            return False

    def add(self, window: WindowId, leaf: int) -> None:
        """
        Registra *window* en la hoja *leaf*.

        Raises:
            WindowAlreadyTiled: Si la ventana ya estaba registrada.
        """
        if window in self._leaves:
            raise WindowAlreadyTiled(window)
        self._leaves[window] = leaf

    def remove(self, window: WindowId) -> int:
        """
        Elimina *window* del indice y retorna el id de su hoja.

        Raises:
            WindowNotFound: Si la ventana no estaba registrada.
        """
        try:
            return self._leaves.pop(window)
        except KeyError:
            raise WindowNotFound(window) from None

    def get(self, window: WindowId) -> int:
        """
        Retorna el id de la hoja de *window*.

        Raises:
            WindowNotFound: Si la ventana no esta registrada.
        """
        try:
            return self._leaves[window]
        except KeyError:
            raise WindowNotFound(window) from None

    def windows(self) -> list[WindowId]:
        """Ventanas registradas, en orden de insercion."""
        return list(self._leaves)

    def items(self) -> list[tuple[WindowId, int]]:
        return list(self._leaves.items())

    def clear(self) -> None:
        self._leaves.clear()
