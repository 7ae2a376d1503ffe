"""
bsptile.tiling.arena - Almacen de regiones direccionadas por id.

Todas las regiones del arbol viven en una unica tabla de slots. Un id
es el indice del slot; liberar un slot lo deja disponible para la
siguiente reserva (se reutiliza el ultimo liberado primero).
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from bsptile.tiling.region import Region

log = logging.getLogger(__name__)


class RegionArena:
    """Tabla de slots de regiones con lista de huecos libres."""

    def __init__(self) -> None:
        self._slots: list[Region | None] = []
        self._free: list[int] = []

    def __len__(self) -> int:
        """Numero de regiones vivas."""
        return len(self._slots) - len(self._free)

    def __contains__(self, node: object) -> bool:
        return (
            isinstance(node, int)
            and 0 <= node < len(self._slots)
            and self._slots[node] is not None
        )

    @property
    def capacity(self) -> int:
        """Numero total de slots (vivos + libres)."""
        return len(self._slots)

    def alloc(self, region: Region) -> int:
        """Guarda *region* y retorna su id."""
        if self._free:
            node = self._free.pop()
            self._slots[node] = region
        else:
            node = len(self._slots)
            self._slots.append(region)
        log.debug("ARENA alloc #%d %s", node, type(region).__name__)
        return node

    def free(self, node: int) -> Region:
        """Libera el slot *node* y retorna la region que contenia."""
        region = self.get(node)
        self._slots[node] = None
        self._free.append(node)
        log.debug("ARENA free #%d %s", node, type(region).__name__)
        return region

    def get(self, node: int) -> Region:
        """
        Retorna la region con id *node*.

        Raises:
            KeyError: Si el id no corresponde a una region viva.
        """
        if node not in self:
            raise KeyError(node)
        region = self._slots[node]
        assert region is not None
        return region

    def ids(self) -> Iterator[int]:
        """Itera los ids vivos en orden creciente."""
        for node, region in enumerate(self._slots):
            if region is not None:
                yield node

    def clear(self) -> None:
        self._slots.clear()
        self._free.clear()
