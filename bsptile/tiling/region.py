"""
bsptile.tiling.region - Nodos del arbol de particion.

Cada region del arbol es una hoja (Leaf, ligada a una ventana) o una
division (Split, que parte su rectangulo en dos hijos a lo largo de un
eje). Los enlaces padre/hijo son ids enteros dentro del RegionArena,
nunca referencias directas entre objetos.
"""

from __future__ import annotations

import enum
from collections.abc import Hashable
from dataclasses import dataclass

from bsptile.tiling.rect import Axis, Rect

# Identidad opaca de una ventana: cualquier objeto hashable.
WindowId = Hashable


class Side(enum.Enum):
    """Posicion de una region respecto a su padre."""
    LEFT = "left"
    RIGHT = "right"
    ROOT = "root"

    @property
    def opposite(self) -> Side:
        """El otro hueco del padre. ROOT no tiene opuesto."""
        if self is Side.LEFT:
            return Side.RIGHT
        if self is Side.RIGHT:
            return Side.LEFT
        raise ValueError("La raiz no tiene hermano")


@dataclass(slots=True)
class Leaf:
    """
    Hoja del arbol: una ventana y su rectangulo.

    preferred_axis es el eje que se usara la proxima vez que esta hoja
    se divida; cambiarlo no altera ninguna geometria.
    """

    geometry: Rect
    preferred_axis: Axis
    parent: int | None
    side: Side
    window: WindowId


@dataclass(slots=True)
class Split:
    """Division: dos hijos que se reparten el rectangulo segun axis."""

    geometry: Rect
    parent: int | None
    side: Side
    axis: Axis
    left: int
    right: int

    def child(self, side: Side) -> int:
        if side is Side.LEFT:
            return self.left
        if side is Side.RIGHT:
            return self.right
        raise ValueError("Un Split solo tiene hijos LEFT y RIGHT")

    def set_child(self, side: Side, node: int) -> None:
        if side is Side.LEFT:
            self.left = node
        elif side is Side.RIGHT:
            self.right = node
        else:
            raise ValueError("Un Split solo tiene hijos LEFT y RIGHT")


Region = Leaf | Split
