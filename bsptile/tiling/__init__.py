"""
bsptile.tiling - Motor de tiling por particion binaria del espacio.

Este paquete contiene:
    - rect         : Rect y Axis, geometria y division por la mitad
    - region       : Side, Leaf y Split, los nodos del arbol
    - arena        : RegionArena, tabla de regiones direccionadas por id
    - window_index : WindowIndex, ventana -> hoja
    - errors       : Errores de uso del motor
    - engine       : TilingEngine, las operaciones del layout
"""

from bsptile.tiling.rect import Axis, Rect
from bsptile.tiling.region import Leaf, Region, Side, Split, WindowId
from bsptile.tiling.arena import RegionArena
from bsptile.tiling.window_index import WindowIndex
from bsptile.tiling.errors import (
    AlreadyInitialized,
    InvariantViolation,
    NotAttached,
    TilingError,
    WindowAlreadyTiled,
    WindowNotFound,
)
from bsptile.tiling.engine import Assignment, TilingEngine

__all__ = [
    "Axis",
    "Rect",
    "Side",
    "Leaf",
    "Split",
    "Region",
    "WindowId",
    "RegionArena",
    "WindowIndex",
    "TilingError",
    "AlreadyInitialized",
    "WindowNotFound",
    "WindowAlreadyTiled",
    "NotAttached",
    "InvariantViolation",
    "Assignment",
    "TilingEngine",
]
