"""
bsptile - Motor de tiling por particion binaria para un compositor.

Subpaquetes:
    - tiling : El arbol de particion y sus operaciones (TilingEngine)
    - core   : WindowManager, comandos y keybindings
    - config : Valores y atajos por defecto
"""

from bsptile.tiling import (
    AlreadyInitialized,
    Axis,
    NotAttached,
    Rect,
    Side,
    TilingEngine,
    TilingError,
    WindowAlreadyTiled,
    WindowNotFound,
)
from bsptile.core import WindowManager, WMEvent

__version__ = "0.1.0"

__all__ = [
    "Axis",
    "Rect",
    "Side",
    "TilingEngine",
    "TilingError",
    "AlreadyInitialized",
    "WindowNotFound",
    "WindowAlreadyTiled",
    "NotAttached",
    "WindowManager",
    "WMEvent",
]
