"""
bsptile.config.settings - Valores por defecto del motor y del WM.

Son datos planos (strings y tuplas) para que este modulo pueda
importarse antes que el paquete de tiling.
"""

from __future__ import annotations

# Eje con el que se divide la primera ventana: "vertical" la parte en
# arriba / abajo, "horizontal" en izquierda / derecha.
DEFAULT_SPLIT_AXIS = "vertical"

# Area usada cuando el compositor no informa ningun output (x, y, w, h).
FALLBACK_OUTPUT: tuple[int, int, int, int] = (0, 0, 800, 800)

# Formato de log del entry point
LOG_FORMAT = "%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"
