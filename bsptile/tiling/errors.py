"""
bsptile.tiling.errors - Errores del motor de tiling.

Todos son errores de uso (contrato violado por quien llama), nunca
fallos internos: una operacion que lanza cualquiera de ellos deja el
arbol exactamente como estaba.
"""

from __future__ import annotations

from collections.abc import Hashable


class TilingError(Exception):
    """Base de todos los errores del motor de tiling."""


class AlreadyInitialized(TilingError):
    """insert_root() sobre un arbol que ya tiene raiz."""

    def __init__(self) -> None:
        super().__init__("El arbol de tiling ya tiene raiz")


class WindowNotFound(TilingError, LookupError):
    """La ventana no esta en el indice de ventanas."""

    def __init__(self, window: Hashable) -> None:
        super().__init__(f"Ventana no gestionada: {window!r}")
        self.window = window


class WindowAlreadyTiled(TilingError):
    """La ventana ya ocupa una hoja del arbol."""

    def __init__(self, window: Hashable) -> None:
        super().__init__(f"Ventana ya gestionada: {window!r}")
        self.window = window


class NotAttached(TilingError):
    """update_geometry() sobre un nodo que no pertenece al arbol."""

    def __init__(self, node: int | None) -> None:
        super().__init__(f"Region no enlazada al arbol: {node!r}")
        self.node = node


class InvariantViolation(TilingError):
    """verify() encontro un arbol inconsistente."""
