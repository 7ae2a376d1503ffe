"""
bsptile.tiling.rect - Estructura geometrica Rect y eje de division.

Define un rectangulo inmutable que representa un area de la salida.
Se usa tanto para el area completa del output como para la region
asignada a cada ventana dentro del arbol de particion.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Axis(enum.Enum):
    """
    Direccion en la que se divide una region.

    HORIZONTAL divide el ancho (hijos a izquierda / derecha).
    VERTICAL divide el alto (hijos arriba / abajo).
    """
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @property
    def other(self) -> Axis:
        """El eje perpendicular."""
        return Axis.VERTICAL if self is Axis.HORIZONTAL else Axis.HORIZONTAL


@dataclass(frozen=True, slots=True)
class Rect:
    """
    Rectangulo inmutable definido por posicion (x, y) y dimensiones (w, h).

    Las coordenadas son logicas (antes de aplicar la escala del output).
    El ancho y el alto nunca son negativos; un tamano 0 es valido.

    Atributos:
        x: Coordenada horizontal de la esquina superior-izquierda.
        y: Coordenada vertical de la esquina superior-izquierda.
        w: Ancho.
        h: Alto.
    """

    x: int
    y: int
    w: int
    h: int

    def __post_init__(self) -> None:
        if self.w < 0 or self.h < 0:
            raise ValueError(f"Rect con tamano negativo: {self.w}x{self.h}")

    # ------------------------------------------------------------------
    # Propiedades derivadas
    # ------------------------------------------------------------------
    @property
    def right(self) -> int:
        return self.x + self.w

    @property
    def bottom(self) -> int:
        return self.y + self.h

    @property
    def area(self) -> int:
        return self.w * self.h

    @property
    def is_degenerate(self) -> bool:
        """True si el ancho o el alto es 0."""
        return self.w == 0 or self.h == 0

    # ------------------------------------------------------------------
    # Operaciones geometricas
    # ------------------------------------------------------------------
    def halve(self, axis: Axis) -> tuple[Rect, Rect]:
        """
        Divide el rectangulo en dos mitades a lo largo de *axis*.

        HORIZONTAL divide el ancho (izquierda / derecha); VERTICAL divide
        el alto (arriba / abajo). La primera mitad recibe la division
        entera y la segunda el resto, de modo que el pixel impar siempre
        queda en la segunda.

        Args:
            axis: Eje de division.

        Returns:
            Tupla (primera, segunda).
        """
        if axis is Axis.HORIZONTAL:
            first_w = self.w // 2
            first = Rect(self.x, self.y, first_w, self.h)
            second = Rect(self.x + first_w, self.y, self.w - first_w, self.h)
        else:
            first_h = self.h // 2
            first = Rect(self.x, self.y, self.w, first_h)
            second = Rect(self.x, self.y + first_h, self.w, self.h - first_h)
        return first, second

    def contains_rect(self, other: Rect) -> bool:
        """True si *other* cabe completamente dentro de este rectangulo."""
        return (
            self.x <= other.x
            and self.y <= other.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )

    # ------------------------------------------------------------------
    # Conversiones
    # ------------------------------------------------------------------
    def to_tuple(self) -> tuple[int, int, int, int]:
        """Retorna (x, y, w, h)."""
        return (self.x, self.y, self.w, self.h)

    @classmethod
    def from_ltrb(cls, left: int, top: int, right: int, bottom: int) -> Rect:
        """Crea un Rect desde coordenadas (left, top, right, bottom)."""
        return cls(left, top, right - left, bottom - top)

    # ------------------------------------------------------------------
    # Representacion
    # ------------------------------------------------------------------
    def __str__(self) -> str:
        return f"Rect({self.w}x{self.h}+{self.x}+{self.y})"
