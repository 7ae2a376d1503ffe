"""
bsptile.tiling.engine - Motor de tiling por particion binaria del espacio.

El TilingEngine mantiene un arbol binario de regiones: cada hoja es una
ventana y cada division parte su rectangulo en dos mitades a lo largo
de un eje. Cuando llega una ventana nueva se divide la hoja de la
ventana enfocada; cuando una ventana se cierra su hermano ocupa el
espacio del padre.

Responsabilidades:
    - Crear la raiz con el area del output (insert_root).
    - Dividir una hoja para alojar una ventana nueva (split).
    - Eliminar una hoja promoviendo a su hermano (destroy).
    - Cambiar el eje preferido de una hoja (change_axis).
    - Repartir de nuevo la geometria de un subarbol (update_geometry).
    - Entregar las asignaciones (ventana, Rect) de un subarbol
      (collect_assignments) para que el compositor las aplique.

El engine no mueve ventanas: solo calcula. Quien llama recibe copias
de la geometria, nunca referencias al arbol.
"""

from __future__ import annotations

import dataclasses
import logging

from bsptile.config.settings import DEFAULT_SPLIT_AXIS
from bsptile.tiling.arena import RegionArena
from bsptile.tiling.errors import (
    AlreadyInitialized,
    InvariantViolation,
    NotAttached,
    WindowAlreadyTiled,
)
from bsptile.tiling.rect import Axis, Rect
from bsptile.tiling.region import Leaf, Region, Side, Split, WindowId
from bsptile.tiling.window_index import WindowIndex

log = logging.getLogger(__name__)

# Asignacion entregada al compositor
Assignment = tuple[WindowId, Rect]


class TilingEngine:
    """
    Arbol de particion binaria y su indice de ventanas.

    Todas las operaciones validan sus argumentos antes de tocar el arbol:
    si lanzan un TilingError el estado queda intacto.

    Uso tipico:
        engine = TilingEngine()
        engine.insert_root("a", Rect(0, 0, 1000, 800))
        node = engine.split("a", "b")
        for window, rect in engine.collect_assignments(node):
            ...
    """

    def __init__(self, default_axis: Axis | str = DEFAULT_SPLIT_AXIS) -> None:
        """
        Inicializa un arbol vacio.

        Args:
            default_axis: Eje preferido de la hoja raiz, es decir, el eje
                          de la primera division.
        """
        self._arena = RegionArena()
        self._index = WindowIndex()
        self._root: int | None = None
        self._default_axis = Axis(default_axis)

    # ------------------------------------------------------------------
    # Propiedades
    # ------------------------------------------------------------------
    @property
    def root(self) -> int | None:
        """Id de la region raiz, o None si el arbol esta vacio."""
        return self._root

    @property
    def is_empty(self) -> bool:
        return self._root is None

    @property
    def window_count(self) -> int:
        return len(self._index)

    @property
    def windows(self) -> list[WindowId]:
        """Ventanas gestionadas, en orden de insercion."""
        return self._index.windows()

    @property
    def default_axis(self) -> Axis:
        return self._default_axis

    def contains(self, window: WindowId) -> bool:
        return window in self._index

    def leaf_of(self, window: WindowId) -> int:
        """Id de la hoja de *window*. Lanza WindowNotFound."""
        return self._index.get(window)

    def geometry_of(self, window: WindowId) -> Rect:
        return self._leaf(self._index.get(window)).geometry

    def preferred_axis_of(self, window: WindowId) -> Axis:
        return self._leaf(self._index.get(window)).preferred_axis

    def region(self, node: int) -> Region:
        """
        Retorna una copia de la region *node*.

        Raises:
            NotAttached: Si el id no pertenece al arbol.
        """
        return dataclasses.replace(self._get(node))

    def find_sibling(self, window: WindowId) -> int | None:
        """Id del hermano de la hoja de *window*, o None si es la raiz."""
        leaf = self._leaf(self._index.get(window))
        if leaf.parent is None:
            return None
        return self._split(leaf.parent).child(leaf.side.opposite)

    # ------------------------------------------------------------------
    # Operaciones estructurales
    # ------------------------------------------------------------------
    def insert_root(self, window: WindowId, geometry: Rect) -> int:
        """
        Crea la hoja raiz para *window* ocupando *geometry*.

        Args:
            window:   Primera ventana del arbol.
            geometry: Area del output.

        Returns:
            Id de la hoja creada.

        Raises:
            AlreadyInitialized: Si el arbol ya tiene raiz.
            TypeError:          Si *geometry* no es un Rect.
        """
        if self._root is not None:
            raise AlreadyInitialized()
        hash(window)
        self._check_rect(geometry)

        node = self._arena.alloc(
            Leaf(
                geometry=geometry,
                preferred_axis=self._default_axis,
                parent=None,
                side=Side.ROOT,
                window=window,
            )
        )
        self._index.add(window, node)
        self._root = node

        log.info("TILE ROOT %r -> %s", window, geometry)
        return node

    def split(self, target_window: WindowId, new_window: WindowId) -> int:
        """
        Divide la hoja de *target_window* para alojar *new_window*.

        La hoja original pasa a ser el hijo LEFT (primera mitad segun su
        eje preferido) de un Split nuevo que ocupa su lugar en el arbol;
        la ventana nueva ocupa el hijo RIGHT y hereda el eje preferido.

        Returns:
            Id del Split creado. Su subarbol contiene todas las
            geometrias que cambiaron.

        Raises:
            WindowNotFound:     Si *target_window* no esta en el arbol.
            WindowAlreadyTiled: Si *new_window* ya esta en el arbol.
        """
        leaf_id = self._index.get(target_window)
        if new_window in self._index:
            raise WindowAlreadyTiled(new_window)
        hash(new_window)

        leaf = self._leaf(leaf_id)
        axis = leaf.preferred_axis
        first, second = leaf.geometry.halve(axis)

        split = Split(
            geometry=leaf.geometry,
            parent=leaf.parent,
            side=leaf.side,
            axis=axis,
            left=leaf_id,
            right=leaf_id,
        )
        split_id = self._arena.alloc(split)
        split.right = self._arena.alloc(
            Leaf(
                geometry=second,
                preferred_axis=axis,
                parent=split_id,
                side=Side.RIGHT,
                window=new_window,
            )
        )

        self._replace_child(leaf.parent, leaf.side, split_id)
        leaf.geometry = first
        leaf.parent = split_id
        leaf.side = Side.LEFT
        self._index.add(new_window, split.right)

        if first.is_degenerate or second.is_degenerate:
            log.warning("TILE SPLIT degenerado en %s (%s)", split.geometry, axis.value)
        log.info(
            "TILE SPLIT [%s] %r -> %s | %r -> %s",
            axis.value,
            target_window,
            first,
            new_window,
            second,
        )
        return split_id

    def change_axis(self, window: WindowId, axis: Axis | str) -> None:
        """
        Cambia el eje con el que se dividira la hoja de *window*.

        Solo afecta a la proxima division; no cambia ninguna geometria.

        Raises:
            WindowNotFound: Si la ventana no esta en el arbol.
            ValueError:     Si *axis* no es un eje valido.
        """
        leaf = self._leaf(self._index.get(window))
        axis = Axis(axis)
        leaf.preferred_axis = axis
        log.info("TILE AXIS %r -> %s", window, axis.value)

    def destroy(self, window: WindowId) -> int | None:
        """
        Elimina la hoja de *window* y promueve a su hermano.

        El hermano hereda la geometria, el padre y el lado del Split que
        los contenia, y ese Split desaparece del arbol. Si el hermano es
        a su vez un Split, su subarbol se reparte de nuevo.

        Returns:
            Id del hermano promovido (la region mas alta cuya geometria
            cambio), o None si el arbol quedo vacio.

        Raises:
            WindowNotFound: Si la ventana no esta en el arbol.
        """
        leaf_id = self._index.get(window)
        leaf = self._leaf(leaf_id)
        self._index.remove(window)

        if leaf.side is Side.ROOT:
            self._arena.free(leaf_id)
            self._root = None
            log.info("TILE DESTROY %r (arbol vacio)", window)
            return None

        assert leaf.parent is not None
        parent_id = leaf.parent
        parent = self._split(parent_id)
        sibling_id = parent.child(leaf.side.opposite)
        sibling = self._arena.get(sibling_id)

        sibling.geometry = parent.geometry
        sibling.parent = parent.parent
        sibling.side = parent.side
        self._replace_child(parent.parent, parent.side, sibling_id)

        self._arena.free(leaf_id)
        self._arena.free(parent_id)

        if isinstance(sibling, Split):
            self.update_geometry(sibling_id)

        log.info("TILE DESTROY %r | region #%d -> %s", window, sibling_id, sibling.geometry)
        return sibling_id

    # ------------------------------------------------------------------
    # Geometria
    # ------------------------------------------------------------------
    def update_geometry(self, node: int, new_geometry: Rect | None = None) -> None:
        """
        Reparte la geometria del subarbol con raiz en *node*.

        Si se da *new_geometry* se asigna primero a *node*. Cada Split
        divide su rectangulo por la mitad segun su eje (la primera mitad
        por division entera, la segunda el resto) y asigna las mitades a
        sus hijos. Es idempotente: el resultado solo depende del
        rectangulo y los ejes del subarbol.

        Raises:
            NotAttached: Si *node* no pertenece al arbol.
            TypeError:   Si *new_geometry* no es un Rect.
        """
        region = self._get(node)
        if new_geometry is not None:
            self._check_rect(new_geometry)
            region.geometry = new_geometry

        # Pila explicita: la profundidad del arbol no consume stack de Python
        pending = [node]
        count = 0
        while pending:
            current = self._arena.get(pending.pop())
            count += 1
            if isinstance(current, Leaf):
                continue
            first, second = current.geometry.halve(current.axis)
            self._arena.get(current.left).geometry = first
            self._arena.get(current.right).geometry = second
            pending.append(current.right)
            pending.append(current.left)

        log.debug("TILE GEOMETRY #%d -> %s (%d regiones)", node, region.geometry, count)

    def resize_output(self, geometry: Rect) -> int:
        """
        Aplica un nuevo area de output a todo el arbol.

        Returns:
            Id de la raiz.

        Raises:
            NotAttached: Si el arbol esta vacio.
        """
        if self._root is None:
            raise NotAttached(None)
        self.update_geometry(self._root, geometry)
        log.info("TILE OUTPUT -> %s", geometry)
        return self._root

    def collect_assignments(self, node: int | None = None) -> list[Assignment]:
        """
        Retorna (ventana, Rect) para cada hoja del subarbol de *node*.

        Si *node* es None recorre el arbol completo (vacio -> lista vacia).
        El orden es en profundidad, hijo izquierdo antes que el derecho.

        Raises:
            NotAttached: Si *node* no pertenece al arbol.
        """
        if node is None:
            if self._root is None:
                return []
            node = self._root
        self._get(node)

        assignments: list[Assignment] = []
        pending = [node]
        while pending:
            current = self._arena.get(pending.pop())
            if isinstance(current, Leaf):
                assignments.append((current.window, current.geometry))
            else:
                pending.append(current.right)
                pending.append(current.left)
        return assignments

    # ------------------------------------------------------------------
    # Verificacion / debug
    # ------------------------------------------------------------------
    def verify(self) -> None:
        """
        Comprueba todos los invariantes del arbol.

        Raises:
            InvariantViolation: Con la primera inconsistencia encontrada.
        """
        if self._root is None:
            if len(self._arena) or len(self._index):
                raise InvariantViolation(
                    f"Arbol vacio con {len(self._arena)} regiones "
                    f"y {len(self._index)} ventanas"
                )
            return

        root = self._get(self._root)
        if root.side is not Side.ROOT or root.parent is not None:
            raise InvariantViolation(f"Raiz #{self._root} con side={root.side} parent={root.parent}")

        seen: set[int] = set()
        leaves = 0
        pending = [self._root]
        while pending:
            node = pending.pop()
            if node in seen:
                raise InvariantViolation(f"Region #{node} alcanzada dos veces")
            seen.add(node)
            region = self._arena.get(node)

            if isinstance(region, Leaf):
                leaves += 1
                if region.window not in self._index or self._index.get(region.window) != node:
                    raise InvariantViolation(
                        f"Indice de {region.window!r} no apunta a la hoja #{node}"
                    )
                continue

            if region.left == region.right:
                raise InvariantViolation(f"Split #{node} con un solo hijo")
            expected = region.geometry.halve(region.axis)
            for side, child_id, rect in (
                (Side.LEFT, region.left, expected[0]),
                (Side.RIGHT, region.right, expected[1]),
            ):
                if child_id not in self._arena:
                    raise InvariantViolation(f"Split #{node} apunta a #{child_id} inexistente")
                child = self._arena.get(child_id)
                if child.parent != node or child.side is not side:
                    raise InvariantViolation(
                        f"Region #{child_id} con parent={child.parent} side={child.side}, "
                        f"esperado parent={node} side={side}"
                    )
                if child.geometry != rect:
                    raise InvariantViolation(
                        f"Region #{child_id} con geometria {child.geometry}, esperado {rect}"
                    )
                pending.append(child_id)

        if len(seen) != len(self._arena):
            raise InvariantViolation(
                f"{len(self._arena) - len(seen)} regiones fuera del arbol"
            )
        if leaves != len(self._index):
            raise InvariantViolation(
                f"{leaves} hojas pero {len(self._index)} ventanas en el indice"
            )

    def dump_state(self) -> str:
        """Retorna el arbol como texto indentado."""
        lines = [
            "=== TilingEngine ===",
            f"    Ventanas: {len(self._index)}",
            f"    Regiones: {len(self._arena)}",
            "",
        ]
        if self._root is None:
            lines.append("    (vacio)")
            return "\n".join(lines)

        pending: list[tuple[int, int]] = [(self._root, 1)]
        while pending:
            node, depth = pending.pop()
            region = self._arena.get(node)
            indent = "    " * depth
            if isinstance(region, Leaf):
                lines.append(
                    f"{indent}[{region.side.value}] #{node} {region.window!r} "
                    f"{region.geometry} next={region.preferred_axis.value}"
                )
            else:
                lines.append(
                    f"{indent}[{region.side.value}] #{node} split={region.axis.value} "
                    f"{region.geometry}"
                )
                pending.append((region.right, depth + 1))
                pending.append((region.left, depth + 1))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"TilingEngine("
            f"windows={len(self._index)}, "
            f"regions={len(self._arena)}, "
            f"root={self._root})"
        )

    # ------------------------------------------------------------------
    # Internos
    # ------------------------------------------------------------------
    def _get(self, node: int | None) -> Region:
        if node is None or node not in self._arena:
            raise NotAttached(node)
        return self._arena.get(node)

    @staticmethod
    def _check_rect(geometry: object) -> None:
        if not isinstance(geometry, Rect):
            raise TypeError(f"se esperaba Rect, no {type(geometry).__name__}")

    def _leaf(self, node: int) -> Leaf:
        region = self._arena.get(node)
        assert isinstance(region, Leaf), f"#{node} no es una hoja"
        return region

    def _split(self, node: int) -> Split:
        region = self._arena.get(node)
        assert isinstance(region, Split), f"#{node} no es un split"
        return region

    def _replace_child(self, parent: int | None, side: Side, node: int) -> None:
        """Hace que el hueco *side* de *parent* apunte a *node* (o la raiz)."""
        if parent is None:
            self._root = node
        else:
            self._split(parent).set_child(side, node)
