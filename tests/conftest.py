from __future__ import annotations

import pytest

from bsptile.tiling import Axis, Rect, TilingEngine

OUTPUT = Rect(0, 0, 1000, 800)


@pytest.fixture
def output() -> Rect:
    return OUTPUT


@pytest.fixture
def engine() -> TilingEngine:
    return TilingEngine()


@pytest.fixture
def engine_a(engine: TilingEngine) -> TilingEngine:
    """Arbol de una sola hoja: "a" ocupando todo el output."""
    engine.insert_root("a", OUTPUT)
    return engine


@pytest.fixture
def engine_abc(engine_a: TilingEngine) -> TilingEngine:
    """
    a | c  arriba (split horizontal), b abajo (split vertical de la raiz).
    """
    engine_a.split("a", "b")
    engine_a.change_axis("a", Axis.HORIZONTAL)
    engine_a.split("a", "c")
    return engine_a
