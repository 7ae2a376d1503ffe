import pytest

from bsptile.tiling.errors import WindowAlreadyTiled, WindowNotFound
from bsptile.tiling.window_index import WindowIndex


def test_add_get_remove():
    index = WindowIndex()
    index.add("a", 0)
    index.add("b", 3)
    assert index.get("b") == 3
    assert "a" in index
    assert len(index) == 2
    assert index.windows() == ["a", "b"]
    assert index.remove("a") == 0
    assert "a" not in index
    assert index.items() == [("b", 3)]


def test_duplicate_rejected():
    index = WindowIndex()
    index.add("a", 0)
    with pytest.raises(WindowAlreadyTiled) as exc:
        index.add("a", 1)
    assert exc.value.window == "a"
    assert index.get("a") == 0


def test_missing_window():
    index = WindowIndex()
    with pytest.raises(WindowNotFound):
        index.get("x")
    with pytest.raises(WindowNotFound) as exc:
        index.remove("x")
    assert exc.value.window == "x"
    # WindowNotFound tambien es un LookupError
    with pytest.raises(LookupError):
        index.get("x")


def test_unhashable_is_never_contained():
    index = WindowIndex()
    assert [] not in index
