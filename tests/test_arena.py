import pytest

from bsptile.tiling.arena import RegionArena
from bsptile.tiling.rect import Axis, Rect
from bsptile.tiling.region import Leaf, Side, Split


def _leaf(window):
    return Leaf(Rect(0, 0, 1, 1), Axis.VERTICAL, None, Side.ROOT, window)


def test_alloc_and_get():
    arena = RegionArena()
    a = arena.alloc(_leaf("a"))
    b = arena.alloc(_leaf("b"))
    assert (a, b) == (0, 1)
    assert arena.get(a).window == "a"
    assert len(arena) == 2
    assert a in arena and b in arena


def test_free_reuses_last_freed_slot():
    arena = RegionArena()
    ids = [arena.alloc(_leaf(n)) for n in "abc"]
    arena.free(ids[0])
    arena.free(ids[2])
    assert len(arena) == 1
    assert arena.capacity == 3
    assert arena.alloc(_leaf("d")) == ids[2]
    assert arena.alloc(_leaf("e")) == ids[0]
    assert arena.alloc(_leaf("f")) == 3


def test_get_freed_slot_raises():
    arena = RegionArena()
    node = arena.alloc(_leaf("a"))
    arena.free(node)
    assert node not in arena
    with pytest.raises(KeyError):
        arena.get(node)
    with pytest.raises(KeyError):
        arena.free(node)


def test_contains_rejects_non_ids():
    arena = RegionArena()
    arena.alloc(_leaf("a"))
    assert -1 not in arena
    assert 5 not in arena
    assert "0" not in arena
    assert None not in arena


def test_ids_skip_free_slots():
    arena = RegionArena()
    ids = [arena.alloc(_leaf(n)) for n in "abc"]
    arena.free(ids[1])
    assert list(arena.ids()) == [ids[0], ids[2]]
    arena.clear()
    assert len(arena) == 0


def test_split_child_slots():
    split = Split(Rect(0, 0, 2, 2), None, Side.ROOT, Axis.HORIZONTAL, left=1, right=2)
    assert split.child(Side.LEFT) == 1
    assert split.child(Side.RIGHT) == 2
    split.set_child(Side.RIGHT, 7)
    assert split.right == 7
    with pytest.raises(ValueError):
        split.child(Side.ROOT)
    with pytest.raises(ValueError):
        split.set_child(Side.ROOT, 3)


def test_side_opposite():
    assert Side.LEFT.opposite is Side.RIGHT
    assert Side.RIGHT.opposite is Side.LEFT
    with pytest.raises(ValueError):
        Side.ROOT.opposite
