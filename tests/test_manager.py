import logging

import pytest

from bsptile.config.settings import FALLBACK_OUTPUT
from bsptile.core.manager import WindowManager, WMEvent
from bsptile.tiling import Axis, Rect

from tests.conftest import OUTPUT


@pytest.fixture
def wm():
    return WindowManager(output=OUTPUT)


@pytest.fixture
def events(wm):
    recorded = []
    wm.on_all(lambda event, window, manager: recorded.append((event, window)))
    return recorded


def test_default_output():
    assert WindowManager().output == Rect(*FALLBACK_OUTPUT)


def test_first_window_takes_whole_output(wm, events):
    assert wm.map_window("a")
    assert wm.geometry("a") == OUTPUT
    assert wm.focused == "a"
    assert events == [
        (WMEvent.WINDOW_ADDED, "a"),
        (WMEvent.WINDOW_CONFIGURED, "a"),
        (WMEvent.FOCUS_CHANGED, "a"),
    ]


def test_new_window_splits_focused(wm, events):
    wm.map_window("a")
    wm.map_window("b")
    wm.focus("a")
    events.clear()

    wm.map_window("c")

    assert wm.geometry("a") == Rect(0, 0, 1000, 200)
    assert wm.geometry("c") == Rect(0, 200, 1000, 200)
    assert wm.geometry("b") == Rect(0, 400, 1000, 400)
    configured = {w for e, w in events if e is WMEvent.WINDOW_CONFIGURED}
    assert configured == {"a", "c"}
    assert wm.focused == "c"
    wm.engine.verify()


def test_without_focus_splits_last_mapped(wm):
    wm.map_window("a")
    wm.map_window("b")
    wm.focus(None)
    assert wm.focused is None

    wm.map_window("c")

    assert wm.geometry("a") == Rect(0, 0, 1000, 400)
    assert wm.geometry("b") == Rect(0, 400, 1000, 200)
    assert wm.geometry("c") == Rect(0, 600, 1000, 200)


def test_without_focus_after_last_mapped_closed(wm):
    wm.map_window("a")
    wm.map_window("b")
    wm.unmap_window("b")
    wm.focus(None)
    wm.map_window("c")
    assert wm.geometry("c") == Rect(0, 400, 1000, 400)


def test_map_duplicate_is_logged_and_skipped(wm, caplog):
    wm.map_window("a")
    with caplog.at_level(logging.WARNING, logger="bsptile.core.manager"):
        assert not wm.map_window("a")
    assert "MAP 'a' skipped" in caplog.text
    assert wm.count == 1
    wm.engine.verify()


def test_unmap_moves_focus_to_sibling_region(wm, events):
    wm.map_window("a")
    wm.map_window("b")
    events.clear()

    assert wm.unmap_window("b")

    assert wm.focused == "a"
    assert wm.geometry("a") == OUTPUT
    assert wm.geometry("b") is None
    assert events == [
        (WMEvent.WINDOW_CONFIGURED, "a"),
        (WMEvent.WINDOW_REMOVED, "b"),
        (WMEvent.FOCUS_CHANGED, "a"),
    ]


def test_unmap_unfocused_keeps_focus(wm):
    wm.map_window("a")
    wm.map_window("b")
    wm.focus("b")
    wm.unmap_window("a")
    assert wm.focused == "b"
    assert wm.geometry("b") == OUTPUT


def test_unmap_last_window_clears_focus(wm, events):
    wm.map_window("a")
    events.clear()
    assert wm.unmap_window("a")
    assert wm.focused is None
    assert wm.count == 0
    assert events == [
        (WMEvent.WINDOW_REMOVED, "a"),
        (WMEvent.FOCUS_CHANGED, None),
    ]


def test_unmap_unknown_window(wm):
    assert not wm.unmap_window("ghost")


def test_focus_untiled_window_ignored(wm):
    wm.map_window("a")
    assert not wm.focus("ghost")
    assert wm.focused == "a"


def test_set_split_axis_applies_to_focused(wm):
    wm.map_window("a")
    assert wm.set_split_axis(Axis.HORIZONTAL)
    wm.map_window("b")
    assert wm.geometry("a") == Rect(0, 0, 500, 800)
    assert wm.geometry("b") == Rect(500, 0, 500, 800)


def test_set_split_axis_without_focus(wm):
    assert not wm.set_split_axis(Axis.HORIZONTAL)


def test_set_split_axis_invalid_value(wm):
    wm.map_window("a")
    assert not wm.set_split_axis("diagonal")
    assert wm.engine.preferred_axis_of("a") is Axis.VERTICAL


def test_toggle_split_axis(wm):
    assert not wm.toggle_split_axis()
    wm.map_window("a")
    assert wm.toggle_split_axis()
    assert wm.engine.preferred_axis_of("a") is Axis.HORIZONTAL
    assert wm.toggle_split_axis()
    assert wm.engine.preferred_axis_of("a") is Axis.VERTICAL


def test_resize_output_reconfigures_everything(wm, events):
    wm.map_window("a")
    wm.map_window("b")
    events.clear()

    assert wm.resize_output(Rect(0, 0, 1920, 1080)) == 2

    assert wm.geometry("a") == Rect(0, 0, 1920, 540)
    assert wm.geometry("b") == Rect(0, 540, 1920, 540)
    assert events[0] == (WMEvent.OUTPUT_CHANGED, None)
    wm.engine.verify()


def test_resize_output_before_first_window(wm):
    assert wm.resize_output(Rect(0, 0, 640, 480)) == 0
    wm.map_window("a")
    assert wm.geometry("a") == Rect(0, 0, 640, 480)


def test_retile(wm):
    assert wm.retile() == 0
    wm.map_window("a")
    wm.map_window("b")
    assert wm.retile() == 2


def test_callback_errors_do_not_abort(wm, caplog):
    def broken(event, window, manager):
        raise RuntimeError("boom")

    wm.on(WMEvent.WINDOW_ADDED, broken)
    with caplog.at_level(logging.ERROR, logger="bsptile.core.manager"):
        assert wm.map_window("a")
    assert "Error in event callback" in caplog.text
    assert wm.focused == "a"


def test_off_unregisters(wm):
    seen = []

    def cb(event, window, manager):
        seen.append(window)

    wm.on(WMEvent.WINDOW_ADDED, cb)
    wm.off(WMEvent.WINDOW_ADDED, cb)
    wm.off(WMEvent.WINDOW_ADDED, cb)
    wm.map_window("a")
    assert seen == []


def test_dump_state_marks_focus(wm):
    wm.map_window("a")
    wm.map_window("b")
    text = wm.dump_state()
    assert "2 tiled windows" in text
    assert "* 'b'" in text
