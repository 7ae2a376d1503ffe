import logging

from bsptile.core.commands import CommandDispatcher, build_default_commands
from bsptile.core.manager import WindowManager
from bsptile.tiling import Axis

from tests.conftest import OUTPUT


def test_register_and_execute():
    dispatcher = CommandDispatcher()
    calls = []
    dispatcher.register("ping", lambda: calls.append(1), description="Ping", category="debug")

    assert dispatcher.has("ping")
    assert dispatcher.execute("ping")
    assert calls == [1]
    assert dispatcher.get("ping").category == "debug"


def test_execute_unknown_command():
    assert not CommandDispatcher().execute("nope")


def test_execute_logs_errors(caplog):
    dispatcher = CommandDispatcher()

    def broken():
        raise RuntimeError("boom")

    dispatcher.register("broken", broken)
    with caplog.at_level(logging.ERROR, logger="bsptile.core.commands"):
        assert not dispatcher.execute("broken")
    assert "Error executing command: broken" in caplog.text


def test_decorator_and_listing():
    dispatcher = CommandDispatcher()

    @dispatcher.command("b_cmd", category="layout")
    def b_cmd():
        pass

    @dispatcher.command("a_cmd", category="window")
    def a_cmd():
        pass

    assert dispatcher.command_names == ["a_cmd", "b_cmd"]
    assert [c.name for c in dispatcher.list_commands("layout")] == ["b_cmd"]
    assert dispatcher.unregister("a_cmd")
    assert not dispatcher.unregister("a_cmd")
    assert dispatcher.count == 1
    assert "[layout] b_cmd" in dispatcher.dump_state()


def test_register_replaces():
    dispatcher = CommandDispatcher()
    calls = []
    dispatcher.register("x", lambda: calls.append("old"))
    dispatcher.register("x", lambda: calls.append("new"))
    dispatcher.execute("x")
    assert calls == ["new"]
    assert dispatcher.count == 1


def test_default_commands_drive_the_window_manager():
    wm = WindowManager(output=OUTPUT)
    dispatcher = CommandDispatcher()
    build_default_commands(dispatcher, wm)

    assert set(dispatcher.command_names) == {
        "split_vertical",
        "split_horizontal",
        "toggle_split",
        "retile",
    }

    wm.map_window("a")
    dispatcher.execute("split_horizontal")
    assert wm.engine.preferred_axis_of("a") is Axis.HORIZONTAL
    dispatcher.execute("split_vertical")
    assert wm.engine.preferred_axis_of("a") is Axis.VERTICAL
    dispatcher.execute("toggle_split")
    assert wm.engine.preferred_axis_of("a") is Axis.HORIZONTAL
    assert dispatcher.execute("retile")
