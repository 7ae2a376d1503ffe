import io
import logging

import bsptile.__main__ as bsptile_main
from bsptile.__main__ import SafeStreamHandler, Session, build_parser, main, setup_logging
from bsptile.tiling import Rect

SCRIPT = """\
# escenario de referencia
open A
open B
focus A
axis horizontal
open C
close C
"""


def _session(**kwargs):
    out = io.StringIO()
    return Session(Rect(0, 0, 1000, 800), verify=True, out=out, **kwargs), out


def test_reference_script():
    session, out = _session()
    assert session.run(SCRIPT.splitlines()) == 0

    wm = session.wm
    assert wm.windows == ["A", "B"]
    assert wm.geometry("A") == Rect(0, 0, 1000, 400)
    assert wm.geometry("B") == Rect(0, 400, 1000, 400)
    assert "> open C" in out.getvalue()


def test_key_lines_use_keybindings():
    session, _ = _session()
    failures = session.run(["open a", "key super+o", "open b"])
    assert failures == 0
    assert session.wm.geometry("b") == Rect(500, 0, 500, 800)


def test_bad_lines_count_as_failures():
    session, _ = _session()
    failures = session.run(
        ["open a", "close ghost", "frobnicate", "output 0 0 -5 10", "key super+nokey"]
    )
    assert failures == 4
    assert session.wm.windows == ["a"]


def test_unbalanced_quote_line_is_skipped():
    session, _ = _session()
    failures = session.run(["open a", "open \"b", "open c", "\"\""])
    assert failures == 2
    assert session.wm.windows == ["a", "c"]


def test_output_and_dump():
    session, out = _session()
    assert session.run(["open a", "output 0 0 200 100", "dump", "retile"]) == 0
    assert session.wm.geometry("a") == Rect(0, 0, 200, 100)
    assert "=== TilingEngine ===" in out.getvalue()


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert (args.width, args.height) == (800, 800)
    assert not args.verify


def test_main_runs_script_file(tmp_path, capsys, monkeypatch):
    levels = []
    monkeypatch.setattr(bsptile_main, "setup_logging", levels.append)
    script = tmp_path / "session.txt"
    script.write_text(SCRIPT, encoding="utf-8")
    assert main(["--width", "1000", "--height", "800", "--verify", str(script)]) == 0
    assert "> close C" in capsys.readouterr().out
    assert levels == [logging.INFO]


def test_setup_logging_adds_one_handler():
    root = logging.getLogger()
    level = root.level
    before = list(root.handlers)
    try:
        setup_logging(logging.DEBUG)
        setup_logging(logging.INFO)
        added = [h for h in root.handlers if h not in before]
        assert len(added) == 1
        assert isinstance(added[0], SafeStreamHandler)
        assert root.level == logging.INFO
    finally:
        for handler in root.handlers[:]:
            if handler not in before:
                root.removeHandler(handler)
        root.setLevel(level)
