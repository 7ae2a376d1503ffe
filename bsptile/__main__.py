"""
bsptile - Entry point.

Reproduce una sesion del compositor a partir de un script de texto,
una orden por linea:

    open <id>                 nueva ventana (divide la enfocada)
    close <id>                ventana destruida
    focus <id>                cambio de foco
    axis vertical|horizontal  eje de la proxima division de la enfocada
    key <combo>               pulsacion de tecla, p.ej. "key super+o"
    output <x> <y> <w> <h>    nuevo area de output
    retile                    recalcular todo
    dump                      imprimir el arbol

Run with:  python -m bsptile [--width W --height H] [--verify] [script]
"""

from __future__ import annotations

import argparse
import logging
import shlex
import sys
from collections.abc import Iterable
from typing import TextIO

from bsptile.config.keybindings import register_all_keybindings
from bsptile.config.settings import FALLBACK_OUTPUT, LOG_DATEFMT, LOG_FORMAT
from bsptile.core.combo_parser import ComboParseError, parse_combo
from bsptile.core.commands import CommandDispatcher, build_default_commands
from bsptile.core.keybinds import KeybindTable
from bsptile.core.manager import WindowManager
from bsptile.tiling.rect import Rect

log = logging.getLogger("bsptile")


class SafeStreamHandler(logging.StreamHandler):
    """Handler that replaces unencodable characters instead of crashing."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            enc = getattr(self.stream, "encoding", "utf-8") or "utf-8"
            safe = msg.encode(enc, errors="replace").decode(enc, errors="replace")
            self.stream.write(safe + self.terminator)
            self.flush()
        except Exception:
            self.handleError(record)


def setup_logging(level: int = logging.INFO) -> None:
    """Configure logging for the WM. Calling it again only changes the level."""
    root = logging.getLogger()
    root.setLevel(level)

    if not any(isinstance(h, SafeStreamHandler) for h in root.handlers):
        handler = SafeStreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
        root.addHandler(handler)

    # Quiet down noisy loggers
    logging.getLogger("bsptile.tiling.arena").setLevel(logging.INFO)


class Session:
    """WindowManager + dispatcher + keybindings, driven by script lines."""

    def __init__(self, output: Rect, verify: bool = False, out: TextIO | None = None) -> None:
        self.wm = WindowManager(output=output)
        self.dispatcher = CommandDispatcher()
        build_default_commands(self.dispatcher, self.wm)
        self.keybinds = KeybindTable(self.dispatcher)
        register_all_keybindings(self.keybinds, self.dispatcher)
        self._verify = verify
        self._out = out if out is not None else sys.stdout

    def run(self, lines: Iterable[str]) -> int:
        """
        Ejecuta cada linea del script.

        Returns:
            Numero de lineas que fallaron.
        """
        failures = 0
        for lineno, raw in enumerate(lines, start=1):
            line = raw.split("#", 1)[0].strip()
            if not line:
                continue
            if not self.execute(line):
                log.warning("linea %d fallo: %s", lineno, line)
                failures += 1
                continue
            if self._verify:
                self.wm.engine.verify()
        return failures

    def execute(self, line: str) -> bool:
        """Ejecuta una orden. Retorna False si no se pudo aplicar."""
        try:
            parts = shlex.split(line)
        except ValueError as exc:
            log.warning("linea invalida %r: %s", line, exc)
            return False
        if not parts:
            return False
        cmd, args = parts[0].lower(), parts[1:]

        if cmd == "dump":
            self._print(self.wm.engine.dump_state())
            return True

        if cmd == "open" and len(args) == 1:
            ok = self.wm.map_window(args[0])
        elif cmd == "close" and len(args) == 1:
            ok = self.wm.unmap_window(args[0])
        elif cmd == "focus" and len(args) == 1:
            ok = self.wm.focus(args[0])
        elif cmd == "axis" and len(args) == 1:
            ok = self.wm.set_split_axis(args[0].lower())
        elif cmd == "key" and len(args) == 1:
            try:
                modifiers, key = parse_combo(args[0])
            except ComboParseError as exc:
                log.warning("%s", exc)
                return False
            ok = self.keybinds.handle_key(modifiers, key)
        elif cmd == "output" and len(args) == 4:
            try:
                rect = Rect(*(int(a) for a in args))
            except ValueError as exc:
                log.warning("output invalido: %s", exc)
                return False
            self.wm.resize_output(rect)
            ok = True
        elif cmd == "retile" and not args:
            self.wm.retile()
            ok = True
        else:
            log.warning("Orden desconocida: %r", line)
            return False

        self._print_assignments(line)
        return ok

    def _print_assignments(self, line: str) -> None:
        self._print(f"> {line}")
        for window, rect in self.wm.assignments():
            marker = "*" if window == self.wm.focused else " "
            self._print(f"  {marker} {window:<16} {rect.x:>5} {rect.y:>5} {rect.w:>5} {rect.h:>5}")

    def _print(self, text: str) -> None:
        self._out.write(text + "\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bsptile", description=__doc__.splitlines()[1])
    parser.add_argument("script", nargs="?", help="script de sesion (stdin si se omite)")
    parser.add_argument("--x", type=int, default=FALLBACK_OUTPUT[0])
    parser.add_argument("--y", type=int, default=FALLBACK_OUTPUT[1])
    parser.add_argument("--width", type=int, default=FALLBACK_OUTPUT[2])
    parser.add_argument("--height", type=int, default=FALLBACK_OUTPUT[3])
    parser.add_argument("--verify", action="store_true", help="comprobar invariantes tras cada orden")
    parser.add_argument("-v", "--verbose", action="store_true", help="logging DEBUG")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    session = Session(
        Rect(args.x, args.y, args.width, args.height),
        verify=args.verify,
    )

    if args.script:
        with open(args.script, encoding="utf-8") as fh:
            failures = session.run(fh)
    else:
        failures = session.run(sys.stdin)

    log.info("Sesion terminada: %d ventanas, %d fallos", session.wm.count, failures)
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
