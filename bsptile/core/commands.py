"""
bsptile.core.commands - Dispatcher de comandos internos.

Mapea nombres de comandos en string a acciones del WM, permitiendo
que la configuracion de keybindings use strings como "split_vertical"
sin conocer al WindowManager.

El CommandDispatcher es el registro central:
    dispatcher = CommandDispatcher()
    dispatcher.register("retile", wm.retile)
    dispatcher.execute("retile")

Tambien se puede usar como decorador:
    @dispatcher.command("split_vertical")
    def split_vertical():
        ...
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bsptile.core.manager import WindowManager

log = logging.getLogger(__name__)


# Type for command functions: called with no arguments
CommandFn = Callable[[], object]


@dataclass(frozen=True, slots=True)
class Command:
    """Metadata for a registered command."""

    name: str
    fn: CommandFn
    description: str
    category: str


class CommandDispatcher:
    """
    Registry that maps command name strings to callable functions.

    This decouples the keybinding config from the actual WM methods: the
    config uses "split_vertical" and the dispatcher resolves it at runtime.
    """

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}

    @property
    def count(self) -> int:
        return len(self._commands)

    @property
    def command_names(self) -> list[str]:
        """All registered command names, sorted."""
        return sorted(self._commands.keys())

    def register(
        self,
        name: str,
        fn: CommandFn,
        description: str = "",
        category: str = "general",
    ) -> None:
        """
        Register a command by name.

        If a command with the same name already exists, it is replaced.

        Args:
            name:        Unique command name (e.g. "split_vertical").
            fn:          The callable to invoke.
            description: Human-readable description.
            category:    Grouping category (e.g. "layout", "window").
        """
        if name in self._commands:
            log.info("Command replaced: %s", name)

        self._commands[name] = Command(
            name=name,
            fn=fn,
            description=description,
            category=category,
        )
        log.debug("Command registered: %s (%s)", name, category)

    def unregister(self, name: str) -> bool:
        """Remove a command by name. Returns True if it existed."""
        cmd = self._commands.pop(name, None)
        if cmd is not None:
            log.debug("Command unregistered: %s", name)
            return True
        return False

    def execute(self, name: str) -> bool:
        """
        Execute a command by name.

        Args:
            name: The command name to execute.

        Returns:
            True if the command was found and executed without raising.
        """
        cmd = self._commands.get(name)
        if cmd is None:
            log.warning("Unknown command: %s", name)
            return False

        log.debug("Executing command: %s", name)
        try:
            cmd.fn()
        except Exception:
            log.exception("Error executing command: %s", name)
            return False

        return True

    def get(self, name: str) -> Command | None:
        """Look up a command by name."""
        return self._commands.get(name)

    def has(self, name: str) -> bool:
        return name in self._commands

    def command(
        self,
        name: str,
        description: str = "",
        category: str = "general",
    ) -> Callable[[CommandFn], CommandFn]:
        """
        Decorator to register a function as a command.

        Usage:
            @dispatcher.command("retile", category="layout")
            def retile():
                ...
        """

        def decorator(fn: CommandFn) -> CommandFn:
            self.register(name, fn, description=description, category=category)
            return fn

        return decorator

    def list_commands(self, category: str | None = None) -> list[Command]:
        """
        List all registered commands, optionally filtered by category.

        Returns:
            Sorted list of Command objects.
        """
        commands = list(self._commands.values())
        if category is not None:
            commands = [c for c in commands if c.category == category]
        return sorted(commands, key=lambda c: c.name)

    def dump_state(self) -> str:
        """Return a formatted string of all commands for debugging."""
        lines = [
            f"=== CommandDispatcher: {len(self._commands)} commands ===",
            "",
        ]
        for cmd in self.list_commands():
            desc = f"  {cmd.description}" if cmd.description else ""
            lines.append(f"  [{cmd.category}] {cmd.name}{desc}")
        return "\n".join(lines)


def build_default_commands(dispatcher: CommandDispatcher, wm: WindowManager) -> None:
    """
    Register all built-in commands into the dispatcher.

    This is the single place that maps command name strings to
    WindowManager methods. Called during startup.
    """
    from bsptile.tiling.rect import Axis

    @dispatcher.command(
        "split_vertical",
        description="Next split of the focused window stacks top/bottom",
        category="layout",
    )
    def split_vertical() -> None:
        wm.set_split_axis(Axis.VERTICAL)

    @dispatcher.command(
        "split_horizontal",
        description="Next split of the focused window stacks left/right",
        category="layout",
    )
    def split_horizontal() -> None:
        wm.set_split_axis(Axis.HORIZONTAL)

    @dispatcher.command(
        "toggle_split",
        description="Flip the split axis of the focused window",
        category="layout",
    )
    def toggle_split() -> None:
        wm.toggle_split_axis()

    @dispatcher.command("retile", description="Recompute every tile", category="layout")
    def retile() -> None:
        wm.retile()

    log.info("Default commands registered: %d", dispatcher.count)
