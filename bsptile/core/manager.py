"""
bsptile.core.manager - WindowManager: the bridge between the compositor
and the tiling engine.

The compositor's event loop calls into WindowManager whenever it
observes a protocol event:

  1. A new toplevel appears     -> map_window()
  2. A toplevel is destroyed    -> unmap_window()
  3. Keyboard focus moves       -> focus()
  4. A split-axis keybinding    -> set_split_axis() / toggle_split_axis()
  5. The output is resized      -> resize_output()

WindowManager turns each of these into TilingEngine operations, then
emits WINDOW_CONFIGURED for every window whose rectangle was recomputed,
so that subscribers can send a configure to the client and move it in
the scene graph.  Engine errors are contract violations: they are logged
and the call returns False, the compositor keeps running.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from typing import Optional

from bsptile.config.settings import FALLBACK_OUTPUT
from bsptile.tiling.engine import Assignment, TilingEngine
from bsptile.tiling.errors import TilingError
from bsptile.tiling.rect import Axis, Rect
from bsptile.tiling.region import WindowId

log = logging.getLogger(__name__)


# ============================================================================
# Event types emitted by WindowManager
# ============================================================================
class WMEvent(enum.Enum):
    """Events that the WindowManager can emit to subscribers."""

    # A window was inserted into the tiling tree.
    WINDOW_ADDED = "window_added"

    # A window was removed from the tiling tree.
    WINDOW_REMOVED = "window_removed"

    # The focused window changed (window may be None).
    FOCUS_CHANGED = "focus_changed"

    # A window's rectangle was recomputed; read it with geometry().
    WINDOW_CONFIGURED = "window_configured"

    # The output rectangle changed (window is None).
    OUTPUT_CHANGED = "output_changed"


# Type alias for event callbacks.
# All callbacks receive (event, window, manager).
EventCallback = Callable[["WMEvent", Optional[WindowId], "WindowManager"], None]


# ============================================================================
# WindowManager
# ============================================================================
class WindowManager:
    """
    Tracks focus and the output area, and drives the TilingEngine.

    Usage:
        wm = WindowManager(output=Rect(0, 0, 1920, 1080))
        wm.on(WMEvent.WINDOW_CONFIGURED, apply_configure)
        wm.map_window("term-1")
    """

    def __init__(
        self,
        output: Rect | None = None,
        engine: TilingEngine | None = None,
    ) -> None:
        self._engine = engine if engine is not None else TilingEngine()
        self._output = output if output is not None else Rect(*FALLBACK_OUTPUT)

        # Currently focused tiled window (or None)
        self._focused: Optional[WindowId] = None

        # Most recently mapped window, used as split target without focus
        self._last_mapped: Optional[WindowId] = None

        # Event subscribers: event -> list of callbacks
        self._subscribers: dict[WMEvent, list[EventCallback]] = {
            ev: [] for ev in WMEvent
        }

    # ------------------------------------------------------------------
    # Public: state access
    # ------------------------------------------------------------------
    @property
    def engine(self) -> TilingEngine:
        return self._engine

    @property
    def output(self) -> Rect:
        return self._output

    @property
    def focused(self) -> Optional[WindowId]:
        return self._focused

    @property
    def windows(self) -> list[WindowId]:
        return self._engine.windows

    @property
    def count(self) -> int:
        return self._engine.window_count

    def geometry(self, window: WindowId) -> Rect | None:
        """Current rectangle of a tiled window, or None if not tiled."""
        if not self._engine.contains(window):
            return None
        return self._engine.geometry_of(window)

    def assignments(self) -> list[Assignment]:
        """(window, rect) for every tiled window."""
        return self._engine.collect_assignments()

    # ------------------------------------------------------------------
    # Public: event subscription
    # ------------------------------------------------------------------
    def on(self, event: WMEvent, callback: EventCallback) -> None:
        """Register a callback for a specific event."""
        self._subscribers[event].append(callback)

    def off(self, event: WMEvent, callback: EventCallback) -> None:
        """Unregister a callback."""
        try:
            self._subscribers[event].remove(callback)
        except ValueError:
            pass

    def on_all(self, callback: EventCallback) -> None:
        """Register a callback for ALL events."""
        for ev in WMEvent:
            self._subscribers[ev].append(callback)

    # ------------------------------------------------------------------
    # Internal: emit events
    # ------------------------------------------------------------------
    def _emit(self, event: WMEvent, window: Optional[WindowId] = None) -> None:
        for cb in self._subscribers[event]:
            try:
                cb(event, window, self)
            except Exception:
                log.exception(
                    "Error in event callback for %s on %r", event.value, window
                )

    def _configure(self, node: int | None) -> int:
        """Emit WINDOW_CONFIGURED for every leaf under *node*."""
        assignments = self._engine.collect_assignments(node)
        for window, rect in assignments:
            log.debug("CONFIGURE %r -> %s", window, rect)
            self._emit(WMEvent.WINDOW_CONFIGURED, window)
        return len(assignments)

    def _set_focus(self, window: Optional[WindowId]) -> None:
        if window == self._focused:
            return
        self._focused = window
        log.debug("FOCUS -> %r", window)
        self._emit(WMEvent.FOCUS_CHANGED, window)

    # ------------------------------------------------------------------
    # Public: compositor events
    # ------------------------------------------------------------------
    def map_window(self, window: WindowId) -> bool:
        """
        Tile a newly created window.

        The first window takes the whole output. Later windows split the
        focused window (or, with nothing focused, the last mapped one).
        The new window receives focus.

        Returns:
            True if the window was tiled.
        """
        try:
            if self._engine.is_empty:
                node = self._engine.insert_root(window, self._output)
            else:
                target = self._focused if self._focused is not None else self._last_mapped
                if target is None or not self._engine.contains(target):
                    target = self._engine.windows[-1]
                node = self._engine.split(target, window)
        except TilingError as exc:
            log.warning("MAP %r skipped: %s", window, exc)
            return False

        self._last_mapped = window
        log.info("MAP  %r [%d windows]", window, self._engine.window_count)
        self._emit(WMEvent.WINDOW_ADDED, window)
        self._configure(node)
        self._set_focus(window)
        return True

    def unmap_window(self, window: WindowId) -> bool:
        """
        Remove a destroyed window and give its space to its sibling.

        If the window had focus, focus moves to the first window of the
        region that absorbed its space.

        Returns:
            True if the window was tiled and has been removed.
        """
        try:
            node = self._engine.destroy(window)
        except TilingError as exc:
            log.warning("UNMAP %r skipped: %s", window, exc)
            return False

        if self._last_mapped == window:
            self._last_mapped = None

        log.info("UNMAP  %r [%d windows]", window, self._engine.window_count)
        if node is not None:
            self._configure(node)
        self._emit(WMEvent.WINDOW_REMOVED, window)

        if self._focused == window:
            successor = None
            if node is not None:
                successor = self._engine.collect_assignments(node)[0][0]
            self._set_focus(successor)
        return True

    def focus(self, window: Optional[WindowId]) -> bool:
        """
        Record keyboard focus.

        Focusing a window that is not tiled is ignored and returns False.
        Passing None clears the focus.
        """
        if window is not None and not self._engine.contains(window):
            log.debug("FOCUS ignored, not tiled: %r", window)
            return False
        self._set_focus(window)
        return True

    def set_split_axis(self, axis: Axis | str) -> bool:
        """
        Choose how the focused window is split next.

        Returns:
            True if a focused window was updated.
        """
        if self._focused is None:
            log.debug("set_split_axis(%s) without focus", axis)
            return False
        try:
            self._engine.change_axis(self._focused, axis)
        except (TilingError, ValueError) as exc:
            log.warning("Split axis change skipped: %s", exc)
            return False
        return True

    def toggle_split_axis(self) -> bool:
        """Flip the preferred split axis of the focused window."""
        if self._focused is None or not self._engine.contains(self._focused):
            return False
        current = self._engine.preferred_axis_of(self._focused)
        return self.set_split_axis(current.other)

    def resize_output(self, output: Rect) -> int:
        """
        Apply a new output rectangle.

        Returns:
            Number of windows reconfigured.
        """
        self._output = output
        log.info("OUTPUT -> %s", output)
        self._emit(WMEvent.OUTPUT_CHANGED)
        if self._engine.is_empty:
            return 0
        root = self._engine.resize_output(output)
        return self._configure(root)

    def retile(self) -> int:
        """
        Recompute every rectangle from the root and reconfigure all windows.

        Returns:
            Number of windows reconfigured.
        """
        root = self._engine.root
        if root is None:
            return 0
        self._engine.update_geometry(root)
        return self._configure(root)

    # ------------------------------------------------------------------
    # Debug
    # ------------------------------------------------------------------
    def dump_state(self) -> str:
        """Return a formatted string of the current state."""
        lines = [
            f"=== WindowManager: {self.count} tiled windows ===",
            f"    Output: {self._output}",
            f"    Focused: {self._focused!r}",
            "",
        ]
        for window, rect in self.assignments():
            marker = "*" if window == self._focused else " "
            lines.append(f"  {marker} {window!r:<20} {rect}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"WindowManager(windows={self.count}, focused={self._focused!r})"
