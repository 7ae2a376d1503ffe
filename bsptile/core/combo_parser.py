"""
bsptile.core.combo_parser - Parser de combos de teclado.

Convierte strings legibles como "super+shift+v" en el par
(modifiers, key) que usa KeybindTable.

Caracteristicas:
    - Aliases: super = win = logo = mod4, ctrl = control, alt = mod1.
    - Case-insensitive: "Super+Shift+V" == "super+shift+v".
    - Las teclas se normalizan al nombre de keysym en minusculas
      ("enter" -> "return", "esc" -> "escape").
    - Validacion: error claro si el combo es invalido.
"""

from __future__ import annotations

import enum
import logging

log = logging.getLogger(__name__)


class Modifier(enum.IntFlag):
    """Modifier flags as reported by the keyboard seat."""

    NONE = 0
    SHIFT = 1
    CTRL = 2
    ALT = 4
    LOGO = 8


# ============================================================================
# Modifier aliases -> modifier flag
# ============================================================================
_MODIFIER_MAP: dict[str, Modifier] = {
    "shift": Modifier.SHIFT,
    "ctrl": Modifier.CTRL,
    "control": Modifier.CTRL,
    "alt": Modifier.ALT,
    "mod1": Modifier.ALT,
    "super": Modifier.LOGO,
    "win": Modifier.LOGO,
    "logo": Modifier.LOGO,
    "mod4": Modifier.LOGO,
}


# ============================================================================
# Key name -> canonical keysym name
# ============================================================================
_KEY_MAP: dict[str, str] = {}


def _build_key_map() -> None:
    """Populate the key name map on first use."""
    if _KEY_MAP:
        return

    for i in range(26):
        ch = chr(ord("a") + i)
        _KEY_MAP[ch] = ch

    for i in range(10):
        _KEY_MAP[str(i)] = str(i)

    for i in range(1, 25):
        _KEY_MAP[f"f{i}"] = f"f{i}"

    for name in (
        "return", "escape", "space", "tab", "backspace", "delete", "insert",
        "home", "end", "page_up", "page_down", "left", "up", "right", "down",
        "minus", "equal", "comma", "period", "slash", "semicolon",
        "bracketleft", "bracketright", "backslash", "grave", "apostrophe",
        "print", "pause",
    ):
        _KEY_MAP[name] = name

    _KEY_MAP.update(
        {
            "enter": "return",
            "esc": "escape",
            "del": "delete",
            "ins": "insert",
            "pgup": "page_up",
            "prior": "page_up",
            "pgdn": "page_down",
            "next": "page_down",
            "equals": "equal",
            "backquote": "grave",
            "quote": "apostrophe",
        }
    )


# ============================================================================
# Public API
# ============================================================================

class ComboParseError(ValueError):
    """Raised when a combo string cannot be parsed."""
    pass


def normalize_key(key: str) -> str | None:
    """Return the canonical keysym name for *key*, or None if unknown."""
    _build_key_map()
    return _KEY_MAP.get(key.strip().lower())


def parse_combo(combo: str) -> tuple[Modifier, str]:
    """
    Parse a keyboard combo string into (modifiers, key).

    Args:
        combo: Human-readable combo like "super+v", "super+shift+r".
               Case-insensitive. Parts separated by '+'.

    Returns:
        Tuple of (modifier flags, canonical key name).

    Raises:
        ComboParseError: If the combo is empty, has no key part, contains
                         unknown tokens, or has duplicate modifiers.
    """
    _build_key_map()

    if not combo or not combo.strip():
        raise ComboParseError("Empty combo string")

    parts = [p.strip().lower() for p in combo.split("+")]
    parts = [p for p in parts if p]

    if not parts:
        raise ComboParseError(f"No valid parts in combo: {combo!r}")

    modifiers = Modifier.NONE
    key: str | None = None

    for part in parts:
        if part in _MODIFIER_MAP:
            flag = _MODIFIER_MAP[part]
            if modifiers & flag:
                raise ComboParseError(
                    f"Duplicate modifier {part!r} in combo: {combo!r}"
                )
            modifiers |= flag
        elif part in _KEY_MAP:
            if key is not None:
                raise ComboParseError(
                    f"Multiple key parts in combo: {combo!r}. "
                    f"Only one non-modifier key is allowed."
                )
            key = _KEY_MAP[part]
        else:
            raise ComboParseError(
                f"Unknown key or modifier: {part!r} in combo: {combo!r}"
            )

    if key is None:
        raise ComboParseError(
            f"No key found in combo: {combo!r}. "
            f"A combo must have exactly one non-modifier key."
        )

    log.debug("Combo parsed: %r -> %s", combo, combo_to_str(modifiers, key))
    return modifiers, key


def combo_to_str(modifiers: Modifier, key: str) -> str:
    """
    Convert (modifiers, key) back to a human-readable string.

    Useful for logging and error messages.
    """
    parts: list[str] = []
    if modifiers & Modifier.LOGO:
        parts.append("Super")
    if modifiers & Modifier.CTRL:
        parts.append("Ctrl")
    if modifiers & Modifier.ALT:
        parts.append("Alt")
    if modifiers & Modifier.SHIFT:
        parts.append("Shift")

    parts.append(key.upper() if len(key) == 1 else key.capitalize())
    return "+".join(parts)


def is_valid_combo(combo: str) -> bool:
    """Check if a combo string is valid without raising."""
    try:
        parse_combo(combo)
        return True
    except ComboParseError:
        return False
