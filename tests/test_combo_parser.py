import logging

import pytest

from bsptile.core.combo_parser import (
    ComboParseError,
    Modifier,
    combo_to_str,
    is_valid_combo,
    normalize_key,
    parse_combo,
)


def test_parse_simple():
    assert parse_combo("super+v") == (Modifier.LOGO, "v")


def test_parse_logs_canonical_combo(caplog):
    with caplog.at_level(logging.DEBUG, logger="bsptile.core.combo_parser"):
        parse_combo("super+shift+r")
    assert "Super+Shift+R" in caplog.text


def test_parse_aliases_and_case():
    assert parse_combo("Win+Shift+R") == (Modifier.LOGO | Modifier.SHIFT, "r")
    assert parse_combo("mod4 + control + Enter") == (Modifier.LOGO | Modifier.CTRL, "return")
    assert parse_combo("mod1+esc") == (Modifier.ALT, "escape")


def test_parse_key_without_modifiers():
    assert parse_combo("f5") == (Modifier.NONE, "f5")


@pytest.mark.parametrize(
    "combo",
    ["", "   ", "+", "super", "super+v+o", "super+logo+v", "hyper+v", "super+nokey"],
)
def test_invalid_combos(combo):
    with pytest.raises(ComboParseError):
        parse_combo(combo)
    assert not is_valid_combo(combo)


def test_combo_parse_error_is_value_error():
    with pytest.raises(ValueError):
        parse_combo("ctrl+ctrl+a")


def test_combo_to_str():
    assert combo_to_str(Modifier.LOGO | Modifier.SHIFT, "r") == "Super+Shift+R"
    assert combo_to_str(Modifier.NONE, "return") == "Return"


def test_normalize_key():
    assert normalize_key("Enter") == "return"
    assert normalize_key("PgUp") == "page_up"
    assert normalize_key("nokey") is None
