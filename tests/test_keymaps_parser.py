from __future__ import annotations

import pytest

from sessionizer.keymaps import (
    EmptyKeySpecError,
    KeyParseError,
    KeyRecord,
    Modifier,
    NamedKey,
    NoKeysSpecifiedError,
    UnknownKeyError,
    UnknownModifierError,
    UnsupportedCharError,
    format_key,
    parse_key,
    parse_keys,
)


def ctrl(char: str) -> KeyRecord:
    return KeyRecord.char(char, Modifier.CTRL)


def test_parse_named_keys() -> None:
    assert parse_key("Enter") == KeyRecord.named(NamedKey.ENTER)
    assert parse_key("Esc") == KeyRecord.named(NamedKey.ESC)
    assert parse_key("escape") == KeyRecord.named(NamedKey.ESC)
    assert parse_key("DEL") == KeyRecord.named(NamedKey.DELETE)
    assert parse_key("PageDown") == KeyRecord.named(NamedKey.PAGE_DOWN)
    assert parse_key("f12") == KeyRecord.named(NamedKey.F12)


def test_parse_character_keys_fold_case() -> None:
    assert parse_key("a") == KeyRecord.char("a")
    assert parse_key("A") == parse_key("a")
    assert parse_key("space") == KeyRecord.char(" ")


def test_parse_modifiers_case_insensitive() -> None:
    assert parse_key("Ctrl+p") == ctrl("p")
    assert parse_key("ctrl+P") == ctrl("p")

    record = parse_key("Ctrl+Alt+a")
    assert record.key == "a"
    assert record.modifiers == frozenset({Modifier.CTRL, Modifier.ALT})


def test_parse_trims_surrounding_whitespace() -> None:
    assert parse_key("  Up  ") == KeyRecord.named(NamedKey.UP)


@pytest.mark.parametrize(
    ("token", "error"),
    [
        ("", EmptyKeySpecError),
        ("   ", EmptyKeySpecError),
        ("ZZZZ", UnknownKeyError),
        ("Ctrl+ZZZZ", UnknownKeyError),
        ("Hyper+a", UnknownModifierError),
        ("Super+a", UnknownModifierError),
        ("Ctrl+", UnknownKeyError),
        ("é", UnsupportedCharError),
    ],
)
def test_parse_rejects_bad_tokens(token: str, error: type[KeyParseError]) -> None:
    with pytest.raises(error):
        parse_key(token)


def test_parse_errors_are_value_errors() -> None:
    with pytest.raises(ValueError, match="Unknown modifier: Hyper"):
        parse_key("Hyper+a")


def test_parse_keys_keeps_order() -> None:
    keys = parse_keys("Up Ctrl+p")

    assert keys == [KeyRecord.named(NamedKey.UP), ctrl("p")]


def test_parse_keys_requires_at_least_one_key() -> None:
    with pytest.raises(NoKeysSpecifiedError):
        parse_keys("")
    with pytest.raises(NoKeysSpecifiedError):
        parse_keys("   ")


def test_parse_keys_fails_on_first_bad_token() -> None:
    with pytest.raises(UnknownKeyError):
        parse_keys("Up Bogus Ctrl+p")


def test_display_form_of_named_keys_round_trips() -> None:
    for token in ("Enter", "Esc", "Backspace", "Delete", "Tab", "Home", "PageUp", "F5"):
        record = parse_key(token)
        assert parse_key(format_key(record)) == record


def test_format_key_rendering() -> None:
    assert format_key(KeyRecord.named(NamedKey.UP)) == "↑"
    assert format_key(ctrl("p")) == "Ctrl+P"
    assert format_key(KeyRecord.named(NamedKey.ENTER)) == "Enter"
    assert format_key(parse_key("shift+alt+ctrl+x")) == "Ctrl+Alt+Shift+X"
    assert format_key(KeyRecord.named(NamedKey.PAGE_UP, Modifier.SUPER)) == "Super+PageUp"
    assert format_key(KeyRecord.named(NamedKey.F5)) == "F5"


def test_key_record_rejects_multi_character_keys() -> None:
    with pytest.raises(ValueError):
        KeyRecord("ab")
