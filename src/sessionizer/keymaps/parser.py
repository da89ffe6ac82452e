"""Parser for textual key specs such as ``"Ctrl+Alt+p"`` or ``"Up Ctrl+p"``."""

from __future__ import annotations

from typing import Dict

from .models import KeyRecord, Modifier, NamedKey


class KeyParseError(ValueError):
    """Base class for malformed key specs."""


class EmptyKeySpecError(KeyParseError):
    def __init__(self) -> None:
        super().__init__("Empty key string")


class UnknownModifierError(KeyParseError):
    def __init__(self, text: str) -> None:
        super().__init__(f"Unknown modifier: {text}")
        self.text = text


class UnknownKeyError(KeyParseError):
    def __init__(self, text: str) -> None:
        super().__init__(f"Unknown key: {text}")
        self.text = text


class UnsupportedCharError(KeyParseError):
    def __init__(self, char: str) -> None:
        super().__init__(f"Non-ASCII character not supported: {char}")
        self.char = char


class NoKeysSpecifiedError(KeyParseError):
    def __init__(self) -> None:
        super().__init__("No keys specified")


# ``super`` exists on KeyRecord but is deliberately absent from the grammar.
_MODIFIERS: Dict[str, Modifier] = {
    "ctrl": Modifier.CTRL,
    "alt": Modifier.ALT,
    "shift": Modifier.SHIFT,
}

_NAMED_KEYS: Dict[str, NamedKey | str] = {
    "enter": NamedKey.ENTER,
    "esc": NamedKey.ESC,
    "escape": NamedKey.ESC,
    "backspace": NamedKey.BACKSPACE,
    "delete": NamedKey.DELETE,
    "del": NamedKey.DELETE,
    "up": NamedKey.UP,
    "down": NamedKey.DOWN,
    "left": NamedKey.LEFT,
    "right": NamedKey.RIGHT,
    "tab": NamedKey.TAB,
    "space": " ",
    "home": NamedKey.HOME,
    "end": NamedKey.END,
    "pageup": NamedKey.PAGE_UP,
    "pagedown": NamedKey.PAGE_DOWN,
    "insert": NamedKey.INSERT,
    **{f"f{n}": NamedKey[f"F{n}"] for n in range(1, 13)},
}


def _parse_base(text: str) -> NamedKey | str:
    lowered = text.lower()
    named = _NAMED_KEYS.get(lowered)
    if named is not None:
        return named
    if len(text) == 1:
        if not text.isascii():
            raise UnsupportedCharError(text)
        return lowered
    raise UnknownKeyError(text)


def parse_key(token: str) -> KeyRecord:
    """Parse a single ``+``-joined token into a ``KeyRecord``.

    Everything before the last ``+`` is a modifier. Matching is
    case-insensitive and character keys are folded to lowercase, so
    ``"Ctrl+P"`` and ``"ctrl+p"`` produce the same record.
    """

    spec = token.strip()
    if not spec:
        raise EmptyKeySpecError()

    *modifier_parts, base_part = spec.split("+")
    modifiers = set()
    for part in modifier_parts:
        modifier = _MODIFIERS.get(part.lower())
        if modifier is None:
            raise UnknownModifierError(part)
        modifiers.add(modifier)

    return KeyRecord(_parse_base(base_part), frozenset(modifiers))


def parse_keys(text: str) -> list[KeyRecord]:
    """Parse whitespace-separated tokens; the first bad token aborts."""

    records = [parse_key(token) for token in text.split()]
    if not records:
        raise NoKeysSpecifiedError()
    return records


__all__ = [
    "EmptyKeySpecError",
    "KeyParseError",
    "NoKeysSpecifiedError",
    "UnknownKeyError",
    "UnknownModifierError",
    "UnsupportedCharError",
    "parse_key",
    "parse_keys",
]
