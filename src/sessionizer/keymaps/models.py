"""Key records and the closed set of actions they resolve to."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Union


class NamedKey(Enum):
    """Non-character base keys. Values double as display labels."""

    ENTER = "Enter"
    ESC = "Esc"
    BACKSPACE = "Backspace"
    DELETE = "Delete"
    UP = "Up"
    DOWN = "Down"
    LEFT = "Left"
    RIGHT = "Right"
    TAB = "Tab"
    HOME = "Home"
    END = "End"
    PAGE_UP = "PageUp"
    PAGE_DOWN = "PageDown"
    INSERT = "Insert"
    F1 = "F1"
    F2 = "F2"
    F3 = "F3"
    F4 = "F4"
    F5 = "F5"
    F6 = "F6"
    F7 = "F7"
    F8 = "F8"
    F9 = "F9"
    F10 = "F10"
    F11 = "F11"
    F12 = "F12"


class Modifier(Enum):
    CTRL = "Ctrl"
    ALT = "Alt"
    SHIFT = "Shift"
    SUPER = "Super"


# Canonical rendering order.
MODIFIER_ORDER: tuple[Modifier, ...] = (
    Modifier.CTRL,
    Modifier.ALT,
    Modifier.SHIFT,
    Modifier.SUPER,
)

BaseKey = Union[NamedKey, str]


@dataclass(frozen=True, slots=True)
class KeyRecord:
    """A base key plus the modifiers held with it.

    Character keys carry a one-character string; everything else is a
    ``NamedKey``. Equality is structural, so records work as dict keys.
    """

    key: BaseKey
    modifiers: frozenset[Modifier] = frozenset()

    def __post_init__(self) -> None:
        if isinstance(self.key, str) and len(self.key) != 1:
            raise ValueError("character keys must be exactly one character")
        object.__setattr__(self, "modifiers", frozenset(self.modifiers))

    @classmethod
    def char(cls, char: str, *modifiers: Modifier) -> "KeyRecord":
        return cls(char, frozenset(modifiers))

    @classmethod
    def named(cls, key: NamedKey, *modifiers: Modifier) -> "KeyRecord":
        return cls(key, frozenset(modifiers))

    @property
    def is_char(self) -> bool:
        return isinstance(self.key, str)

    @property
    def ordered_modifiers(self) -> tuple[Modifier, ...]:
        return tuple(m for m in MODIFIER_ORDER if m in self.modifiers)

    @property
    def label(self) -> str:
        return format_key(self)


_ARROWS = {
    NamedKey.UP: "↑",
    NamedKey.DOWN: "↓",
    NamedKey.LEFT: "←",
    NamedKey.RIGHT: "→",
}


def format_key(record: KeyRecord) -> str:
    """Render ``record`` for help text, e.g. ``Ctrl+P`` or ``↑``.

    Named keys without a glyph render as their value, so function keys
    read ``F5`` rather than the enum-style ``F(5)``. The parser accepts
    that form back.
    """

    parts = [modifier.value for modifier in record.ordered_modifiers]
    if isinstance(record.key, str):
        parts.append(record.key.upper())
    else:
        parts.append(_ARROWS.get(record.key, record.key.value))
    return "+".join(parts)


def format_keys(records: Iterable[KeyRecord]) -> str:
    rendered = [format_key(record) for record in records]
    return "/".join(rendered) if rendered else "None"


class KeyAction(Enum):
    """Named actions. Values are the names used in diagnostics."""

    # session list
    MOVE_UP = "MoveUp"
    MOVE_DOWN = "MoveDown"
    SELECT = "Select"
    DELETE_SESSION = "DeleteSession"
    EXIT = "Exit"
    CLEAR_SEARCH = "ClearSearch"

    # new session flow
    CONFIRM = "Confirm"
    CANCEL = "Cancel"
    LAUNCH_FILEPICKER = "LaunchFilepicker"
    CLEAR_FOLDER = "ClearFolder"
    CORRECT_NAME = "CorrectName"

    BACKSPACE = "Backspace"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class CharacterInput:
    """Fallback action for an unbound, unmodified character key."""

    char: str

    def __str__(self) -> str:
        return f"CharacterInput({self.char!r})"


Action = Union[KeyAction, CharacterInput]


__all__ = [
    "Action",
    "BaseKey",
    "CharacterInput",
    "KeyAction",
    "KeyRecord",
    "MODIFIER_ORDER",
    "Modifier",
    "NamedKey",
    "format_key",
    "format_keys",
]
