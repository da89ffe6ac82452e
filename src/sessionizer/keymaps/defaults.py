"""Built-in bindings every table starts from."""

from __future__ import annotations

from typing import Optional

from .models import Action, KeyAction, KeyRecord, Modifier, NamedKey
from .table import BindingTable


def _ctrl(char: str) -> KeyRecord:
    return KeyRecord.char(char, Modifier.CTRL)


# Order matters: lookups are first-match, so the session list's Enter/Esc/
# Ctrl+c win over the new-session flow's when no screen filter is applied.
DEFAULT_BINDINGS: tuple[tuple[Action, KeyRecord], ...] = (
    (KeyAction.MOVE_UP, KeyRecord.named(NamedKey.UP)),
    (KeyAction.MOVE_UP, _ctrl("p")),
    (KeyAction.MOVE_DOWN, KeyRecord.named(NamedKey.DOWN)),
    (KeyAction.MOVE_DOWN, _ctrl("n")),
    (KeyAction.SELECT, KeyRecord.named(NamedKey.ENTER)),
    (KeyAction.DELETE_SESSION, KeyRecord.named(NamedKey.DELETE)),
    (KeyAction.CLEAR_SEARCH, KeyRecord.named(NamedKey.ESC)),
    (KeyAction.EXIT, _ctrl("c")),
    (KeyAction.BACKSPACE, KeyRecord.named(NamedKey.BACKSPACE)),
    (KeyAction.CONFIRM, KeyRecord.named(NamedKey.ENTER)),
    (KeyAction.CANCEL, KeyRecord.named(NamedKey.ESC)),
    (KeyAction.LAUNCH_FILEPICKER, _ctrl("f")),
    (KeyAction.CLEAR_FOLDER, _ctrl("c")),
    (KeyAction.CORRECT_NAME, _ctrl("r")),
)


# Actions each screen resolves keys against. Backspace edits text on both.
MAIN_SCREEN_ACTIONS: frozenset[Action] = frozenset(
    {
        KeyAction.MOVE_UP,
        KeyAction.MOVE_DOWN,
        KeyAction.SELECT,
        KeyAction.DELETE_SESSION,
        KeyAction.EXIT,
        KeyAction.CLEAR_SEARCH,
        KeyAction.BACKSPACE,
    }
)
NEW_SESSION_ACTIONS: frozenset[Action] = frozenset(
    {
        KeyAction.CONFIRM,
        KeyAction.CANCEL,
        KeyAction.LAUNCH_FILEPICKER,
        KeyAction.CLEAR_FOLDER,
        KeyAction.CORRECT_NAME,
        KeyAction.BACKSPACE,
    }
)
SCREEN_SCOPES: tuple[frozenset[Action], ...] = (MAIN_SCREEN_ACTIONS, NEW_SESSION_ACTIONS)


def scope_of(action: Action) -> Optional[frozenset[Action]]:
    """Every action that competes with ``action`` for the same keypress.

    ``None`` for an action no screen claims, meaning the whole table.
    """

    peers: frozenset[Action] = frozenset()
    for scope in SCREEN_SCOPES:
        if action in scope:
            peers |= scope
    return peers or None


def load_default_bindings(table: BindingTable) -> BindingTable:
    """Append the built-in bindings to ``table`` in their fixed order."""

    for action, key in DEFAULT_BINDINGS:
        table.add(action, key)
    return table


def new_with_defaults(*, logger_name: str | None = None) -> BindingTable:
    return load_default_bindings(BindingTable(logger_name=logger_name))


__all__ = [
    "DEFAULT_BINDINGS",
    "MAIN_SCREEN_ACTIONS",
    "NEW_SESSION_ACTIONS",
    "SCREEN_SCOPES",
    "load_default_bindings",
    "new_with_defaults",
    "scope_of",
]
