"""Bridges Textual key events and screen results to UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Sequence

from sessionizer.config import Configuration
from sessionizer.keymaps import KeyRecord, Modifier, NamedKey
from sessionizer.screens import (
    MainScreen,
    NewSessionScreen,
    ScreenBus,
    ScreenContext,
    ScreenManager,
    ScreenResult,
)
from sessionizer.sessions import SessionHost, SessionLike, SessionManager

_TEXTUAL_MODIFIERS: Dict[str, Modifier] = {
    "ctrl": Modifier.CTRL,
    "alt": Modifier.ALT,
    "meta": Modifier.ALT,
    "shift": Modifier.SHIFT,
    "super": Modifier.SUPER,
}

_TEXTUAL_NAMED: Dict[str, NamedKey] = {
    "enter": NamedKey.ENTER,
    "return": NamedKey.ENTER,
    "escape": NamedKey.ESC,
    "backspace": NamedKey.BACKSPACE,
    "delete": NamedKey.DELETE,
    "up": NamedKey.UP,
    "down": NamedKey.DOWN,
    "left": NamedKey.LEFT,
    "right": NamedKey.RIGHT,
    "tab": NamedKey.TAB,
    "home": NamedKey.HOME,
    "end": NamedKey.END,
    "pageup": NamedKey.PAGE_UP,
    "pagedown": NamedKey.PAGE_DOWN,
    "insert": NamedKey.INSERT,
    **{f"f{n}": NamedKey[f"F{n}"] for n in range(1, 13)},
}


def key_record_from_textual(
    key: str, character: Optional[str] = None
) -> Optional[KeyRecord]:
    """Translate a Textual key name (``"ctrl+p"``, ``"pageup"``) to a record.

    Punctuation arrives under descriptive names (``"full_stop"``), so the
    event's ``character`` is used when the name itself is not one
    character long. Returns ``None`` for keys we have no model for.
    """

    *modifier_names, base = key.split("+")
    modifiers = set()
    for name in modifier_names:
        modifier = _TEXTUAL_MODIFIERS.get(name.lower())
        if modifier is None:
            return None
        modifiers.add(modifier)

    named = _TEXTUAL_NAMED.get(base.lower())
    if named is not None:
        return KeyRecord(named, frozenset(modifiers))
    if base == "space":
        return KeyRecord(" ", frozenset(modifiers))
    if len(base) == 1:
        return KeyRecord(base, frozenset(modifiers))
    if character and len(character) == 1 and character.isprintable():
        return KeyRecord(character, frozenset(modifiers))
    return None


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks the adapter invokes to update Textual widgets."""

    # (visible session names, selected index, search query)
    update_sessions: Callable[[Sequence[str], int, str], None]
    update_status: Callable[[str], None] = _noop
    update_prompt: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    request_exit: Callable[[], None] = _noop
    log: Callable[[str], None] = _noop


def create_screen_manager(config: Configuration, host: SessionHost) -> ScreenManager:
    """Build a ScreenManager with both screens registered, main first."""

    context = ScreenContext(
        config=config,
        sessions=SessionManager(host),
        bus=ScreenBus(),
        extras={},
    )
    manager = ScreenManager(context)
    manager.register_screen(MainScreen)
    manager.register_screen(NewSessionScreen)
    return manager


class TextualSessionAdapter:
    """Feeds Textual keys into a ScreenManager and mirrors state to the UI."""

    EVENTS = (
        "sessions.delete_requested",
        "sessions.deleted",
        "new_session.filepicker",
    )

    def __init__(self, manager: ScreenManager, hooks: TextualUIHooks) -> None:
        self.manager = manager
        self.hooks = hooks
        for event in self.EVENTS:
            manager.context.bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )
        self._refresh()

    def refresh_sessions(self, sessions: Iterable[SessionLike]) -> None:
        """Adopt a fresh session list from the host."""

        self.manager.context.sessions.update_sessions(sessions)
        self._refresh()

    def set_folder(self, folder: Optional[str]) -> None:
        screen = self.manager.screen(NewSessionScreen.name)
        assert isinstance(screen, NewSessionScreen)
        screen.set_folder(folder)
        self._refresh()

    def handle_textual_key(
        self, key: str, *, character: Optional[str] = None
    ) -> Optional[ScreenResult]:
        record = key_record_from_textual(key, character)
        if record is None:
            self.hooks.log(f"key -> {key!r} ignored")
            return None

        self.hooks.log(f"key -> {record.label} screen={self._screen_name()}")
        result = self.manager.handle_key(record)
        self.hooks.log(
            f"result <- status={result.status} consumed={result.consumed} "
            f"switch_to={result.switch_to} message={result.message}"
        )

        status = result.message or result.status
        if status:
            self.hooks.update_status(status)
        self._refresh()
        if result.exit:
            self.hooks.request_exit()
        return result

    def _handle_event(self, name: str, payload: object | None) -> None:
        self.hooks.log(f"event -> {name} payload={payload!r}")
        self.hooks.handle_event(name, payload)
        if name == "sessions.delete_requested":
            self.hooks.update_status(f"Delete {payload}? (y/n)")

    def _screen_name(self) -> str:
        screen = self.manager.active_screen
        return screen.name if screen else "?"

    def _refresh(self) -> None:
        screen = self.manager.active_screen
        if isinstance(screen, MainScreen):
            self.hooks.update_sessions(screen.matches(), screen.selected, screen.query)
            self.hooks.update_prompt("")
        elif isinstance(screen, NewSessionScreen):
            folder = screen.folder or "-"
            self.hooks.update_prompt(f"name: {screen.session_name}  folder: {folder}")


__all__ = [
    "TextualSessionAdapter",
    "TextualUIHooks",
    "create_screen_manager",
    "key_record_from_textual",
]
