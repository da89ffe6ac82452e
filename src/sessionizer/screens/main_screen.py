"""Session list with incremental search, switching and deletion."""

from __future__ import annotations

from typing import List, Optional

from sessionizer.keymaps import (
    MAIN_SCREEN_ACTIONS,
    Action,
    CharacterInput,
    KeyAction,
)
from sessionizer.sessions import SwitchSession

from .base_screen import Screen, ScreenContext, ScreenResult

NEW_SESSION_NAME_KEY = "new_session_name"


class MainScreen(Screen):
    name = "main"
    actions = MAIN_SCREEN_ACTIONS

    def __init__(self, context: ScreenContext) -> None:
        super().__init__(context)
        self.query = ""
        self.selected = 0

    def on_enter(self, previous: Optional[str]) -> None:
        del previous
        self._clamp_selection()

    def matches(self) -> List[str]:
        needle = self.query.lower()
        return [
            name
            for name in self.context.sessions.session_names()
            if needle in name.lower()
        ]

    def selected_session(self) -> Optional[str]:
        matches = self.matches()
        if not matches:
            return None
        return matches[min(self.selected, len(matches) - 1)]

    def handle_action(self, action: Action) -> ScreenResult:
        if self.context.sessions.pending_deletion is not None:
            return self._handle_pending_deletion(action)

        if isinstance(action, CharacterInput):
            self.query += action.char
            self.selected = 0
            return ScreenResult(consumed=True, status="search")
        if action is KeyAction.BACKSPACE:
            self.query = self.query[:-1]
            self.selected = 0
            return ScreenResult(consumed=True, status="search")
        if action is KeyAction.CLEAR_SEARCH:
            self.query = ""
            self.selected = 0
            return ScreenResult(consumed=True, status="search_cleared")
        if action is KeyAction.MOVE_UP:
            return self._move(-1)
        if action is KeyAction.MOVE_DOWN:
            return self._move(1)
        if action is KeyAction.SELECT:
            return self._select()
        if action is KeyAction.DELETE_SESSION:
            return self._request_deletion()
        if action is KeyAction.EXIT:
            return ScreenResult(consumed=True, status="exit", exit=True)
        return ScreenResult(consumed=False)

    def _move(self, step: int) -> ScreenResult:
        count = len(self.matches())
        if count:
            self.selected = (self.selected + step) % count
        return ScreenResult(consumed=True, status="move")

    def _select(self) -> ScreenResult:
        target = self.selected_session()
        if target is None:
            self.context.extras[NEW_SESSION_NAME_KEY] = self.query
            return ScreenResult(consumed=True, switch_to="new_session", status="new")
        self.context.sessions.execute(SwitchSession(target))
        return ScreenResult(consumed=True, status="switched", message=target)

    def _request_deletion(self) -> ScreenResult:
        target = self.selected_session()
        if target is None:
            return ScreenResult(consumed=True, status="nothing_selected")
        self.context.sessions.start_deletion(target)
        self.context.bus.emit("sessions.delete_requested", target)
        return ScreenResult(consumed=True, status="confirm_delete", message=target)

    def _handle_pending_deletion(self, action: Action) -> ScreenResult:
        sessions = self.context.sessions
        if action in (KeyAction.SELECT, CharacterInput("y")):
            name = sessions.confirm_deletion()
            self.context.bus.emit("sessions.deleted", name)
            # Drop the killed name locally until the host sends a fresh list.
            sessions.update_sessions(
                session for session in sessions.sessions if session.name != name
            )
            self._clamp_selection()
            return ScreenResult(consumed=True, status="deleted", message=name)
        if action in (KeyAction.CLEAR_SEARCH, CharacterInput("n")):
            sessions.cancel_deletion()
            return ScreenResult(consumed=True, status="delete_cancelled")
        if action is KeyAction.EXIT:
            sessions.cancel_deletion()
            return ScreenResult(consumed=True, status="exit", exit=True)
        return ScreenResult(
            consumed=True,
            status="confirm_delete",
            message=sessions.pending_deletion,
        )

    def _clamp_selection(self) -> None:
        count = len(self.matches())
        self.selected = min(self.selected, count - 1) if count else 0
