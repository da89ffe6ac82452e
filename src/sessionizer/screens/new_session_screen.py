"""Flow for creating a session from a folder and/or a typed name."""

from __future__ import annotations

import os
from typing import Optional

from sessionizer.keymaps import (
    NEW_SESSION_ACTIONS,
    Action,
    CharacterInput,
    KeyAction,
)
from sessionizer.runtime import telemetry
from sessionizer.sessions import SwitchSession

from .base_screen import Screen, ScreenContext, ScreenResult
from .main_screen import NEW_SESSION_NAME_KEY


def folder_session_name(folder: str) -> str:
    """Session name derived from a directory path (its last component)."""

    trimmed = folder.rstrip("/\\")
    return os.path.basename(trimmed) or trimmed or folder


class NewSessionScreen(Screen):
    name = "new_session"
    actions = NEW_SESSION_ACTIONS

    def __init__(self, context: ScreenContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("sessionizer.screens.new_session")
        self.session_name = ""
        self.folder: Optional[str] = None

    def on_enter(self, previous: Optional[str]) -> None:
        del previous
        seeded = self.context.extras.pop(NEW_SESSION_NAME_KEY, "")
        self.session_name = str(seeded or "")

    def on_exit(self, next_screen: Optional[str]) -> None:
        del next_screen
        self.session_name = ""
        self.folder = None

    def set_folder(self, folder: Optional[str]) -> None:
        """Called by the host once its file picker returns a directory."""

        self.folder = folder or None
        if self.folder and not self.session_name:
            self.session_name = folder_session_name(self.folder)

    def handle_action(self, action: Action) -> ScreenResult:
        if isinstance(action, CharacterInput):
            self.session_name += action.char
            return ScreenResult(consumed=True, status="edit")
        if action is KeyAction.BACKSPACE:
            self.session_name = self.session_name[:-1]
            return ScreenResult(consumed=True, status="edit")
        if action is KeyAction.CLEAR_FOLDER:
            self.folder = None
            return ScreenResult(consumed=True, status="folder_cleared")
        if action is KeyAction.CORRECT_NAME:
            if self.folder:
                self.session_name = folder_session_name(self.folder)
            return ScreenResult(consumed=True, status="name_corrected")
        if action is KeyAction.LAUNCH_FILEPICKER:
            self.context.bus.emit("new_session.filepicker", self.folder)
            return ScreenResult(consumed=True, status="filepicker")
        if action is KeyAction.CANCEL:
            return ScreenResult(consumed=True, switch_to="main", status="cancelled")
        if action is KeyAction.CONFIRM:
            return self._confirm()
        return ScreenResult(consumed=False)

    def _confirm(self) -> ScreenResult:
        config = self.context.config
        sessions = self.context.sessions
        separator = config.session_separator
        typed = self.session_name.strip()

        if typed:
            # A typed name always creates a new session, so it must be unique.
            target = sessions.generate_incremented_name(typed, separator)
        elif self.folder:
            base = folder_session_name(self.folder)
            existing = sessions.find_existing_session_for_directory(base, separator)
            if existing is not None:
                sessions.execute(SwitchSession(existing))
                return ScreenResult(
                    consumed=True, switch_to="main", status="attached", message=existing
                )
            target = base
        else:
            return ScreenResult(consumed=True, status="name_required")

        sessions.execute(
            SwitchSession(target, cwd=self.folder, layout=config.default_layout)
        )
        self.logger.info(f"created session {target}")
        return ScreenResult(
            consumed=True, switch_to="main", status="created", message=target
        )
