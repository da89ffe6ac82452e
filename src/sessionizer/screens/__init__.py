"""Interactive screens and the manager that switches between them."""

from .base_screen import Screen, ScreenBus, ScreenContext, ScreenResult
from .main_screen import MainScreen
from .new_session_screen import NewSessionScreen, folder_session_name
from .screen_manager import ScreenManager

__all__ = [
    "MainScreen",
    "NewSessionScreen",
    "Screen",
    "ScreenBus",
    "ScreenContext",
    "ScreenManager",
    "ScreenResult",
    "folder_session_name",
]
