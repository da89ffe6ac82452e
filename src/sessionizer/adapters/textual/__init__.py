"""Textual integration for the session switcher."""

from .controller import (
    TextualSessionAdapter,
    TextualUIHooks,
    create_screen_manager,
    key_record_from_textual,
)

__all__ = [
    "TextualSessionAdapter",
    "TextualUIHooks",
    "create_screen_manager",
    "key_record_from_textual",
]
