"""Keybinding resolution and session naming for a terminal session switcher."""

__all__ = [
    "adapters",
    "config",
    "keymaps",
    "runtime",
    "screens",
    "sessions",
]

__version__ = "0.1.0"
