"""Screen manager owning the active screen and dispatching key records."""

from __future__ import annotations

from typing import Dict, Optional, Type

from sessionizer.keymaps import KeyRecord, format_key
from sessionizer.runtime import telemetry

from .base_screen import Screen, ScreenContext, ScreenResult


class ScreenManager:
    """Owns the active screen, handles transitions, and dispatches keys."""

    def __init__(self, context: ScreenContext) -> None:
        self.context = context
        self._screens: Dict[str, Screen] = {}
        self._active: Optional[str] = None
        self.context.extras.setdefault("screen_manager", self)

    @property
    def active_screen(self) -> Optional[Screen]:
        if self._active is None:
            return None
        return self._screens.get(self._active)

    def screen(self, name: str) -> Screen:
        try:
            return self._screens[name]
        except KeyError as exc:
            raise KeyError(f"Unknown screen '{name}'") from exc

    def register_screen(
        self,
        screen_cls: Type[Screen],
        /,
        *screen_args: object,
        **screen_kwargs: object,
    ) -> Screen:
        screen = screen_cls(self.context, *screen_args, **screen_kwargs)
        if screen.name in self._screens:
            raise ValueError(f"Screen '{screen.name}' already registered")
        self._screens[screen.name] = screen
        if self._active is None:
            self._active = screen.name
            screen.on_enter(None)
        return screen

    def switch_screen(self, name: str) -> None:
        if name not in self._screens:
            raise KeyError(f"Unknown screen '{name}'")
        previous = self.active_screen
        if previous and previous.name == name:
            return
        if previous:
            previous.on_exit(name)
        self._active = name
        self._screens[name].on_enter(previous.name if previous else None)
        telemetry.record_event("screen.switch", data={"screen": name})

    def handle_key(self, key: KeyRecord) -> ScreenResult:
        screen = self.active_screen
        if screen is None:
            raise RuntimeError("No active screen registered")
        with telemetry.span(
            name=f"screen::{screen.name}",
            component=True,
            metadata={"key": format_key(key), "screen": screen.name},
        ) as handle:
            result = screen.handle_key(key)
            handle.add_metadata("status", result.status)
        if result.switch_to:
            self.switch_screen(result.switch_to)
        return result
