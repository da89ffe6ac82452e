"""Base classes and shared plumbing for interactive screens."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, ClassVar, Dict, FrozenSet, Optional

from sessionizer.config import Configuration
from sessionizer.keymaps import Action, KeyRecord
from sessionizer.sessions import SessionManager


@dataclass(slots=True)
class ScreenResult:
    """Outcome of ``Screen.handle_key``."""

    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None
    exit: bool = False


@dataclass(slots=True)
class ScreenContext:
    """Services every screen can reach."""

    config: Configuration
    sessions: SessionManager
    bus: "ScreenBus"
    extras: Dict[str, object] = field(default_factory=dict)


class ScreenBus:
    """Minimal event bus letting screens notify the host."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


class Screen:
    """Base class for screens. Subclasses set ``name`` and ``actions``."""

    name: ClassVar[str] = "screen"
    actions: ClassVar[FrozenSet[Action]] = frozenset()

    def __init__(self, context: ScreenContext) -> None:
        self.context = context

    def on_enter(self, previous: Optional[str]) -> None:
        del previous

    def on_exit(self, next_screen: Optional[str]) -> None:
        del next_screen

    def resolve(self, key: KeyRecord) -> Optional[Action]:
        return self.context.config.bindings.lookup(key, within=self.actions)

    def handle_key(self, key: KeyRecord) -> ScreenResult:
        action = self.resolve(key)
        if action is None:
            return ScreenResult(consumed=False, status="unbound")
        return self.handle_action(action)

    def handle_action(
        self, action: Action
    ) -> ScreenResult:  # pragma: no cover - abstract override
        raise NotImplementedError
