"""Session list bookkeeping and dispatch of host session commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Protocol, Sequence, Union, runtime_checkable

from sessionizer.runtime import telemetry

from .naming import find_existing_session, resolve_session_name


@runtime_checkable
class SessionLike(Protocol):
    @property
    def name(self) -> str: ...


@dataclass(frozen=True, slots=True)
class SessionInfo:
    """Minimal session record for hosts that have nothing richer."""

    name: str
    is_current: bool = False


class SessionHost(Protocol):
    """Commands the host multiplexer performs on our behalf.

    Calls are fire-and-forget: the manager neither awaits nor retries them.
    """

    def switch_session(
        self, name: str, *, cwd: Optional[str] = None, layout: Optional[str] = None
    ) -> None: ...

    def kill_sessions(self, names: Sequence[str]) -> None: ...


@dataclass(frozen=True, slots=True)
class SwitchSession:
    name: str
    cwd: Optional[str] = None
    layout: Optional[str] = None


@dataclass(frozen=True, slots=True)
class KillSession:
    name: str


SessionAction = Union[SwitchSession, KillSession]


@dataclass
class InMemorySessionHost:
    """Host double that keeps a live name list and records every command."""

    names: list[str] = field(default_factory=list)
    switched: list[SwitchSession] = field(default_factory=list)
    killed: list[str] = field(default_factory=list)

    def switch_session(
        self, name: str, *, cwd: Optional[str] = None, layout: Optional[str] = None
    ) -> None:
        self.switched.append(SwitchSession(name, cwd=cwd, layout=layout))
        if name not in self.names:
            self.names.append(name)

    def kill_sessions(self, names: Sequence[str]) -> None:
        for name in names:
            self.killed.append(name)
            if name in self.names:
                self.names.remove(name)

    def list_sessions(self) -> list[SessionInfo]:
        return [SessionInfo(name) for name in self.names]


class SessionManager:
    """Tracks known sessions and the deletion awaiting confirmation."""

    def __init__(self, host: SessionHost, *, logger_name: str | None = None) -> None:
        self.host = host
        self._sessions: list[SessionLike] = []
        self._pending_deletion: Optional[str] = None
        self._logger_name = logger_name

    @property
    def sessions(self) -> tuple[SessionLike, ...]:
        return tuple(self._sessions)

    @property
    def pending_deletion(self) -> Optional[str]:
        return self._pending_deletion

    def update_sessions(self, sessions: Iterable[SessionLike]) -> None:
        self._sessions = list(sessions)

    def session_names(self) -> list[str]:
        return [session.name for session in self._sessions]

    def execute(self, action: SessionAction) -> None:
        if isinstance(action, SwitchSession):
            telemetry.record_event(
                "sessions.switch",
                data={"name": action.name, "cwd": action.cwd or ""},
                logger_name=self._logger_name,
            )
            self.host.switch_session(action.name, cwd=action.cwd, layout=action.layout)
        elif isinstance(action, KillSession):
            telemetry.record_event(
                "sessions.kill",
                data={"name": action.name},
                logger_name=self._logger_name,
            )
            self.host.kill_sessions([action.name])
        else:
            raise TypeError(f"Unsupported session action: {action!r}")

    def start_deletion(self, name: str) -> None:
        self._pending_deletion = name

    def confirm_deletion(self) -> Optional[str]:
        """Kill the pending session, if any, and return its name."""

        name = self._pending_deletion
        self._pending_deletion = None
        if name is not None:
            self.execute(KillSession(name))
        return name

    def cancel_deletion(self) -> None:
        self._pending_deletion = None

    def find_existing_session_for_directory(
        self, base_name: str, separator: str
    ) -> Optional[str]:
        return find_existing_session(base_name, separator, self.session_names())

    def generate_incremented_name(self, base_name: str, separator: str) -> str:
        return resolve_session_name(
            base_name, separator, self.session_names(), logger_name=self._logger_name
        )


__all__ = [
    "InMemorySessionHost",
    "KillSession",
    "SessionAction",
    "SessionHost",
    "SessionInfo",
    "SessionLike",
    "SessionManager",
    "SwitchSession",
]
