"""Session naming and host session commands."""

from .naming import (
    FALLBACK_TOKEN_LENGTH,
    MAX_INCREMENT,
    find_existing_session,
    is_incremented_name,
    resolve_session_name,
)
from .manager import (
    InMemorySessionHost,
    KillSession,
    SessionAction,
    SessionHost,
    SessionInfo,
    SessionLike,
    SessionManager,
    SwitchSession,
)

__all__ = [
    "FALLBACK_TOKEN_LENGTH",
    "InMemorySessionHost",
    "KillSession",
    "MAX_INCREMENT",
    "SessionAction",
    "SessionHost",
    "SessionInfo",
    "SessionLike",
    "SessionManager",
    "SwitchSession",
    "find_existing_session",
    "is_incremented_name",
    "resolve_session_name",
]
