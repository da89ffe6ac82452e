from __future__ import annotations

import pytest

from sessionizer.sessions import (
    FALLBACK_TOKEN_LENGTH,
    InMemorySessionHost,
    KillSession,
    MAX_INCREMENT,
    SessionInfo,
    SessionManager,
    SwitchSession,
    find_existing_session,
    is_incremented_name,
    resolve_session_name,
)


def make_manager(*names: str) -> tuple[SessionManager, InMemorySessionHost]:
    host = InMemorySessionHost(names=list(names))
    manager = SessionManager(host)
    manager.update_sessions(host.list_sessions())
    return manager, host


def test_resolve_returns_free_base_name() -> None:
    assert resolve_session_name("work", ".", set()) == "work"
    assert resolve_session_name("work", ".", {"work.2"}) == "work"


def test_resolve_increments_from_two() -> None:
    assert resolve_session_name("work", ".", {"work"}) == "work.2"
    assert resolve_session_name("work", ".", {"work", "work.2"}) == "work.3"
    assert resolve_session_name("work", ".", ["work", "work.3"]) == "work.2"


def test_resolve_with_custom_and_empty_separator() -> None:
    assert resolve_session_name("api", "-", {"api"}) == "api-2"
    assert resolve_session_name("api", "", {"api", "api2"}) == "api3"


def test_resolve_falls_back_to_random_token_when_exhausted() -> None:
    existing = {"work"} | {f"work.{n}" for n in range(2, MAX_INCREMENT + 1)}

    name = resolve_session_name("work", ".", existing)

    assert name.startswith("work.")
    token = name[len("work."):]
    assert len(token) == FALLBACK_TOKEN_LENGTH
    assert not token.isdigit() or name not in existing


def test_resolve_uses_last_counter_before_fallback() -> None:
    existing = {"work"} | {f"work.{n}" for n in range(2, MAX_INCREMENT)}

    assert resolve_session_name("work", ".", existing) == f"work.{MAX_INCREMENT}"


def test_find_existing_prefers_exact_match() -> None:
    assert find_existing_session("work", ".", ["work.7", "work"]) == "work"


def test_find_existing_accepts_numeric_variants_only() -> None:
    assert find_existing_session("work", ".", ["work.7"]) == "work.7"
    assert find_existing_session("work", ".", ["work.abc"]) is None
    assert find_existing_session("work", ".", ["workshop", "work.2x"]) is None
    assert find_existing_session("work", ".", []) is None


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("work.2", True),
        ("work.0", True),
        ("work.", False),
        ("work.-2", False),
        ("work.+2", False),
        ("work.2 ", False),
        ("work.²", False),
        ("work-2", False),
        ("work", False),
        ("other.2", False),
    ],
)
def test_is_incremented_name(name: str, expected: bool) -> None:
    assert is_incremented_name(name, "work", ".") is expected


def test_is_incremented_name_with_empty_separator() -> None:
    assert is_incremented_name("work12", "work", "") is True
    assert is_incremented_name("work", "work", "") is False


def test_manager_dispatches_switch_and_kill() -> None:
    manager, host = make_manager("alpha", "beta")

    manager.execute(SwitchSession("alpha"))
    manager.execute(KillSession("beta"))

    assert host.switched == [SwitchSession("alpha")]
    assert host.killed == ["beta"]
    assert host.names == ["alpha"]


def test_manager_rejects_unknown_actions() -> None:
    manager, _ = make_manager()

    with pytest.raises(TypeError):
        manager.execute("alpha")  # type: ignore[arg-type]


def test_deletion_confirm_kills_pending_session() -> None:
    manager, host = make_manager("alpha", "beta")

    manager.start_deletion("beta")
    assert manager.pending_deletion == "beta"

    assert manager.confirm_deletion() == "beta"
    assert manager.pending_deletion is None
    assert host.killed == ["beta"]


def test_deletion_cancel_and_empty_confirm_do_nothing() -> None:
    manager, host = make_manager("alpha")

    manager.start_deletion("alpha")
    manager.cancel_deletion()

    assert manager.pending_deletion is None
    assert manager.confirm_deletion() is None
    assert host.killed == []


def test_manager_naming_uses_known_sessions() -> None:
    manager, _ = make_manager("proj", "proj.2", "proj.5")

    assert manager.find_existing_session_for_directory("proj", ".") == "proj"
    assert manager.generate_incremented_name("proj", ".") == "proj.3"

    manager.update_sessions([SessionInfo("proj.5")])
    assert manager.find_existing_session_for_directory("proj", ".") == "proj.5"
    assert manager.generate_incremented_name("proj", ".") == "proj"
