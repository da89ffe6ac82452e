from __future__ import annotations

from typing import Dict, List, Optional

import pytest

from sessionizer.config import build_configuration
from sessionizer.keymaps import KeyRecord, Modifier, NamedKey
from sessionizer.screens import (
    MainScreen,
    NewSessionScreen,
    ScreenBus,
    ScreenContext,
    ScreenManager,
    folder_session_name,
)
from sessionizer.sessions import InMemorySessionHost, SessionManager, SwitchSession


def make_manager(
    *names: str, options: Optional[Dict[str, str]] = None
) -> tuple[ScreenManager, InMemorySessionHost]:
    host = InMemorySessionHost(names=list(names))
    sessions = SessionManager(host)
    sessions.update_sessions(host.list_sessions())
    context = ScreenContext(
        config=build_configuration(options or {}),
        sessions=sessions,
        bus=ScreenBus(),
    )
    manager = ScreenManager(context)
    manager.register_screen(MainScreen)
    manager.register_screen(NewSessionScreen)
    return manager, host


def press(manager: ScreenManager, *tokens: str) -> None:
    for token in tokens:
        if token in NamedKey.__members__:
            manager.handle_key(KeyRecord.named(NamedKey[token]))
        elif token.startswith("^"):
            manager.handle_key(KeyRecord.char(token[1:], Modifier.CTRL))
        else:
            manager.handle_key(KeyRecord.char(token))


def main_screen(manager: ScreenManager) -> MainScreen:
    screen = manager.screen("main")
    assert isinstance(screen, MainScreen)
    return screen


def new_session_screen(manager: ScreenManager) -> NewSessionScreen:
    screen = manager.screen("new_session")
    assert isinstance(screen, NewSessionScreen)
    return screen


def test_first_registered_screen_is_active() -> None:
    manager, _ = make_manager()

    assert manager.active_screen is main_screen(manager)


def test_register_and_switch_errors() -> None:
    manager, _ = make_manager()

    with pytest.raises(ValueError):
        manager.register_screen(MainScreen)
    with pytest.raises(KeyError):
        manager.switch_screen("settings")


def test_typing_filters_sessions() -> None:
    manager, _ = make_manager("api", "web", "Webhooks")

    press(manager, "w", "e")

    assert main_screen(manager).matches() == ["web", "Webhooks"]
    press(manager, "BACKSPACE", "BACKSPACE")
    assert main_screen(manager).query == ""


def test_navigation_wraps_and_select_switches() -> None:
    manager, host = make_manager("api", "web", "docs")

    press(manager, "UP")
    assert main_screen(manager).selected == 2
    press(manager, "^n")
    assert main_screen(manager).selected == 0
    press(manager, "DOWN", "ENTER")

    assert host.switched == [SwitchSession("web")]


def test_escape_clears_search() -> None:
    manager, _ = make_manager("api")

    press(manager, "z", "ESC")

    assert main_screen(manager).query == ""


def test_exit_requests_shutdown() -> None:
    manager, _ = make_manager("api")

    result = manager.handle_key(KeyRecord.char("c", Modifier.CTRL))

    assert result.exit is True


def test_delete_requires_confirmation() -> None:
    manager, host = make_manager("api", "web")
    requested: List[object] = []
    manager.context.bus.subscribe("sessions.delete_requested", requested.append)

    press(manager, "DOWN", "DELETE")
    assert requested == ["web"]
    assert manager.context.sessions.pending_deletion == "web"

    press(manager, "x")
    assert host.killed == []
    assert main_screen(manager).query == ""

    press(manager, "y")
    assert host.killed == ["web"]
    assert main_screen(manager).matches() == ["api"]
    assert main_screen(manager).selected == 0


def test_delete_can_be_cancelled() -> None:
    manager, host = make_manager("api")

    press(manager, "DELETE", "ESC")

    assert manager.context.sessions.pending_deletion is None
    assert host.killed == []


def test_select_without_match_opens_new_session_seeded_with_query() -> None:
    manager, _ = make_manager("api")

    press(manager, "n", "e", "w", "ENTER")

    assert manager.active_screen is new_session_screen(manager)
    assert new_session_screen(manager).session_name == "new"


def test_new_session_creates_unique_name_with_layout() -> None:
    manager, host = make_manager(
        "api", options={"default_layout": "compact", "session_separator": "-"}
    )

    press(manager, "a", "p", "i", "x", "ENTER")
    press(manager, "BACKSPACE", "ENTER")

    assert host.switched == [SwitchSession("api-2", cwd=None, layout="compact")]
    assert manager.active_screen is main_screen(manager)


def test_new_session_from_folder_attaches_to_existing_variant() -> None:
    manager, host = make_manager("proj.3")
    manager.switch_screen("new_session")
    new_session_screen(manager).set_folder("/home/me/proj/")

    press(manager, "^r")
    assert new_session_screen(manager).session_name == "proj"
    new_session_screen(manager).session_name = ""
    press(manager, "ENTER")

    assert host.switched == [SwitchSession("proj.3")]


def test_new_session_from_folder_creates_when_missing() -> None:
    manager, host = make_manager()
    manager.switch_screen("new_session")
    screen = new_session_screen(manager)
    screen.set_folder("/srv/site")
    screen.session_name = ""

    press(manager, "ENTER")

    assert host.switched == [SwitchSession("site", cwd="/srv/site", layout=None)]


def test_new_session_screen_keys() -> None:
    manager, _ = make_manager()
    requests: List[object] = []
    manager.context.bus.subscribe("new_session.filepicker", requests.append)
    manager.switch_screen("new_session")
    screen = new_session_screen(manager)
    screen.set_folder("/tmp/box")

    press(manager, "^f")
    assert requests == ["/tmp/box"]

    press(manager, "^c")
    assert screen.folder is None

    result = manager.handle_key(KeyRecord.named(NamedKey.ESC))
    assert result.status == "cancelled"
    assert manager.active_screen is main_screen(manager)


def test_confirm_without_name_or_folder_stays_put() -> None:
    manager, host = make_manager()
    manager.switch_screen("new_session")

    result = manager.handle_key(KeyRecord.named(NamedKey.ENTER))

    assert result.status == "name_required"
    assert manager.active_screen is new_session_screen(manager)
    assert host.switched == []


def test_screens_use_configured_keys() -> None:
    manager, host = make_manager("api", "web", options={"move_down": "j"})

    press(manager, "j", "ENTER")

    assert host.switched == [SwitchSession("web")]


def test_folder_session_name() -> None:
    assert folder_session_name("/home/me/proj") == "proj"
    assert folder_session_name("/home/me/proj/") == "proj"
    assert folder_session_name("proj") == "proj"
    assert folder_session_name("/") == "/"


def test_exit_still_works_while_delete_is_pending() -> None:
    manager, host = make_manager("api")

    press(manager, "DELETE")
    result = manager.handle_key(KeyRecord.char("c", Modifier.CTRL))

    assert result.exit is True
    assert manager.context.sessions.pending_deletion is None
    assert host.killed == []


def test_restated_select_key_keeps_new_session_confirm() -> None:
    manager, host = make_manager("api", options={"select": "Enter"})

    press(manager, "w", "e", "b", "ENTER")
    assert manager.active_screen is new_session_screen(manager)
    press(manager, "ENTER")

    assert host.switched == [SwitchSession("web", cwd=None, layout=None)]
