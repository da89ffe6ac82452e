"""Textual demo app driving the sessionizer over an in-memory host."""

from __future__ import annotations

import argparse
import os
from typing import Dict, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use sessionizer.adapters.textual.app"
    ) from exc

from sessionizer.config import KEYBIND_OPTIONS, build_configuration
from sessionizer.keymaps import KeyAction
from sessionizer.runtime import telemetry
from sessionizer.sessions import InMemorySessionHost

from .controller import TextualSessionAdapter, TextualUIHooks, create_screen_manager


class SessionizerApp(App[None]):
    """Minimal Textual UI embedding the session switcher."""

    CSS = """
	#session-list {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
	}

	#prompt-line, #status-line {
		height: 1;
		padding: 0 1;
	}

	#status-line {
		background: $surface-darken-1;
	}
	"""

    def __init__(
        self,
        *,
        options: Optional[Dict[str, str]] = None,
        sessions: Sequence[str] = (),
    ) -> None:
        super().__init__()
        self.config = build_configuration(options or {})
        self.host = InMemorySessionHost(names=list(sessions))
        self.adapter: TextualSessionAdapter | None = None
        self._list_widget: Static | None = None
        self._prompt_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        self._list_widget = Static("", id="session-list")
        self._prompt_widget = Static("", id="prompt-line")
        self._status_widget = Static(self._help_text(), id="status-line")
        yield self._list_widget
        yield self._prompt_widget
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_sessions=self._update_sessions,
            update_status=self._update_status,
            update_prompt=self._update_prompt,
            handle_event=self._handle_event,
            request_exit=self.exit,
        )
        self.adapter = TextualSessionAdapter(
            create_screen_manager(self.config, self.host), hooks
        )
        self.adapter.refresh_sessions(self.host.list_sessions())

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        result = self.adapter.handle_textual_key(event.key, character=event.character)
        if result is not None and result.status in {"created", "attached", "deleted"}:
            self.adapter.refresh_sessions(self.host.list_sessions())
        event.stop()

    def _help_text(self) -> str:
        bindings = self.config.bindings
        return "  ".join(
            f"{bindings.format_for_display(action)} {action.value}"
            for action in (
                KeyAction.SELECT,
                KeyAction.DELETE_SESSION,
                KeyAction.CLEAR_SEARCH,
                KeyAction.EXIT,
            )
        )

    def _update_sessions(self, names: Sequence[str], selected: int, query: str) -> None:
        if not self._list_widget:
            return
        lines = [f"> {query}", ""]
        for index, name in enumerate(names):
            marker = "*" if index == selected else " "
            lines.append(f"{marker} {name}")
        self._list_widget.update("\n".join(lines))

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _update_prompt(self, prompt: str) -> None:
        if self._prompt_widget:
            self._prompt_widget.update(prompt)

    def _handle_event(self, name: str, payload: object | None) -> None:
        # No real file picker here: the working directory stands in for it.
        if name == "new_session.filepicker" and self.adapter:
            self.adapter.set_folder(os.getcwd())


def _parse_bind(value: str) -> tuple[str, str]:
    option, sep, keys = value.partition("=")
    known = {name for name, _ in KEYBIND_OPTIONS}
    if not sep or option not in known:
        raise argparse.ArgumentTypeError(
            f"expected OPTION=KEYS with OPTION one of {sorted(known)}"
        )
    return option, keys


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the sessionizer Textual demo.")
    parser.add_argument(
        "--separator",
        default=os.environ.get("SESSIONIZER_SEPARATOR"),
        help="Separator between a session name and its counter (default: '.')",
    )
    parser.add_argument("--layout", default=None, help="Default layout for new sessions")
    parser.add_argument(
        "--session",
        action="append",
        default=[],
        help="Seed the demo host with a session name (repeatable)",
    )
    parser.add_argument(
        "--bind",
        action="append",
        type=_parse_bind,
        default=[],
        metavar="OPTION=KEYS",
        help="Override a keybind, e.g. --bind 'move_up=k Up' (repeatable)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if not os.getenv(f"{telemetry.ENV_PREFIX}LOG_PRESET"):
        # Textual owns the terminal, so log to a file only.
        telemetry.configure(preset="quiet")
    options: Dict[str, str] = dict(args.bind)
    if args.separator is not None:
        options["session_separator"] = args.separator
    if args.layout:
        options["default_layout"] = args.layout
    SessionizerApp(options=options, sessions=args.session).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
