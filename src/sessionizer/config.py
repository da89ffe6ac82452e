"""Build a ``Configuration`` from the host's string-keyed option map.

Configuration is total: malformed keybinds, conflicts and missing
essentials become ``Diagnostic`` values that are logged and kept on the
result, never raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Iterable, Mapping, Optional

from sessionizer.keymaps import (
    Action,
    BindingTable,
    KeyAction,
    KeyParseError,
    format_key,
    new_with_defaults,
    parse_keys,
    scope_of,
)
from sessionizer.runtime import telemetry

DEFAULT_SEPARATOR = "."

KEYBIND_OPTIONS: tuple[tuple[str, KeyAction], ...] = (
    ("move_up", KeyAction.MOVE_UP),
    ("move_down", KeyAction.MOVE_DOWN),
    ("select", KeyAction.SELECT),
    ("delete_session", KeyAction.DELETE_SESSION),
    ("exit", KeyAction.EXIT),
    ("clear_search", KeyAction.CLEAR_SEARCH),
    ("confirm", KeyAction.CONFIRM),
    ("cancel", KeyAction.CANCEL),
    ("launch_filepicker", KeyAction.LAUNCH_FILEPICKER),
    ("clear_folder", KeyAction.CLEAR_FOLDER),
    ("correct_name", KeyAction.CORRECT_NAME),
)

ESSENTIAL_ACTIONS: tuple[tuple[KeyAction, str], ...] = (
    (KeyAction.SELECT, "select"),
    (KeyAction.EXIT, "exit"),
)


class Diagnostic:
    """Non-fatal configuration problem."""

    level: ClassVar[str] = "warning"

    @property
    def message(self) -> str:  # pragma: no cover - overridden
        raise NotImplementedError

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class InvalidKeybind(Diagnostic):
    option: str
    reason: str

    @property
    def message(self) -> str:
        return f"Invalid keybind configuration for '{self.option}': {self.reason}"


@dataclass(frozen=True)
class NoKeysForAction(Diagnostic):
    option: str

    @property
    def message(self) -> str:
        return f"No keys specified for action '{self.option}'"


@dataclass(frozen=True)
class KeyConflict(Diagnostic):
    key: str
    existing: Action
    requested: Action

    @property
    def message(self) -> str:
        return (
            f"Key conflict: '{self.key}' is already bound to {self.existing}, "
            f"rebinding to {self.requested}"
        )


@dataclass(frozen=True)
class EssentialActionMissing(Diagnostic):
    level: ClassVar[str] = "error"

    action_name: str

    @property
    def message(self) -> str:
        return f"Essential action '{self.action_name}' has no keybinds configured"


@dataclass(frozen=True)
class Configuration:
    """Plugin settings, fixed for the life of the process."""

    bindings: BindingTable
    default_layout: Optional[str] = None
    session_separator: str = DEFAULT_SEPARATOR
    diagnostics: tuple[Diagnostic, ...] = ()

    @classmethod
    def from_mapping(
        cls, raw: Mapping[str, str], *, logger_name: str | None = None
    ) -> "Configuration":
        return build_configuration(raw, logger_name=logger_name)

    @classmethod
    def default(cls) -> "Configuration":
        return build_configuration({})


def apply_keybind_overrides(
    table: BindingTable, raw: Mapping[str, str]
) -> list[Diagnostic]:
    """Apply every recognised keybind option in ``raw`` to ``table``.

    A bad entry is skipped whole. A key is in conflict when the action it
    reaches first, among the actions sharing a screen with the one being
    configured, is a different action. The conflict is reported and the
    key moves: that earlier action keeps only its remaining keys. Keys
    shared across screens by default are not conflicts.
    """

    diagnostics: list[Diagnostic] = []
    for option, action in KEYBIND_OPTIONS:
        value = raw.get(option)
        if value is None:
            continue
        try:
            keys = parse_keys(value)
        except KeyParseError as exc:
            diagnostics.append(InvalidKeybind(option, str(exc)))
            continue
        if not keys:
            diagnostics.append(NoKeysForAction(option))
            continue

        peers = scope_of(action)
        for key in keys:
            existing = table.bound_action(key, within=peers)
            if existing is None or existing == action:
                continue
            diagnostics.append(KeyConflict(format_key(key), existing, action))
            table.discard(existing, key)

        table.set_keys(action, keys)
    return diagnostics


def validate_bindings(table: BindingTable) -> list[Diagnostic]:
    """Report essential actions left without any key."""

    return [
        EssentialActionMissing(name)
        for action, name in ESSENTIAL_ACTIONS
        if not table.keys_for(action)
    ]


def report_diagnostics(
    diagnostics: Iterable[Diagnostic], *, logger_name: str | None = None
) -> None:
    for diagnostic in diagnostics:
        telemetry.record_event(
            "config.diagnostic",
            level=diagnostic.level,
            data={"kind": type(diagnostic).__name__, "message": diagnostic.message},
            logger_name=logger_name,
        )


def build_configuration(
    raw: Mapping[str, str], *, logger_name: str | None = None
) -> Configuration:
    """Defaults, then overrides, then validation. Never raises on bad input."""

    with telemetry.span(
        "config::build",
        logger_name=logger_name,
        component="config",
        metadata={"options": len(raw)},
    ) as handle:
        table = new_with_defaults(logger_name=logger_name)
        diagnostics = apply_keybind_overrides(table, raw)
        diagnostics.extend(validate_bindings(table))
        report_diagnostics(diagnostics, logger_name=logger_name)
        handle.add_metadata("diagnostics", len(diagnostics))

        return Configuration(
            bindings=table,
            default_layout=raw.get("default_layout"),
            session_separator=raw.get("session_separator", DEFAULT_SEPARATOR),
            diagnostics=tuple(diagnostics),
        )


__all__ = [
    "Configuration",
    "DEFAULT_SEPARATOR",
    "Diagnostic",
    "ESSENTIAL_ACTIONS",
    "EssentialActionMissing",
    "InvalidKeybind",
    "KEYBIND_OPTIONS",
    "KeyConflict",
    "NoKeysForAction",
    "apply_keybind_overrides",
    "build_configuration",
    "report_diagnostics",
    "validate_bindings",
]
