"""Key spec parsing, binding tables and default bindings."""

from .models import (
    Action,
    CharacterInput,
    KeyAction,
    KeyRecord,
    Modifier,
    NamedKey,
    format_key,
    format_keys,
)
from .parser import (
    EmptyKeySpecError,
    KeyParseError,
    NoKeysSpecifiedError,
    UnknownKeyError,
    UnknownModifierError,
    UnsupportedCharError,
    parse_key,
    parse_keys,
)
from .table import BindingTable
from .defaults import (
    DEFAULT_BINDINGS,
    MAIN_SCREEN_ACTIONS,
    NEW_SESSION_ACTIONS,
    SCREEN_SCOPES,
    load_default_bindings,
    new_with_defaults,
    scope_of,
)

__all__ = [
    "Action",
    "BindingTable",
    "CharacterInput",
    "DEFAULT_BINDINGS",
    "EmptyKeySpecError",
    "KeyAction",
    "KeyParseError",
    "KeyRecord",
    "MAIN_SCREEN_ACTIONS",
    "Modifier",
    "NEW_SESSION_ACTIONS",
    "NamedKey",
    "NoKeysSpecifiedError",
    "UnknownKeyError",
    "UnknownModifierError",
    "SCREEN_SCOPES",
    "UnsupportedCharError",
    "format_key",
    "format_keys",
    "load_default_bindings",
    "new_with_defaults",
    "parse_key",
    "parse_keys",
    "scope_of",
]
