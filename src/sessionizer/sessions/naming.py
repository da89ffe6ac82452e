"""Pick unique session names following the ``base<sep>N`` convention."""

from __future__ import annotations

import uuid
from typing import Iterable, Optional

from sessionizer.runtime import telemetry

FIRST_INCREMENT = 2
MAX_INCREMENT = 1000
FALLBACK_TOKEN_LENGTH = 8


def is_incremented_name(name: str, base_name: str, separator: str) -> bool:
    """True when ``name`` is ``base_name + separator + <digits>``.

    The suffix must be a non-empty run of ASCII digits: no sign, no
    whitespace, nothing after the number.
    """

    prefix = f"{base_name}{separator}"
    if len(name) <= len(base_name) or not name.startswith(prefix):
        return False
    suffix = name[len(prefix):]
    return bool(suffix) and suffix.isascii() and suffix.isdigit()


def find_existing_session(
    base_name: str, separator: str, existing_names: Iterable[str]
) -> Optional[str]:
    """Return the session that already stands for ``base_name``, if any.

    An exact match wins over incremented variants; among variants the
    first one in ``existing_names`` order is returned.
    """

    names = list(existing_names)
    if base_name in names:
        return base_name
    for name in names:
        if is_incremented_name(name, base_name, separator):
            return name
    return None


def resolve_session_name(
    base_name: str,
    separator: str,
    existing_names: Iterable[str],
    *,
    logger_name: str | None = None,
) -> str:
    """Return ``base_name`` if free, else the first free ``base<sep>N``.

    Counters run from 2 to 1000 inclusive. When every candidate is taken
    the suffix becomes the first eight characters of a random UUID, which
    is only probabilistically unique: the result is not checked against
    ``existing_names``.
    """

    taken = set(existing_names)
    if base_name not in taken:
        return base_name

    for counter in range(FIRST_INCREMENT, MAX_INCREMENT + 1):
        candidate = f"{base_name}{separator}{counter}"
        if candidate not in taken:
            return candidate

    token = str(uuid.uuid4())[:FALLBACK_TOKEN_LENGTH]
    fallback = f"{base_name}{separator}{token}"
    telemetry.record_event(
        "sessions.name_exhausted",
        level="warning",
        data={"base": base_name, "fallback": fallback},
        logger_name=logger_name,
    )
    return fallback


__all__ = [
    "FALLBACK_TOKEN_LENGTH",
    "FIRST_INCREMENT",
    "MAX_INCREMENT",
    "find_existing_session",
    "is_incremented_name",
    "resolve_session_name",
]
