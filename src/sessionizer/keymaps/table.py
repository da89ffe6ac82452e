"""Ordered key→action binding table with a derived action index."""

from __future__ import annotations

from typing import Collection, Dict, Iterable, Iterator, Optional

from sessionizer.runtime.telemetry import span

from .models import Action, CharacterInput, KeyRecord, format_key, format_keys


class BindingTable:
    """Owns ``(KeyRecord, Action)`` pairs in insertion order.

    Lookups are first-match over the ordered pairs. ``_by_action`` is
    always the grouping of ``_bindings`` by action; every mutation goes
    through ``_append`` or ``_rebuild_index`` to keep the two in step.
    The table itself does not refuse a key bound to two actions; the
    configuration layer reports that.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._bindings: list[tuple[KeyRecord, Action]] = []
        self._by_action: Dict[Action, list[KeyRecord]] = {}
        self._logger_name = logger_name

    @classmethod
    def with_defaults(cls, *, logger_name: str | None = None) -> "BindingTable":
        from .defaults import load_default_bindings

        table = cls(logger_name=logger_name)
        load_default_bindings(table)
        return table

    def __len__(self) -> int:
        return len(self._bindings)

    def __iter__(self) -> Iterator[tuple[KeyRecord, Action]]:
        return iter(list(self._bindings))

    def add(self, action: Action, key: KeyRecord) -> None:
        with span(
            "bindings::add",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"action": action, "key": format_key(key)},
        ):
            self._append(action, key)

    def clear(self, action: Action) -> None:
        with span(
            "bindings::clear",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"action": action},
        ) as handle:
            before = len(self._bindings)
            self._bindings = [pair for pair in self._bindings if pair[1] != action]
            self._by_action.pop(action, None)
            handle.add_metadata("removed", before - len(self._bindings))

    def set_keys(self, action: Action, keys: Iterable[KeyRecord]) -> None:
        keys = list(keys)
        with span(
            "bindings::set_keys",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"action": action, "keys": format_keys(keys)},
        ):
            self.clear(action)
            for key in keys:
                self._append(action, key)

    def discard(self, action: Action, key: KeyRecord) -> bool:
        """Drop ``action``'s bindings of ``key``; other actions keep theirs."""

        with span(
            "bindings::discard",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"action": action, "key": format_key(key)},
        ) as handle:
            before = len(self._bindings)
            self._bindings = [
                pair for pair in self._bindings if pair != (key, action)
            ]
            removed = before - len(self._bindings)
            if removed:
                self._rebuild_index()
            handle.add_metadata("removed", removed)
            return bool(removed)

    def bound_action(
        self, key: KeyRecord, *, within: Optional[Collection[Action]] = None
    ) -> Optional[Action]:
        """First explicit binding for ``key``; no character fallback."""

        for bound_key, action in self._bindings:
            if bound_key != key:
                continue
            if within is not None and action not in within:
                continue
            return action
        return None

    def lookup(
        self, key: KeyRecord, *, within: Optional[Collection[Action]] = None
    ) -> Optional[Action]:
        """Resolve a keypress.

        Explicit bindings are scanned first. Only when none matches does an
        unmodified character key (other than a newline) fall back to
        ``CharacterInput``. ``within`` limits the scan to a subset of
        actions, which lets each screen resolve against its own actions.
        """

        with span(
            "bindings::lookup",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"key": format_key(key)},
        ) as handle:
            action = self.bound_action(key, within=within)
            if action is not None:
                handle.add_metadata("status", "match")
                return action

            if isinstance(key.key, str) and not key.modifiers and key.key != "\n":
                handle.add_metadata("status", "character")
                return CharacterInput(key.key)

            handle.add_metadata("status", "miss")
            return None

    def keys_for(self, action: Action) -> list[KeyRecord]:
        return list(self._by_action.get(action, ()))

    def format_for_display(self, action: Action) -> str:
        return format_keys(self.keys_for(action))

    def _append(self, action: Action, key: KeyRecord) -> None:
        self._bindings.append((key, action))
        self._by_action.setdefault(action, []).append(key)

    def _rebuild_index(self) -> None:
        index: Dict[Action, list[KeyRecord]] = {}
        for key, action in self._bindings:
            index.setdefault(action, []).append(key)
        self._by_action = index


__all__ = ["BindingTable"]
