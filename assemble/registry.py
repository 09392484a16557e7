"""
Ordered, append-only store of registered entries.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from .entries import ENTRY_TYPES, AssemblyEntry
from .errors import InvalidAssembly
from .keys import AssemblyKey


class Registry:
    """
    Append-only list of entries looked up by key.

    Keys need not be unique. ``lookup`` always returns the first entry
    registered under a key; later registrations with the same key are kept
    but can never be reached. Entries are never removed.

    Example:
        registry = Registry()
        registry.register(ValueEntry("hello", "world"))
        registry.lookup(AssemblyKey.of("hello")).value  # "world"
    """

    def __init__(self) -> None:
        self._entries: list[AssemblyEntry] = []
        # key -> position of the first entry registered under it
        self._first: dict[AssemblyKey, int] = {}

    def register(self, entry: AssemblyEntry) -> None:
        """Append ``entry``. Dependencies are not checked until resolution."""
        if not isinstance(entry, ENTRY_TYPES):
            raise InvalidAssembly(f"not an assembly entry: {entry!r}")
        self._first.setdefault(entry.key, len(self._entries))
        self._entries.append(entry)

    def lookup(self, key: Any) -> AssemblyEntry | None:
        """Return the first entry registered under ``key``, or None."""
        index = self._first.get(AssemblyKey.of(key))
        if index is None:
            return None
        return self._entries[index]

    def __contains__(self, key: object) -> bool:
        return self.lookup(key) is not None

    def __iter__(self) -> Iterator[AssemblyEntry]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)
