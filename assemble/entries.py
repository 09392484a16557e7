"""
Registered entries: the three shapes the container knows how to assemble.

``AssemblyEntry`` is a closed union. The resolver dispatches on the concrete
class and treats anything else as invalid.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Union

from .errors import InvalidAssembly
from .keys import AssemblyKey, KeyKind, as_keys


@dataclass(frozen=True)
class TypeEntry:
    """A class constructed with its resolved dependencies as positional args."""

    cls: type
    is_singleton: bool = True
    dependencies: tuple[AssemblyKey, ...] = field(default=())

    def __post_init__(self) -> None:
        if not isinstance(self.cls, type):
            raise InvalidAssembly(f"TypeEntry expects a class, got {self.cls!r}")
        object.__setattr__(self, "is_singleton", self.is_singleton is not False)
        object.__setattr__(self, "dependencies", as_keys(self.dependencies))

    @property
    def key(self) -> AssemblyKey:
        return AssemblyKey(KeyKind.TYPE, self.cls)


@dataclass(frozen=True)
class FunctionEntry:
    """A function called with its resolved dependencies on every resolution."""

    function: Callable[..., Any]
    dependencies: tuple[AssemblyKey, ...] = field(default=())

    def __post_init__(self) -> None:
        if isinstance(self.function, type) or not callable(self.function):
            raise InvalidAssembly(
                f"FunctionEntry expects a non-class callable, got {self.function!r}"
            )
        object.__setattr__(self, "dependencies", as_keys(self.dependencies))

    @property
    def key(self) -> AssemblyKey:
        return AssemblyKey(KeyKind.FUNCTION, self.function)


@dataclass(frozen=True)
class ValueEntry:
    """A literal value stored under a string token."""

    token: str
    value: Any

    def __post_init__(self) -> None:
        if not isinstance(self.token, str):
            raise InvalidAssembly(f"ValueEntry token must be a string, got {self.token!r}")

    @property
    def key(self) -> AssemblyKey:
        return AssemblyKey(KeyKind.TOKEN, self.token)


AssemblyEntry = Union[TypeEntry, FunctionEntry, ValueEntry]

ENTRY_TYPES = (TypeEntry, FunctionEntry, ValueEntry)

_SHAPES: dict[str, frozenset[str]] = {
    "class": frozenset({"class", "is_singleton", "dependencies"}),
    "function": frozenset({"function", "dependencies"}),
    "token": frozenset({"token", "value"}),
}


def entry_from_mapping(item: Mapping[str, Any]) -> AssemblyEntry:
    """Build an entry from a ``{"class": ...}``, ``{"function": ...}`` or
    ``{"token": ..., "value": ...}`` mapping.

    Raises:
        InvalidAssembly: If the mapping matches none or more than one shape,
            or carries keys that do not belong to its shape.
    """
    kinds = [kind for kind in _SHAPES if kind in item]
    if len(kinds) != 1:
        raise InvalidAssembly(
            "registration must contain exactly one of 'class', 'function' or 'token', "
            f"got keys {sorted(item)}"
        )
    kind = kinds[0]
    unknown = set(item) - _SHAPES[kind]
    if unknown:
        raise InvalidAssembly(f"unexpected keys for a {kind} registration: {sorted(unknown)}")

    if kind == "class":
        return TypeEntry(
            item["class"],
            is_singleton=item.get("is_singleton") is not False,
            dependencies=item.get("dependencies") or (),
        )
    if kind == "function":
        return FunctionEntry(item["function"], dependencies=item.get("dependencies") or ())
    if "value" not in item:
        raise InvalidAssembly(f"token registration {item['token']!r} is missing 'value'")
    return ValueEntry(item["token"], item["value"])

