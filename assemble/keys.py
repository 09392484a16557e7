"""
Lookup keys for registered entries.

A key is one of three kinds:

- TOKEN: a string, compared by value.
- TYPE: a class, compared by identity.
- FUNCTION: any other callable, compared by identity. Bound methods are
  identified by their instance and underlying function, so ``obj.method``
  gives equal keys on every attribute access.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .errors import InvalidAssembly


class KeyKind(str, Enum):
    """Kind of object a key refers to."""

    TOKEN = "token"
    TYPE = "type"
    FUNCTION = "function"


def _identity(kind: KeyKind, ref: Any) -> Any:
    if kind is KeyKind.TOKEN:
        return ref
    if inspect.ismethod(ref):
        return (id(ref.__self__), id(ref.__func__))
    return id(ref)


@dataclass(frozen=True, eq=False)
class AssemblyKey:
    """Hashable lookup identity for a token, class or function."""

    kind: KeyKind
    ref: Any
    _ident: Any = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_ident", _identity(self.kind, self.ref))

    @classmethod
    def of(cls, obj: Any) -> AssemblyKey:
        """Build a key for ``obj``; existing keys are returned unchanged."""
        if isinstance(obj, AssemblyKey):
            return obj
        if isinstance(obj, str):
            return cls(KeyKind.TOKEN, obj)
        if isinstance(obj, type):
            return cls(KeyKind.TYPE, obj)
        if callable(obj):
            return cls(KeyKind.FUNCTION, obj)
        raise InvalidAssembly(
            f"{obj!r} cannot be used as a key: expected a string token, class or function"
        )

    @property
    def is_type(self) -> bool:
        return self.kind is KeyKind.TYPE

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AssemblyKey):
            return NotImplemented
        return self.kind is other.kind and self._ident == other._ident

    def __hash__(self) -> int:
        return hash((self.kind, self._ident))

    def __str__(self) -> str:
        if self.kind is KeyKind.TOKEN:
            return self.ref
        module = getattr(self.ref, "__module__", None)
        name = getattr(self.ref, "__qualname__", None) or getattr(self.ref, "__name__", None)
        if name is None:
            return repr(self.ref)
        return f"{module}.{name}" if module else name


def as_keys(deps: Any) -> tuple[AssemblyKey, ...]:
    """Normalise a dependency sequence into a tuple of keys, keeping order."""
    if deps is None:
        return ()
    if isinstance(deps, (str, bytes)):
        raise InvalidAssembly("dependencies must be a sequence of keys, not a single string")
    return tuple(AssemblyKey.of(dep) for dep in deps)
