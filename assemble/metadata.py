"""
Dependency metadata attached to classes at definition time.

The ``assemble`` decorator records a class's dependency list in a side-table
so the container can build the class without an explicit registration:

    @assemble(deps=[Greeter, "prefix"])
    class Announcer:
        def __init__(self, greeter, prefix): ...

    container.get(Announcer)

A subclass without its own declaration inherits the dependencies of its
nearest decorated base class.
"""

from __future__ import annotations

import threading
import weakref
from collections.abc import Callable, Iterable
from typing import Any, TypeVar, overload

from .errors import InvalidAssembly
from .keys import AssemblyKey, as_keys

C = TypeVar("C", bound=type)


class MetadataTable:
    """Side-table from class identity to its declared dependencies."""

    def __init__(self) -> None:
        self._deps: weakref.WeakKeyDictionary[type, tuple[AssemblyKey, ...]] = (
            weakref.WeakKeyDictionary()
        )
        self._lock = threading.Lock()

    def define(self, cls: type, deps: Iterable[Any] | None = None) -> None:
        if not isinstance(cls, type):
            raise InvalidAssembly(f"dependency metadata can only be declared on classes, got {cls!r}")
        keys = as_keys(deps)
        with self._lock:
            self._deps[cls] = keys

    def lookup(self, cls: Any) -> tuple[AssemblyKey, ...] | None:
        if not isinstance(cls, type):
            return None
        # Undecorated subclasses use the nearest decorated base.
        with self._lock:
            for base in cls.__mro__:
                deps = self._deps.get(base)
                if deps is not None:
                    return deps
        return None

    def __contains__(self, cls: object) -> bool:
        return self.lookup(cls) is not None


_default_table = MetadataTable()


def default_metadata() -> MetadataTable:
    """Return the process-wide table written by ``assemble``."""
    return _default_table


@overload
def assemble(cls: C, /) -> C: ...


@overload
def assemble(*, deps: Iterable[Any] | None = None) -> Callable[[C], C]: ...


def assemble(cls: Any = None, /, *, deps: Iterable[Any] | None = None) -> Any:
    """Declare a class's dependencies so ``Container.get`` can build it directly.

    Works bare (``@assemble``) or with arguments (``@assemble(deps=[...])``).
    The class is returned unchanged.

    Args:
        deps: Keys resolved and passed positionally to the constructor.
    """

    def decorate(target: C) -> C:
        _default_table.define(target, deps)
        return target

    if cls is None:
        return decorate
    return decorate(cls)
