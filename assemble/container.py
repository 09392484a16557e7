"""Dependency injection container.

Usage:
    container = Container()
    container.register({"token": "greeting", "value": "hello"})
    container.register({"class": Greeter, "dependencies": ["greeting"]})
    greeter = container.get(Greeter)
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable, Mapping
from contextlib import nullcontext
from typing import Any, TypeVar, overload

from .entries import ENTRY_TYPES, AssemblyEntry, FunctionEntry, TypeEntry, ValueEntry, entry_from_mapping
from .errors import InvalidAssembly
from .logging_config import get_logger
from .metadata import MetadataTable, default_metadata
from .registry import Registry
from .resolver import Resolver
from .settings import AssembleSettings

logger = get_logger(__name__)

T = TypeVar("T")


class Container:
    """Registry of assemblable items plus the resolver that builds them.

    Each container owns its registry and singleton cache; nothing is shared
    between containers except the class metadata table written by the
    ``assemble`` decorator.

    Circular dependencies are not supported. By default they raise
    ``CircularDependency``; with ``detect_cycles=False`` they recurse until
    ``RecursionError``.

    With ``thread_safe`` on, ``get`` holds the container lock while
    constructors and functions run. A constructor that waits on another
    thread which itself calls ``get`` on the same container deadlocks.
    """

    def __init__(
        self,
        settings: AssembleSettings | None = None,
        *,
        metadata: MetadataTable | None = None,
    ):
        """Initialize container.

        Args:
            settings: Resolution settings (defaults apply if not provided)
            metadata: Class metadata table (the ``assemble`` decorator's
                table if not provided)
        """
        self.settings = settings or AssembleSettings()
        self._registry = Registry()
        self._resolver = Resolver(
            self._registry,
            metadata if metadata is not None else default_metadata(),
            detect_cycles=self.settings.detect_cycles,
        )
        # Re-entrant: resolution registers annotated classes while holding it.
        self._lock = threading.RLock() if self.settings.thread_safe else nullcontext()

    def register(self, item: AssemblyEntry | Mapping[str, Any] | type) -> AssemblyEntry:
        """Register an item to be assembled.

        Args:
            item: An entry, a ``{"class": ...}`` / ``{"function": ...}`` /
                ``{"token": ..., "value": ...}`` mapping, or a bare class whose
                ``assemble`` metadata (if any) supplies its dependencies

        Returns:
            The registered entry

        Raises:
            InvalidAssembly: If the item has none of the supported shapes
        """
        entry = self._to_entry(item)
        with self._lock:
            self._registry.register(entry)
            position = len(self._registry) - 1
        logger.debug(
            "entry_registered",
            key=str(entry.key),
            kind=entry.key.kind.value,
            position=position,
        )
        return entry

    def register_class(
        self,
        cls: type,
        *,
        is_singleton: bool = True,
        dependencies: Iterable[Any] = (),
    ) -> TypeEntry:
        return self.register(TypeEntry(cls, is_singleton=is_singleton, dependencies=dependencies))

    def register_function(
        self,
        function: Callable[..., Any],
        *,
        dependencies: Iterable[Any] = (),
    ) -> FunctionEntry:
        return self.register(FunctionEntry(function, dependencies=dependencies))

    def register_value(self, token: str, value: Any) -> ValueEntry:
        return self.register(ValueEntry(token, value))

    @overload
    def get(self, key: type[T]) -> T: ...

    @overload
    def get(self, key: Callable[..., T]) -> T: ...

    @overload
    def get(self, key: str) -> Any: ...

    def get(self, key: Any) -> Any:
        """Resolve ``key`` to its value.

        Args:
            key: String token, class or function

        Returns:
            The stored value, a (possibly cached) instance, or a function result

        Raises:
            NotRegistered: If nothing is registered for ``key``
            CircularDependency: If ``key`` depends on itself
        """
        with self._lock:
            return self._resolver.resolve(key)

    def has(self, key: Any) -> bool:
        """Check whether ``key`` is registered or can be auto-registered."""
        with self._lock:
            return self._resolver.can_resolve(key)

    def is_cached(self, key: Any) -> bool:
        """Check whether a singleton instance has been built for ``key``."""
        with self._lock:
            return self._resolver.cached(key)

    def __len__(self) -> int:
        return len(self._registry)

    def _to_entry(self, item: Any) -> AssemblyEntry:
        if isinstance(item, ENTRY_TYPES):
            return item
        if isinstance(item, Mapping):
            return entry_from_mapping(item)
        if isinstance(item, type):
            deps = self._resolver.metadata.lookup(item)
            return TypeEntry(item, dependencies=deps or ())
        raise InvalidAssembly(
            f"cannot register {item!r}: expected an entry, a mapping or a class"
        )


# Global container instance
_container: Container | None = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """Get global container instance.

    Returns:
        Global Container instance (created on first call from environment
        settings)
    """
    global _container
    with _container_lock:
        if _container is None:
            _container = Container(AssembleSettings.from_env())
        return _container


def reset_container() -> None:
    """Reset global container (for testing)."""
    global _container
    with _container_lock:
        _container = None


def register(item: AssemblyEntry | Mapping[str, Any] | type) -> AssemblyEntry:
    """Register ``item`` with the global container."""
    return get_container().register(item)


def get(key: Any) -> Any:
    """Resolve ``key`` from the global container."""
    return get_container().get(key)
