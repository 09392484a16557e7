"""
Recursive resolution of keys into values.
"""

from __future__ import annotations

from typing import Any

from .entries import AssemblyEntry, FunctionEntry, TypeEntry, ValueEntry
from .errors import CircularDependency, InvalidAssembly, NotRegistered
from .keys import AssemblyKey
from .logging_config import get_logger
from .metadata import MetadataTable
from .registry import Registry

logger = get_logger(__name__)


class Resolver:
    """
    Turns keys into values using a registry.

    Resolution of a key:

    1. Look the key up in the registry. A class that is not registered but
       carries ``assemble`` metadata is registered on the fly and looked up
       again; tokens and functions never are.
    2. TypeEntry: return the cached singleton if there is one, otherwise
       resolve the dependencies in order, call the class with them and cache
       the instance when the entry is a singleton.
    3. FunctionEntry: resolve the dependencies in order and call the function.
       Results are never cached.
    4. ValueEntry: return the stored value.

    A failure anywhere in a dependency chain propagates immediately, so a
    singleton is only cached once its constructor has returned.

    Cycle detection tracks the keys being resolved within one ``resolve``
    call. When disabled a cycle recurses until ``RecursionError``.
    """

    def __init__(
        self,
        registry: Registry,
        metadata: MetadataTable,
        *,
        detect_cycles: bool = True,
    ):
        self.registry = registry
        self.metadata = metadata
        self.detect_cycles = detect_cycles
        self._singletons: dict[AssemblyKey, Any] = {}

    def resolve(self, key: Any) -> Any:
        return self._resolve(AssemblyKey.of(key), ())

    def can_resolve(self, key: Any) -> bool:
        key = AssemblyKey.of(key)
        if key in self.registry:
            return True
        return key.is_type and key.ref in self.metadata

    def cached(self, key: Any) -> bool:
        """Whether a singleton instance exists for ``key``."""
        return AssemblyKey.of(key) in self._singletons

    def _find(self, key: AssemblyKey) -> AssemblyEntry:
        entry = self.registry.lookup(key)
        if entry is None and key.is_type:
            deps = self.metadata.lookup(key.ref)
            if deps is not None:
                self.registry.register(TypeEntry(key.ref, dependencies=deps))
                logger.info("entry_auto_registered", key=str(key), dependencies=[str(d) for d in deps])
                entry = self.registry.lookup(key)
        if entry is None:
            logger.debug("resolve_failed", key=str(key), kind=key.kind.value)
            raise NotRegistered(key)
        return entry

    def _resolve(self, key: AssemblyKey, chain: tuple[AssemblyKey, ...]) -> Any:
        if self.detect_cycles and key in chain:
            cycle = chain[chain.index(key):] + (key,)
            logger.debug("circular_dependency", chain=[str(k) for k in cycle])
            raise CircularDependency(cycle)

        entry = self._find(key)
        chain = chain + (key,)

        if isinstance(entry, TypeEntry):
            if entry.is_singleton and entry.key in self._singletons:
                logger.debug("singleton_cache_hit", key=str(key))
                return self._singletons[entry.key]
            args = [self._resolve(dep, chain) for dep in entry.dependencies]
            instance = entry.cls(*args)
            if entry.is_singleton:
                self._singletons[entry.key] = instance
                logger.debug("singleton_cached", key=str(key))
            logger.debug("entry_resolved", key=str(key), kind="type")
            return instance

        if isinstance(entry, FunctionEntry):
            args = [self._resolve(dep, chain) for dep in entry.dependencies]
            result = entry.function(*args)
            logger.debug("entry_resolved", key=str(key), kind="function")
            return result

        if isinstance(entry, ValueEntry):
            return entry.value

        raise InvalidAssembly(f"unsupported entry: {entry!r}")
