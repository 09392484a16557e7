"""
Errors raised by the container.
"""

from __future__ import annotations

from typing import Any


class AssembleError(Exception):
    """Base class for all assemble errors."""


class NotRegistered(AssembleError, LookupError):
    """Raised when a key has no registered entry and no annotation metadata."""

    def __init__(self, key: Any, message: str | None = None):
        self.key = key
        self.message = message or (
            f'Provided token: "{key}" is not registered for dependency injection'
        )
        super().__init__(self.message)


class CircularDependency(AssembleError):
    """Raised when a key is requested again while it is still being resolved."""

    def __init__(self, chain: tuple[Any, ...]):
        self.chain = chain
        self.message = "Circular dependency: " + " -> ".join(str(k) for k in chain)
        super().__init__(self.message)


class InvalidAssembly(AssembleError, TypeError):
    """Raised for malformed registrations and objects that cannot be keys."""
