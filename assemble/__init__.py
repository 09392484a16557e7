"""
assemble: a small dependency injection container.

Register constructible classes, plain functions or values under a key and get
fully built results back:

    from assemble import Container, assemble

    container = Container()
    container.register({"token": "greeting", "value": "hello"})

    @assemble(deps=["greeting"])
    class Greeter:
        def __init__(self, greeting):
            self.greeting = greeting

    container.get(Greeter).greeting  # "hello"
"""

__version__ = "0.1.0"

from .container import Container, get, get_container, register, reset_container
from .entries import AssemblyEntry, FunctionEntry, TypeEntry, ValueEntry
from .errors import AssembleError, CircularDependency, InvalidAssembly, NotRegistered
from .keys import AssemblyKey, KeyKind
from .metadata import MetadataTable, assemble, default_metadata
from .registry import Registry
from .resolver import Resolver
from .settings import AssembleSettings

__all__ = [
    "AssembleError",
    "AssembleSettings",
    "AssemblyEntry",
    "AssemblyKey",
    "CircularDependency",
    "Container",
    "FunctionEntry",
    "InvalidAssembly",
    "KeyKind",
    "MetadataTable",
    "NotRegistered",
    "Registry",
    "Resolver",
    "TypeEntry",
    "ValueEntry",
    "assemble",
    "default_metadata",
    "get",
    "get_container",
    "register",
    "reset_container",
]
