import pytest

from assemble import AssemblyKey, FunctionEntry, InvalidAssembly, Registry, TypeEntry, ValueEntry


class Service:
    pass


def test_lookup_returns_first_match():
    registry = Registry()
    first = ValueEntry("dup", 1)
    registry.register(first)
    registry.register(ValueEntry("dup", 2))

    assert registry.lookup("dup") is first
    assert len(registry) == 2


def test_lookup_accepts_raw_objects_and_keys():
    registry = Registry()
    entry = TypeEntry(Service)
    registry.register(entry)

    assert registry.lookup(Service) is entry
    assert registry.lookup(AssemblyKey.of(Service)) is entry


def test_lookup_missing():
    registry = Registry()

    assert registry.lookup("missing") is None
    assert "missing" not in registry


def test_iterates_in_registration_order():
    def build():
        return None

    registry = Registry()
    entries = [ValueEntry("a", 1), TypeEntry(Service), FunctionEntry(build), ValueEntry("a", 2)]
    for entry in entries:
        registry.register(entry)

    assert list(registry) == entries


def test_token_does_not_match_class_of_same_name():
    registry = Registry()
    registry.register(TypeEntry(Service))

    assert registry.lookup("Service") is None


def test_rejects_non_entries():
    registry = Registry()

    with pytest.raises(InvalidAssembly):
        registry.register({"token": "a", "value": 1})
    assert len(registry) == 0


def test_entries_normalise_dependencies():
    entry = TypeEntry(Service, dependencies=["a", Service])

    assert entry.dependencies == (AssemblyKey.of("a"), AssemblyKey.of(Service))
    assert entry.key == AssemblyKey.of(Service)
    assert entry.is_singleton is True


def test_entries_are_frozen():
    entry = ValueEntry("a", 1)

    with pytest.raises(AttributeError):
        entry.value = 2
