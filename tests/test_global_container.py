import pytest

import assemble
from assemble import NotRegistered, get_container, reset_container


def test_module_level_register_and_get():
    assemble.register({"token": "hello", "value": "world"})

    assert assemble.get("hello") == "world"


def test_global_container_is_created_once():
    assert get_container() is get_container()


def test_reset_discards_registrations():
    first = get_container()
    assemble.register({"token": "hello", "value": "world"})

    reset_container()

    assert get_container() is not first
    with pytest.raises(NotRegistered):
        assemble.get("hello")


def test_global_container_reads_environment(monkeypatch):
    monkeypatch.setenv("ASSEMBLE_DETECT_CYCLES", "0")

    assert get_container().settings.detect_cycles is False
