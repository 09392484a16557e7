"""Pytest configuration and shared fixtures."""

import logging

import pytest
import structlog

from assemble import AssembleSettings, Container, MetadataTable, reset_container


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: mark test as slow running")


@pytest.fixture
def container():
    return Container()


@pytest.fixture
def metadata():
    """A private metadata table, isolated from the ``assemble`` decorator."""
    return MetadataTable()


@pytest.fixture
def unchecked_container():
    """Container without cycle detection."""
    return Container(AssembleSettings(detect_cycles=False))


@pytest.fixture(autouse=True)
def _fresh_global_container():
    reset_container()
    yield
    reset_container()


@pytest.fixture
def reset_structlog():
    yield
    structlog.reset_defaults()
    logging.basicConfig(handlers=[logging.NullHandler()], force=True)
