"""Shared fixtures."""

import random
from pathlib import Path

import pytest

from aspira.logging import JSONLLogger, configure_logger
from aspira.store import AspirationStore, MemoryStorage, NewAspiration


@pytest.fixture(autouse=True)
def event_log(tmp_path: Path) -> JSONLLogger:
    """Route the global event log into the test's temp directory."""
    return configure_logger(tmp_path / "logs")


@pytest.fixture
def memory_storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def store(memory_storage: MemoryStorage) -> AspirationStore:
    """An initialized store backed by memory, with a seeded code generator."""
    store = AspirationStore(memory_storage, rng=random.Random(42))
    store.initialize()
    return store


@pytest.fixture
def make_aspiration():
    """Factory for valid NewAspiration instances; any field can be overridden."""

    def _make(**overrides) -> NewAspiration:
        fields = {
            "name": "Budi",
            "email": "budi@example.com",
            "department": "IT",
            "category": "Saran",
            "message": "Tolong perbaiki wifi kantor",
        }
        fields.update(overrides)
        return NewAspiration(**fields)

    return _make
