"""Shared fixtures for the note store tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from notes_app.config import DEFAULT_STORAGE_KEY
from notes_app.storage import MemoryStorage
from notes_app.store import NoteStore


class FakeClock:
    """Deterministic clock that moves forward one second per call."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 1, 1, 9, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        current = self.now
        self.now += timedelta(seconds=1)
        return current


@pytest.fixture()
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store(storage: MemoryStorage, clock: FakeClock) -> NoteStore:
    """Return an empty NoteStore backed by in-memory storage."""
    return NoteStore(storage, key=DEFAULT_STORAGE_KEY, clock=clock)
