"""Shared pytest fixtures for logbucket tests."""

from datetime import datetime, timedelta, timezone

import pytest

from logbucket.stores.memory import InMemoryBlobStore

FIXED_NOW = datetime(2024, 5, 6, 7, 8, 9, 123456, tzinfo=timezone(timedelta(hours=2)))


class StepClock:
    """Clock returning a fixed start time, advanced one second per call."""

    def __init__(self, start: datetime = FIXED_NOW) -> None:
        self.now = start
        self.calls = 0

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        self.calls += 1
        return current


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def store():
    return InMemoryBlobStore()


@pytest.fixture
def in_tmp_cwd(tmp_path, monkeypatch):
    """Run the test with the temp dir as cwd (local mirror files land there)."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
