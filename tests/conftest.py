"""Shared test fixtures for BongoStats tests."""

from datetime import datetime, timedelta

import pytest

from core.stats_store import ActivityStatsStore
from utils.config import AppSettings


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    """Clock pinned to 2025-03-07 12:00:00."""
    return FakeClock(datetime(2025, 3, 7, 12, 0, 0))


@pytest.fixture
def base_dir(tmp_path):
    """Temporary application data root."""
    return tmp_path / "appdata"


@pytest.fixture
def make_store(base_dir, clock):
    """Factory for stores sharing the temporary data root and clock."""
    def factory(**settings) -> ActivityStatsStore:
        return ActivityStatsStore(base_dir, settings=AppSettings(**settings), clock=clock)
    return factory
