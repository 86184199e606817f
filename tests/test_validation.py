"""Tests for validation helpers."""

import logging
from datetime import datetime, timedelta

import pytest

from core.validation import elapsed_minutes


class TestElapsedMinutes:
    """Tests for elapsed_minutes."""

    def test_positive_interval(self):
        start = datetime(2025, 1, 1, 10, 0, 0)
        assert elapsed_minutes(start, start + timedelta(minutes=90)) == pytest.approx(90.0)

    def test_sub_minute_interval(self):
        start = datetime(2025, 1, 1, 10, 0, 0)
        assert elapsed_minutes(start, start + timedelta(seconds=30)) == pytest.approx(0.5)

    def test_zero_interval(self):
        start = datetime(2025, 1, 1, 10, 0, 0)
        assert elapsed_minutes(start, start) == 0.0

    def test_clock_moved_backwards(self, caplog):
        """Negative elapsed time is clamped to zero with a warning."""
        start = datetime(2025, 1, 1, 10, 0, 0)
        with caplog.at_level(logging.WARNING, logger="bongostats.validation"):
            assert elapsed_minutes(start, start - timedelta(minutes=5)) == 0.0
        assert "Negative elapsed time" in caplog.text
