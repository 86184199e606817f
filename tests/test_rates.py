"""Tests for typing rate utilities."""

import pytest

from core.rates import calculate_keys_per_minute, calculate_wpm


class TestCalculateKeysPerMinute:
    """Test calculate_keys_per_minute function."""

    def test_basic_rate(self):
        """120 keys in 30 seconds is 240 keys per minute."""
        assert calculate_keys_per_minute(120, 30.0) == pytest.approx(240.0)

    def test_zero_duration(self):
        assert calculate_keys_per_minute(100, 0.0) == 0.0

    def test_negative_duration(self):
        assert calculate_keys_per_minute(100, -5.0) == 0.0

    def test_zero_keys(self):
        assert calculate_keys_per_minute(0, 60.0) == 0.0


class TestCalculateWPM:
    """Test calculate_wpm function."""

    def test_basic_wpm_calculation(self):
        """Test basic WPM calculation.

        100 letters in 30 seconds:
        - words = 100 / 5 = 20 words
        - minutes = 30 / 60 = 0.5 minutes
        - WPM = 20 / 0.5 = 40 WPM
        """
        assert calculate_wpm(100, 30.0) == pytest.approx(40.0)

    def test_one_minute_exact(self):
        """250 letters (50 words) in 60 seconds = 50 WPM."""
        assert calculate_wpm(250, 60.0) == pytest.approx(50.0)

    def test_custom_word_length(self):
        """100 letters with 4-letter words in one minute = 25 WPM."""
        assert calculate_wpm(100, 60.0, average_word_length=4.0) == pytest.approx(25.0)

    def test_zero_duration(self):
        assert calculate_wpm(100, 0.0) == 0.0

    def test_invalid_word_length(self):
        assert calculate_wpm(100, 60.0, average_word_length=0) == 0.0
