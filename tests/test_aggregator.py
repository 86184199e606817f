"""Tests for wrapped stats aggregation."""

import json
from datetime import date, datetime

import pytest

from core.aggregator import build_wrapped_stats, wrapped_stats_json
from core.daily_files import DailyFileLocator
from core.json_codec import encode_daily_record
from core.models import CounterSet
from scripts.seed_daily_files import seed_year


@pytest.fixture
def locator(tmp_path):
    return DailyFileLocator(tmp_path)


def write_day(locator, day, counters):
    locator.ensure_year_folder(day.year)
    path = locator.path_for_date(day)
    path.write_text(encode_daily_record(counters, day.year, datetime(day.year, day.month, day.day)))
    return path


class TestBuildWrappedStats:
    """Tests for build_wrapped_stats."""

    def test_sums_across_days(self, locator):
        write_day(locator, date(2025, 1, 1), CounterSet(key_press_counts={65: 3}))
        write_day(locator, date(2025, 1, 2), CounterSet(key_press_counts={65: 4, 66: 1}))
        report = build_wrapped_stats(locator, 2025)
        assert report.key_press_counts == {65: 7, 66: 1}
        assert report.total_key_presses == 8
        assert report.days_recorded == 2

    def test_totals(self, locator):
        write_day(locator, date(2025, 5, 1), CounterSet(
            key_press_counts={65: 10}, mouse_button_counts={"LEFT": 4, "RIGHT": 1},
            total_minutes_open=60.25))
        write_day(locator, date(2025, 5, 2), CounterSet(
            key_press_counts={32: 5}, mouse_button_counts={"LEFT": 2},
            total_minutes_open=30.5))
        report = build_wrapped_stats(locator, 2025)
        assert report.total_key_presses == 15
        assert report.total_mouse_clicks == 7
        assert report.total_inputs == 22
        assert report.total_minutes_open == pytest.approx(90.75)
        assert report.mouse_button_counts == {"LEFT": 6, "RIGHT": 1}

    def test_empty_year(self, locator):
        report = build_wrapped_stats(locator, 2030)
        assert report.year == 2030
        assert report.total_inputs == 0
        assert report.days_recorded == 0
        assert report.top_inputs == []

    def test_other_years_ignored(self, locator):
        write_day(locator, date(2024, 12, 31), CounterSet(key_press_counts={65: 50}))
        write_day(locator, date(2025, 1, 1), CounterSet(key_press_counts={65: 1}))
        assert build_wrapped_stats(locator, 2025).total_key_presses == 1

    def test_malformed_file_skipped(self, locator):
        write_day(locator, date(2025, 1, 1), CounterSet(key_press_counts={65: 3}))
        broken = locator.path_for_date(date(2025, 1, 2))
        broken.write_text('{"keyPressCounts": {"65": 1000')
        report = build_wrapped_stats(locator, 2025)
        assert report.key_press_counts == {65: 3}
        assert report.days_recorded == 1
        assert report.files_skipped == 1

    def test_undecodable_files_do_not_stop_aggregation(self, locator):
        """Non-finite numbers and runaway nesting skip only their own file."""
        write_day(locator, date(2025, 1, 1), CounterSet(key_press_counts={65: 3}))
        locator.path_for_date(date(2025, 1, 2)).write_text('{"year": Infinity}')
        locator.path_for_date(date(2025, 1, 3)).write_text("[" * 100000)
        locator.path_for_date(date(2025, 1, 4)).write_text(
            '{"year": 1e999, "keyPressCounts": {"65": 2}}')
        write_day(locator, date(2025, 1, 5), CounterSet(key_press_counts={66: 1}))

        report = build_wrapped_stats(locator, 2025)
        assert report.key_press_counts == {65: 5, 66: 1}
        assert report.days_recorded == 3
        assert report.files_skipped == 2

    def test_non_json_files_ignored(self, locator):
        write_day(locator, date(2025, 1, 1), CounterSet(key_press_counts={65: 3}))
        (locator.year_folder(2025) / "readme.txt").write_text("hello")
        report = build_wrapped_stats(locator, 2025)
        assert report.days_recorded == 1
        assert report.files_skipped == 0


class TestTopInputs:
    """Tests for the combined ranking."""

    def test_keys_and_mouse_ranked_together(self, locator):
        write_day(locator, date(2025, 1, 1), CounterSet(
            key_press_counts={65: 5, 32: 20}, mouse_button_counts={"LEFT": 10}))
        report = build_wrapped_stats(locator, 2025)
        assert [(e.name, e.count, e.kind) for e in report.top_inputs] == [
            ("SPACE", 20, "key"),
            ("LEFT CLICK", 10, "mouse"),
            ("A", 5, "key"),
        ]

    def test_limited_to_ten_by_default(self, locator):
        write_day(locator, date(2025, 1, 1), CounterSet(
            key_press_counts={code: code - 60 for code in range(65, 91)}))
        report = build_wrapped_stats(locator, 2025)
        assert len(report.top_inputs) == 10
        assert report.top_inputs[0].name == "Z"
        counts = [entry.count for entry in report.top_inputs]
        assert counts == sorted(counts, reverse=True)

    def test_ties_have_stable_order(self, locator):
        write_day(locator, date(2025, 1, 1), CounterSet(
            key_press_counts={66: 3, 65: 3}, mouse_button_counts={"RIGHT": 3, "LEFT": 3}))
        report = build_wrapped_stats(locator, 2025)
        assert [e.name for e in report.top_inputs] == ["A", "B", "LEFT CLICK", "RIGHT CLICK"]

    def test_custom_key_namer_and_limit(self, locator):
        write_day(locator, date(2025, 1, 1), CounterSet(key_press_counts={1: 2, 2: 1}))
        report = build_wrapped_stats(locator, 2025, key_namer=lambda code: f"k{code}",
                                     top_limit=1)
        assert [e.name for e in report.top_inputs] == ["k1"]


class TestWrappedStatsJson:
    """Tests for wrapped_stats_json."""

    def test_camel_case_fields(self, locator):
        write_day(locator, date(2025, 1, 1), CounterSet(
            key_press_counts={65: 2}, mouse_button_counts={"MIDDLE": 1}))
        data = json.loads(wrapped_stats_json(build_wrapped_stats(locator, 2025)))
        assert data["year"] == 2025
        assert data["totalKeyPresses"] == 2
        assert data["totalMouseClicks"] == 1
        assert data["totalInputs"] == 3
        assert data["keyPressCounts"] == {"65": 2}
        assert data["mouseButtonCounts"] == {"MIDDLE": 1}
        assert data["topInputs"][0] == {"name": "A", "count": 2, "kind": "key"}
        assert data["topInputs"][1]["name"] == "MIDDLE CLICK"


class TestSeededYear:
    """Aggregation over generated development data."""

    def test_seeded_days_all_counted(self, tmp_path):
        paths = seed_year(tmp_path, 2025, days=7, seed=42)
        report = build_wrapped_stats(DailyFileLocator(tmp_path), 2025)
        assert len(paths) == 7
        assert report.days_recorded == 7
        assert report.total_inputs == report.total_key_presses + report.total_mouse_clicks
        assert report.top_inputs[0].count >= report.top_inputs[-1].count
