"""Tests for DailyFileLocator."""

import logging
from datetime import date
from pathlib import Path

from core.daily_files import DailyFileLocator


class TestPaths:
    """Tests for path computation."""

    def test_path_for_date_zero_padded(self, tmp_path):
        locator = DailyFileLocator(tmp_path)
        path = locator.path_for_date(date(2025, 3, 7))
        assert path == tmp_path / "DATA" / "2025" / "03.07.25.json"

    def test_path_for_date_two_digit_fields(self, tmp_path):
        locator = DailyFileLocator(tmp_path)
        path = locator.path_for_date(date(2024, 12, 31))
        assert path.name == "12.31.24.json"
        assert path.parent.name == "2024"

    def test_year_suffix_padding(self, tmp_path):
        locator = DailyFileLocator(tmp_path)
        assert locator.path_for_date(date(2005, 1, 2)).name == "01.02.05.json"
        assert locator.path_for_date(date(2100, 1, 2)).name == "01.02.00.json"

    def test_year_folder_has_no_side_effects(self, tmp_path):
        locator = DailyFileLocator(tmp_path)
        folder = locator.year_folder(2025)
        assert folder == tmp_path / "DATA" / "2025"
        assert not folder.exists()
        assert not locator.data_dir.exists()

    def test_accepts_string_base_dir(self, tmp_path):
        locator = DailyFileLocator(str(tmp_path))
        assert isinstance(locator.base_dir, Path)
        assert locator.data_dir == tmp_path / "DATA"


class TestEnsureYearFolder:
    """Tests for ensure_year_folder."""

    def test_creates_data_and_year_folders(self, tmp_path):
        locator = DailyFileLocator(tmp_path / "root")
        assert locator.ensure_year_folder(2025)
        assert (tmp_path / "root" / "DATA" / "2025").is_dir()

    def test_existing_folder_is_fine(self, tmp_path):
        locator = DailyFileLocator(tmp_path)
        assert locator.ensure_year_folder(2025)
        assert locator.ensure_year_folder(2025)

    def test_failure_is_swallowed(self, tmp_path, caplog):
        """A file where the data folder should be makes creation fail quietly."""
        blocker = tmp_path / "blocked"
        blocker.write_text("not a directory")
        locator = DailyFileLocator(blocker)
        with caplog.at_level(logging.WARNING, logger="bongostats.daily_files"):
            assert locator.ensure_year_folder(2025) is False
        assert "Could not create stats folder" in caplog.text


class TestIterDayFiles:
    """Tests for iter_day_files."""

    def test_missing_folder_yields_nothing(self, tmp_path):
        assert list(DailyFileLocator(tmp_path).iter_day_files(2025)) == []

    def test_only_json_files_in_name_order(self, tmp_path):
        locator = DailyFileLocator(tmp_path)
        locator.ensure_year_folder(2025)
        folder = locator.year_folder(2025)
        (folder / "03.02.25.json").write_text("{}")
        (folder / "01.15.25.json").write_text("{}")
        (folder / "notes.txt").write_text("x")
        (folder / "01.16.25.json.tmp").write_text("{}")
        (folder / "sub.json").mkdir()

        names = [path.name for path in locator.iter_day_files(2025)]
        assert names == ["01.15.25.json", "03.02.25.json"]
