"""Locations of the per-day stats files."""

import logging
from datetime import date
from pathlib import Path
from typing import Iterator

log = logging.getLogger("bongostats.daily_files")

DATA_DIR_NAME = "DATA"
DAILY_FILE_SUFFIX = ".json"


class DailyFileLocator:
    """Maps calendar dates to files under ``<base_dir>/DATA/<year>/``."""

    def __init__(self, base_dir: Path):
        """Initialize locator.

        Args:
            base_dir: Application data root
        """
        self.base_dir = Path(base_dir)

    @property
    def data_dir(self) -> Path:
        return self.base_dir / DATA_DIR_NAME

    def year_folder(self, year: int) -> Path:
        """Get the folder holding one year's daily files (no side effects)."""
        return self.data_dir / str(year)

    def path_for_date(self, day: date) -> Path:
        """Get the daily file path for a date, e.g. ``DATA/2025/03.07.25.json``."""
        filename = f"{day.month:02d}.{day.day:02d}.{day.year % 100:02d}{DAILY_FILE_SUFFIX}"
        return self.year_folder(day.year) / filename

    def ensure_year_folder(self, year: int) -> bool:
        """Create the data and year folders if missing.

        Failures are logged and swallowed; later file I/O reports them again.

        Returns:
            True if the year folder exists afterwards
        """
        folder = self.year_folder(year)
        try:
            folder.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            log.warning(f"Could not create stats folder {folder}: {e}")
            return False
        return True

    def iter_day_files(self, year: int) -> Iterator[Path]:
        """Yield the daily files of a year in name order.

        A missing or unreadable year folder yields nothing.
        """
        folder = self.year_folder(year)
        try:
            entries = sorted(folder.iterdir())
        except OSError as e:
            log.debug(f"No daily files for {year} in {folder}: {e}")
            return
        for entry in entries:
            if entry.name.endswith(DAILY_FILE_SUFFIX) and entry.is_file():
                yield entry
