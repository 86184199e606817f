"""Durable per-day activity statistics for BongoStats.

The store records key presses and mouse clicks in memory and flushes them to
one JSON file per calendar day. Saves merge with what is already on disk and
refuse to write anything that would lower a stored count. No filesystem or
parse error ever leaves this module: failed saves and loads are logged and
reported as ``False`` so the caller can simply try again next cycle.
"""

import contextlib
import logging
import os
from datetime import date, datetime
from pathlib import Path
from typing import Callable, Optional

from core.aggregator import build_wrapped_stats, wrapped_stats_json
from core.counters import ActivityCounters
from core.daily_files import DailyFileLocator
from core.json_codec import decode_daily_record, encode_daily_record
from core.merger import find_regressions, merge_counter_sets
from core.models import AggregateReport, CounterSet
from core.validation import elapsed_minutes
from utils.config import AppSettings
from utils.keycodes import get_key_name

log = logging.getLogger("bongostats.store")


class ActivityStatsStore:
    """Activity counters backed by daily JSON files."""

    def __init__(self, base_dir: Optional[Path] = None,
                 settings: Optional[AppSettings] = None,
                 clock: Callable[[], datetime] = datetime.now,
                 key_namer: Callable[[int], str] = get_key_name):
        """Initialize store.

        Args:
            base_dir: Application data root; if given, today's stats are loaded
            settings: Tunables (default: AppSettings())
            clock: Source of the current local time
            key_namer: Maps key codes to display names
        """
        self.settings = settings or AppSettings()
        self.clock = clock
        self.key_namer = key_namer
        self.counters = ActivityCounters(
            clock=clock,
            window_size=self.settings.rate_window_size,
            average_word_length=self.settings.average_word_length,
        )
        self._lock = self.counters.lock
        self._locator: Optional[DailyFileLocator] = None
        self._app_start_time = clock()
        self._day = self._app_start_time.date()
        self._events_since_save = 0

        if base_dir is not None:
            self.initialize(base_dir)

    def __enter__(self) -> "ActivityStatsStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def base_dir(self) -> Optional[Path]:
        with self._lock:
            return self._locator.base_dir if self._locator else None

    def initialize(self, base_dir: Path) -> bool:
        """Point the store at a data root and load today's stats.

        Returns:
            True if today's file was loaded
        """
        with self._lock:
            self._locator = DailyFileLocator(base_dir)
            self._day = self.clock().date()
            log.info(f"Stats directory: {self._locator.data_dir}")
            return self.load_stats()

    def close(self) -> bool:
        """Final save on shutdown."""
        return self.save_stats()

    # Recording

    def record_key_press(self, keycode: int) -> None:
        with self._lock:
            self._roll_over_day(self.clock())
            self.counters.record_key_press(keycode)
            self._count_event()

    def record_mouse_click(self, label: str) -> None:
        with self._lock:
            self._roll_over_day(self.clock())
            self.counters.record_mouse_click(label)
            self._count_event()

    def _count_event(self) -> None:
        self._events_since_save += 1
        if self._events_since_save >= self.settings.autosave_every_events:
            self.save_stats()

    # Queries

    def get_key_count(self, keycode: int) -> int:
        return self.counters.get_key_count(keycode)

    def get_mouse_button_count(self, label: str) -> int:
        return self.counters.get_mouse_button_count(label)

    def get_all_key_stats(self) -> dict[str, int]:
        """Get today's key press counts keyed by key name."""
        snapshot = self.counters.snapshot()
        stats: dict[str, int] = {}
        for code, count in snapshot.key_press_counts.items():
            name = self.key_namer(code)
            stats[name] = stats.get(name, 0) + count
        return stats

    def get_total_key_presses(self) -> int:
        return self.counters.get_total_key_presses()

    def get_keys_per_minute(self) -> float:
        return self.counters.keys_per_minute()

    def get_words_per_minute(self) -> float:
        return self.counters.words_per_minute()

    def get_total_minutes_open(self) -> float:
        """Get accumulated minutes open, as of the last fold."""
        return self.counters.get_total_minutes_open()

    # Open-time accounting

    def set_app_start_time(self, start: datetime) -> None:
        with self._lock:
            self._app_start_time = start

    def update_total_minutes(self) -> None:
        """Fold the time since the last fold into total minutes open."""
        with self._lock:
            now = self.clock()
            self.counters.add_minutes_open(elapsed_minutes(self._app_start_time, now))
            self._app_start_time = now

    # Wrapped stats

    def get_wrapped_stats(self, year: Optional[int] = None) -> Optional[AggregateReport]:
        """Aggregate a year's daily files; defaults to the current year.

        Returns:
            AggregateReport, or None if the store has no data root
        """
        with self._lock:
            locator = self._locator
            if year is None:
                year = self.clock().year
        if locator is None:
            return None
        return build_wrapped_stats(
            locator, year, self.key_namer, self.settings.top_inputs_limit
        )

    def get_wrapped_stats_json(self, year: Optional[int] = None) -> str:
        report = self.get_wrapped_stats(year)
        if report is None:
            return "{}"
        return wrapped_stats_json(report)

    # Persistence

    def _read_daily_file(self, path: Path) -> tuple[CounterSet, bool]:
        """Read a daily file for merging.

        Returns:
            (counters, file_existed); counters are empty if absent or unparsable
        """
        if not path.exists():
            return CounterSet(), False
        record = decode_daily_record(path.read_text(encoding="utf-8"))
        if record is None:
            log.warning(f"Daily file {path} is unparsable, treating as empty")
            return CounterSet(), False
        return record.counters, True

    def _write_daily_file(self, path: Path, counters: CounterSet, year: int,
                          now: datetime) -> None:
        """Replace a daily file atomically."""
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(encode_daily_record(counters, year, now))
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, path)
        except OSError:
            with contextlib.suppress(OSError):
                tmp_path.unlink()
            raise

    def _save_day(self, day: date, now: datetime) -> bool:
        """Merge in-memory tallies into the file of ``day``."""
        path = self._locator.path_for_date(day)
        self._locator.ensure_year_folder(day.year)

        try:
            existing, file_existed = self._read_daily_file(path)
        except (OSError, UnicodeDecodeError) as e:
            log.warning(f"Could not read {path}, skipping save: {e}")
            return False

        current = self.counters.snapshot()
        if file_existed and existing.total_activity() > 0 and current.total_activity() == 0:
            log.warning(
                f"Not saving empty stats over {path} "
                f"({existing.total_activity()} inputs on disk)"
            )
            return False

        self.counters.add_minutes_open(elapsed_minutes(self._app_start_time, now))
        self._app_start_time = now

        merged = merge_counter_sets(existing, self.counters.snapshot())
        if file_existed:
            regressions = find_regressions(existing, merged)
            if regressions:
                log.error(f"Not saving {path}, merge would lower: {', '.join(regressions)}")
                return False

        try:
            self._write_daily_file(path, merged, day.year, now)
        except OSError as e:
            log.error(f"Failed to save stats to {path}: {e}")
            return False

        log.debug(
            f"Saved stats to {path}: {merged.total_key_presses()} keys, "
            f"{merged.total_mouse_clicks()} clicks"
        )
        return True

    def _roll_over_day(self, now: datetime) -> None:
        """Close out the previous day once the calendar date changes.

        The previous day's tallies go to its own file, then memory starts the
        new day at zero. If that save fails the tallies stay in memory.
        """
        today = now.date()
        if self._locator is None or self._day == today:
            return
        previous, self._day = self._day, today
        log.info(f"Day changed from {previous} to {today}")
        if self._save_day(previous, now):
            self.counters.clear_counts()
        else:
            log.warning(f"Could not close out {previous}, carrying its stats into {today}")

    def save_stats(self) -> bool:
        """Merge in-memory tallies into today's file.

        The write is skipped when memory is empty but the file is not, or when
        the merged result would lower any stored value.

        Returns:
            True if the file was written
        """
        with self._lock:
            if self._locator is None:
                return False
            self._events_since_save = 0
            now = self.clock()
            self._roll_over_day(now)
            return self._save_day(now.date(), now)

    def _start_new_year(self, path: Path, now: datetime) -> None:
        """Clear everything and leave an empty skeleton for the new year."""
        self.counters.reset()
        self._app_start_time = now
        self._events_since_save = 0
        try:
            self._write_daily_file(path, CounterSet(), now.year, now)
        except OSError as e:
            log.error(f"Failed to reset {path} for {now.year}: {e}")

    def load_stats(self, merge_with_current: bool = False) -> bool:
        """Load today's file into memory.

        A plain load replaces the in-memory tallies; a merge load adds the
        file's counts to them. A file tagged with another year starts the
        current year from zero. Missing or broken files change nothing.

        Args:
            merge_with_current: Add to in-memory tallies instead of replacing

        Returns:
            True if in-memory state was updated from disk
        """
        with self._lock:
            if self._locator is None:
                return False
            now = self.clock()
            self._roll_over_day(now)
            path = self._locator.path_for_date(now.date())
            if not path.exists():
                log.info(f"No stats for today yet at {path}")
                return False

            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                log.warning(f"Could not read stats from {path}: {e}")
                return False
            record = decode_daily_record(text)
            if record is None:
                log.warning(f"Ignoring malformed stats file {path}")
                return False

            self._day = now.date()
            if record.year is not None and record.year != now.year:
                log.info(f"Stats file {path} is from {record.year}, starting {now.year} fresh")
                self._start_new_year(path, now)
                return True

            if merge_with_current:
                self.counters.add(record.counters)
            else:
                self.counters.replace(record.counters)
            self._app_start_time = now
            log.info(
                f"Loaded stats from {path}: {record.counters.total_key_presses()} keys, "
                f"{record.counters.total_mouse_clicks()} clicks"
            )
            return True
