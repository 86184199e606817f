"""In-memory activity tallies and typing rate tracking."""

import threading
from collections import deque
from datetime import datetime
from typing import Callable, Optional

from core.merger import add_counter_sets
from core.models import CounterSet, MouseButton
from core.rates import calculate_keys_per_minute, calculate_wpm
from utils.keycodes import is_letter_keycode

DEFAULT_WINDOW_SIZE = 1000


class RateWindow:
    """Bounded window of recent key presses for the current session.

    Never persisted. Rates are averaged from the first key press of the
    session to the latest one.
    """

    def __init__(self, capacity: int = DEFAULT_WINDOW_SIZE):
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._presses: deque[tuple[datetime, int]] = deque(maxlen=capacity)
        self.first_key_press_time: Optional[datetime] = None
        self.last_key_press_time: Optional[datetime] = None

    def __len__(self) -> int:
        return len(self._presses)

    def add(self, timestamp: datetime, keycode: int) -> None:
        self._presses.append((timestamp, keycode))
        if self.first_key_press_time is None:
            self.first_key_press_time = timestamp
        self.last_key_press_time = timestamp

    def reset(self) -> None:
        self._presses.clear()
        self.first_key_press_time = None
        self.last_key_press_time = None

    def _duration_sec(self) -> float:
        if self.first_key_press_time is None or self.last_key_press_time is None:
            return 0.0
        return (self.last_key_press_time - self.first_key_press_time).total_seconds()

    def keys_per_minute(self) -> float:
        if not self._presses:
            return 0.0
        return calculate_keys_per_minute(len(self._presses), self._duration_sec())

    def words_per_minute(self, average_word_length: float = 5.0) -> float:
        if not self._presses:
            return 0.0
        letters = sum(1 for _, keycode in self._presses if is_letter_keycode(keycode))
        return calculate_wpm(letters, self._duration_sec(), average_word_length)


class ActivityCounters:
    """Key and mouse tallies for today plus the session rate window.

    Every public method holds ``lock`` for its whole duration. The lock is
    reentrant and shared with the persistence layer, so a save or load can
    run as one atomic step with respect to recording.
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.now,
                 window_size: int = DEFAULT_WINDOW_SIZE,
                 average_word_length: float = 5.0):
        """Initialize counters.

        Args:
            clock: Source of the current local time
            window_size: Capacity of the rate window (default: 1000)
            average_word_length: Letters per word for WPM (default: 5)
        """
        self.lock = threading.RLock()
        self.clock = clock
        self.average_word_length = average_word_length
        self._counts = CounterSet()
        self._window = RateWindow(window_size)

    def record_key_press(self, keycode: int) -> None:
        if keycode < 0:
            raise ValueError(f"Key code must be non-negative, got {keycode}")
        with self.lock:
            counts = self._counts.key_press_counts
            counts[keycode] = counts.get(keycode, 0) + 1
            self._window.add(self.clock(), keycode)

    def record_mouse_click(self, label: str) -> None:
        button = MouseButton.parse(label).value
        with self.lock:
            counts = self._counts.mouse_button_counts
            counts[button] = counts.get(button, 0) + 1

    def get_key_count(self, keycode: int) -> int:
        with self.lock:
            return self._counts.key_press_counts.get(keycode, 0)

    def get_mouse_button_count(self, label: str) -> int:
        with self.lock:
            return self._counts.mouse_button_counts.get(str(label).upper(), 0)

    def get_total_key_presses(self) -> int:
        with self.lock:
            return self._counts.total_key_presses()

    def get_total_minutes_open(self) -> float:
        with self.lock:
            return self._counts.total_minutes_open

    def add_minutes_open(self, minutes: float) -> None:
        if minutes <= 0:
            return
        with self.lock:
            self._counts.total_minutes_open += minutes

    def keys_per_minute(self) -> float:
        with self.lock:
            return self._window.keys_per_minute()

    def words_per_minute(self) -> float:
        with self.lock:
            return self._window.words_per_minute(self.average_word_length)

    def snapshot(self) -> CounterSet:
        """Get a deep copy of the current tallies."""
        with self.lock:
            return self._counts.model_copy(deep=True)

    def replace(self, counters: CounterSet) -> None:
        """Overwrite the tallies; the rate window is left alone."""
        with self.lock:
            self._counts = counters.model_copy(deep=True)

    def add(self, counters: CounterSet) -> None:
        """Add tallies on top of the current ones."""
        with self.lock:
            self._counts = add_counter_sets(self._counts, counters)

    def clear_counts(self) -> None:
        """Zero the tallies, keeping the session rate window."""
        with self.lock:
            self._counts = CounterSet()

    def reset(self) -> None:
        """Clear tallies and the rate window."""
        with self.lock:
            self._counts = CounterSet()
            self._window.reset()
