"""Routes raw input events from a capture thread into the stats store."""

import logging
import threading
from dataclasses import dataclass
from queue import Empty, Full, Queue
from typing import Optional

from core.stats_store import ActivityStatsStore

log = logging.getLogger("bongostats.event_handler")

KIND_KEY = 'key'
KIND_MOUSE = 'mouse'


@dataclass
class InputEvent:
    """A key or mouse button press/release reported by an input hook."""
    kind: str  # 'key' or 'mouse'
    is_press: bool
    keycode: int = 0
    button: str = ''


class EventHandler:
    """Queues input events and feeds presses to an ActivityStatsStore.

    Hooks call ``on_key_event``/``on_mouse_event`` from their own thread;
    a worker thread drains the queue so the hook never blocks on file I/O.
    Releases are dropped, only presses are counted.
    """

    def __init__(self, store: ActivityStatsStore, max_queue_size: int = 1000,
                 poll_interval_sec: float = 0.5):
        """Initialize event handler.

        Args:
            store: Store receiving the presses
            max_queue_size: Events buffered before new ones are dropped
            poll_interval_sec: How long the worker waits for new events
        """
        self.store = store
        self.event_queue: Queue[InputEvent] = Queue(maxsize=max_queue_size)
        self.poll_interval_sec = poll_interval_sec
        self.running = False
        self.dropped_events = 0
        self.thread: Optional[threading.Thread] = None

    def on_key_event(self, keycode: int, is_press: bool) -> None:
        self._queue_event(InputEvent(kind=KIND_KEY, is_press=is_press, keycode=keycode))

    def on_mouse_event(self, button: str, is_press: bool) -> None:
        self._queue_event(InputEvent(kind=KIND_MOUSE, is_press=is_press, button=button))

    def _queue_event(self, event: InputEvent) -> None:
        if not event.is_press:
            return
        try:
            self.event_queue.put(event, block=False)
        except Full:
            self.dropped_events += 1
            if self.dropped_events % 100 == 1:
                log.warning(f"Event queue full, {self.dropped_events} events dropped")

    def process_event(self, event: InputEvent) -> None:
        """Record a single event in the store."""
        if not event.is_press:
            return
        try:
            if event.kind == KIND_KEY:
                self.store.record_key_press(event.keycode)
            elif event.kind == KIND_MOUSE:
                self.store.record_mouse_click(event.button)
            else:
                log.warning(f"Ignoring event of unknown kind: {event.kind!r}")
        except ValueError as e:
            log.warning(f"Ignoring invalid input event {event}: {e}")

    def process_event_queue(self, limit: int = 1000) -> int:
        """Process queued events without blocking.

        Returns:
            Number of events processed
        """
        processed_count = 0
        while processed_count < limit:
            try:
                event = self.event_queue.get_nowait()
            except Empty:
                break
            self.process_event(event)
            processed_count += 1
        return processed_count

    def _run(self) -> None:
        while self.running:
            try:
                event = self.event_queue.get(timeout=self.poll_interval_sec)
            except Empty:
                continue
            self.process_event(event)

    def start(self) -> None:
        """Start the worker thread."""
        if self.running:
            return

        self.running = True
        self.thread = threading.Thread(target=self._run, daemon=True)
        self.thread.start()
        log.info("Event handler started")

    def stop(self) -> None:
        """Stop the worker, record what is still queued and save."""
        self.running = False
        if self.thread:
            self.thread.join(timeout=self.poll_interval_sec * 4)
            self.thread = None
        remaining = self.process_event_queue(limit=self.event_queue.maxsize or 1000)
        if remaining:
            log.info(f"Recorded {remaining} queued events on shutdown")
        self.store.close()
        log.info("Event handler stopped")

    def get_state(self) -> dict:
        """Get current handler state.

        Returns:
            Dictionary with state information
        """
        return {
            'running': self.running,
            'queue_size': self.event_queue.qsize(),
            'dropped_events': self.dropped_events,
        }
