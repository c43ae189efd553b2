"""
ActivityFilter — decides which editor activity events become heartbeats.

Holds one rolling watermark (last file + last accepted time), never a queue.
Rule, first match wins:
  - saves always emit
  - otherwise emit once DEBOUNCE_MS has elapsed since the last heartbeat
  - otherwise emit if the active file changed
"""

from typing import Optional

from .constants import DEBOUNCE_MS


class ActivityFilter:
    """Debounces selection / focus / save events into heartbeat decisions."""

    def __init__(self, debounce_ms=DEBOUNCE_MS):
        self._debounce_ms = debounce_ms
        self._last_file: Optional[str] = None
        self._last_event_ms = 0.0      # first event always qualifies

    @property
    def last_file(self) -> Optional[str]:
        return self._last_file

    @property
    def last_event_ms(self) -> float:
        return self._last_event_ms

    def enough_time_passed(self, now_ms) -> bool:
        return now_ms - self._last_event_ms >= self._debounce_ms

    def should_emit(self, file_path, is_write, now_ms) -> bool:
        """Returns True (and moves the watermark) when a heartbeat should go out now."""
        emit = (
            is_write
            or self.enough_time_passed(now_ms)
            or file_path != self._last_file
        )
        if emit:
            self._last_file = file_path
            self._last_event_ms = now_ms
        return emit
