"""Stopwatch that accumulates elapsed time with microsecond resolution."""

from __future__ import annotations

import time
from typing import Callable, Optional

MICROSECONDS_PER_SECOND = 1_000_000


def _monotonic_us() -> int:
    return time.monotonic_ns() // 1000


class Chrono:
    """A stopwatch that can be started, stopped and reset.

    ``clock`` is a callable returning the current time in microseconds.
    """

    def __init__(self, clock: Optional[Callable[[], int]] = None) -> None:
        self._clock = clock if clock is not None else _monotonic_us
        self.start_us = 0
        self.total_us = 0
        self.is_running = False

    def start(self) -> None:
        """Start the stopwatch; does nothing if it is already running."""
        if not self.is_running:
            self.start_us = self._clock()
            self.is_running = True

    def stop(self) -> None:
        """Stop the stopwatch and add the running interval to the total."""
        if self.is_running:
            self.total_us += self._clock() - self.start_us
            self.is_running = False

    def reset(self) -> None:
        """Clear the accumulated time; a running stopwatch keeps running from now."""
        self.total_us = 0
        if self.is_running:
            self.start_us = self._clock()

    def seconds(self) -> int:
        """Return whole seconds elapsed, including the current running interval."""
        total = self.total_us
        if self.is_running:
            total += self._clock() - self.start_us
        return int(total / MICROSECONDS_PER_SECOND)