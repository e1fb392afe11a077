"""Monotonic stopwatch measuring elapsed time since a start point."""

from __future__ import annotations

import time
from typing import Callable


class Stopwatch:
    """Measures seconds since :meth:`start`, at microsecond resolution."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._starting_time: float | None = None

    def start(self) -> None:
        """Start (or restart) the stopwatch."""
        self._starting_time = self._clock()

    def elapsed_seconds(self) -> float:
        """Seconds since the last :meth:`start`, truncated to whole microseconds."""
        now = self._clock()
        if self._starting_time is None:
            raise RuntimeError("Stopwatch hasn't been started")
        elapsed_microseconds = int((now - self._starting_time) * 1e6)
        return elapsed_microseconds / 1e6