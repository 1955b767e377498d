#!/usr/bin/env python3
"""
Monotonic simulation clock.

Reports elapsed milliseconds since the clock was created, read once per frame.
Pausing freezes the reading; after resume the paused span is excluded so bodies
continue from where they stopped.
"""
import time
from typing import Callable, Optional


class SimulationClock:
    """Elapsed-time source in milliseconds with pause support."""

    def __init__(self, source: Optional[Callable[[], float]] = None):
        # source returns seconds from any fixed origin, like time.perf_counter
        self._source = source or time.perf_counter
        self._epoch = self._source()
        self._paused_at: Optional[float] = None
        self._paused_total = 0.0

    @property
    def paused(self) -> bool:
        return self._paused_at is not None

    def now_ms(self) -> float:
        now = self._paused_at if self._paused_at is not None else self._source()
        return (now - self._epoch - self._paused_total) * 1000.0

    def pause(self) -> None:
        if self._paused_at is None:
            self._paused_at = self._source()

    def resume(self) -> None:
        if self._paused_at is not None:
            self._paused_total += self._source() - self._paused_at
            self._paused_at = None

    def toggle(self) -> bool:
        """Flip the paused state; returns True when now paused."""
        if self.paused:
            self.resume()
        else:
            self.pause()
        return self.paused
