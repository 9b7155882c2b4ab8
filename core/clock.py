"""
Clock

Time source for the migration engine, in integer unix seconds.

The engine never reads wall-clock time directly; it asks its Clock once
per call, so a single validation never compares against two different
instants. FrozenClock makes tests deterministic.
"""

from __future__ import annotations

import time
from typing import Optional, Protocol


class Clock(Protocol):
    """
    Protocol for time source.

    Can be real time or frozen for deterministic testing.
    """
    def now(self) -> int:
        """Get current unix time in seconds."""
        ...


class SystemClock:
    """Real-time clock implementation."""

    def now(self) -> int:
        return int(time.time())


class FrozenClock:
    """
    Frozen clock for deterministic testing.

    Always returns the same time until moved. Like a block timestamp,
    it never moves backwards.
    """

    def __init__(self, frozen_time: Optional[int] = None) -> None:
        self._time = 1_767_225_600 if frozen_time is None else int(frozen_time)

    def now(self) -> int:
        return self._time

    def set_time(self, timestamp: int) -> None:
        """Set the frozen time."""
        if timestamp < self._time:
            raise ValueError(
                f"Clock cannot move backwards: {timestamp} < {self._time}"
            )
        self._time = int(timestamp)

    def advance(self, seconds: int) -> int:
        """Move the clock forward and return the new time."""
        self.set_time(self._time + seconds)
        return self._time
