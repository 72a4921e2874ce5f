"""Time sources for process-local security state."""

import time
from datetime import datetime, timezone


class Clock:
    """Source of the current time as epoch seconds."""

    def now(self) -> float:
        """Return the current time in seconds since the epoch."""
        raise NotImplementedError

    def utcnow(self) -> datetime:
        """Return the current time as an aware UTC datetime."""
        return datetime.fromtimestamp(self.now(), tz=timezone.utc)


class SystemClock(Clock):
    """Clock backed by the system wall clock."""

    def now(self) -> float:
        return time.time()


class FakeClock(Clock):
    """Manually driven clock for tests.

    Starts at a fixed instant and only moves when ``advance`` is called.
    """

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self._now = start

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> None:
        """Move the clock forward.

        Args:
            seconds: Number of seconds to add
        """
        self._now += seconds
