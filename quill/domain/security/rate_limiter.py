"""Fixed-window request rate limiter."""

import threading
from dataclasses import dataclass

import logfire

from quill.util.clock import Clock


@dataclass
class RateLimitEntry:
    """Counter for one key within its current window."""

    count: int
    reset_at: float


class RateLimiter:
    """Fixed-window counters keyed by an arbitrary string.

    Keys are namespaced by the caller, e.g. ``login:<address>``. The window
    resets fully at its boundary, so a burst straddling the boundary can
    admit up to twice the limit.
    """

    def __init__(self, clock: Clock) -> None:
        self._clock = clock
        self._entries: dict[str, RateLimitEntry] = {}
        self._lock = threading.Lock()

    def check(self, key: str, limit: int, window_seconds: float) -> bool:
        """Count a request against ``key``.

        Args:
            key: Counter key
            limit: Requests allowed per window
            window_seconds: Window length

        Returns:
            True if the request must be rejected, False if it is allowed
        """
        now = self._clock.now()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or now > entry.reset_at:
                self._entries[key] = RateLimitEntry(count=1, reset_at=now + window_seconds)
                return False
            if entry.count >= limit:
                return True
            entry.count += 1
            return False

    def retry_after(self, key: str) -> int:
        """Seconds until the window for ``key`` resets (0 if none)."""
        now = self._clock.now()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or now > entry.reset_at:
                return 0
            return max(1, int(entry.reset_at - now + 0.999))

    def remaining(self, key: str, limit: int) -> int:
        """Requests still allowed for ``key`` in its current window."""
        now = self._clock.now()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or now > entry.reset_at:
                return limit
            return max(0, limit - entry.count)

    def sweep(self) -> int:
        """Delete entries whose window has passed.

        Returns:
            Number of entries removed
        """
        now = self._clock.now()
        with self._lock:
            expired = [key for key, entry in self._entries.items() if now > entry.reset_at]
            for key in expired:
                del self._entries[key]
        if expired:
            logfire.debug("Rate limit entries swept", removed=len(expired))
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
