"""Per-identifier failed-login tracking with a timed lock.

Each identifier moves through three states: clean (no entry), tracking
(failures counted, no lock) and locked (``locked_until`` in the future).
When a lock elapses the identifier returns to tracking or clean.
"""

import math
import threading
from dataclasses import dataclass

import logfire

from quill.util.clock import Clock


@dataclass
class LockoutEntry:
    """Failure bookkeeping for one login identifier."""

    failed_attempts: int
    last_attempt: float
    locked_until: float | None = None


@dataclass(frozen=True)
class LockStatus:
    """Result of a lock check."""

    locked: bool
    remaining_seconds: int | None = None


class LockoutGuard:
    """Failed-login counters keyed by login identifier.

    Identifiers are compared case-insensitively, so ``@Alice`` and
    ``@alice`` share one counter.
    """

    def __init__(
        self,
        clock: Clock,
        threshold: int = 5,
        duration_seconds: float = 60.0,
        retention_seconds: float = 300.0,
        idle_seconds: float = 900.0,
    ) -> None:
        self._clock = clock
        self.threshold = threshold
        self.duration_seconds = duration_seconds
        self.retention_seconds = retention_seconds
        self.idle_seconds = idle_seconds
        self._entries: dict[str, LockoutEntry] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _key(identifier: str) -> str:
        return identifier.strip().lower()

    def record_failed_login(self, identifier: str) -> bool:
        """Record one failed attempt.

        Args:
            identifier: Login identifier (handle)

        Returns:
            True if the identifier is locked after this call
        """
        key = self._key(identifier)
        now = self._clock.now()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._entries[key] = LockoutEntry(failed_attempts=1, last_attempt=now)
                return False

            entry.last_attempt = now
            if entry.locked_until is not None:
                if now < entry.locked_until:
                    return True
                # Lock elapsed: this failure starts a fresh count
                entry.failed_attempts = 1
                entry.locked_until = None
                return False

            entry.failed_attempts += 1
            if entry.failed_attempts >= self.threshold:
                entry.locked_until = now + self.duration_seconds
                logfire.warn(
                    "Login identifier locked",
                    identifier=key,
                    failed_attempts=entry.failed_attempts,
                    duration_seconds=self.duration_seconds,
                )
                return True
            return False

    def is_account_locked(self, identifier: str) -> LockStatus:
        """Check whether an identifier is currently locked.

        An elapsed lock is cleared as a side effect.

        Args:
            identifier: Login identifier (handle)

        Returns:
            Lock status with whole seconds remaining, rounded up
        """
        key = self._key(identifier)
        now = self._clock.now()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or entry.locked_until is None:
                return LockStatus(locked=False)
            if now >= entry.locked_until:
                entry.locked_until = None
                entry.failed_attempts = 0
                return LockStatus(locked=False)
            return LockStatus(
                locked=True,
                remaining_seconds=math.ceil(entry.locked_until - now),
            )

    def failed_attempts(self, identifier: str) -> int:
        """Current failure count for an identifier (0 when clean)."""
        with self._lock:
            entry = self._entries.get(self._key(identifier))
            return entry.failed_attempts if entry else 0

    def reset_failed_logins(self, identifier: str) -> None:
        """Forget all failures for an identifier."""
        with self._lock:
            self._entries.pop(self._key(identifier), None)

    def sweep(self) -> int:
        """Purge entries whose lock expired more than ``retention_seconds`` ago.

        Entries that never locked are purged once no failure has been
        recorded for ``idle_seconds``.

        Returns:
            Number of entries removed
        """
        now = self._clock.now()
        with self._lock:
            expired = [
                key
                for key, entry in self._entries.items()
                if (
                    entry.locked_until is not None
                    and entry.locked_until + self.retention_seconds < now
                )
                or (
                    entry.locked_until is None
                    and entry.last_attempt + self.idle_seconds < now
                )
            ]
            for key in expired:
                del self._entries[key]
        if expired:
            logfire.debug("Lockout entries swept", removed=len(expired))
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
