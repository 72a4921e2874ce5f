"""Bounded in-memory audit trail of security events.

History lives only in process memory and is lost on restart. It serves
operators, not compliance.
"""

import secrets
import threading
from collections import deque
from typing import Optional

import logfire

from quill.domain.model.audit import AuditEvent, AuditLogEntry
from quill.domain.value import UserId
from quill.util.clock import Clock

DEFAULT_LIMIT = 50


class AuditLog:
    """Ring buffer of audit entries, most recent first.

    Once ``capacity`` entries are held, each append evicts the oldest.
    """

    def __init__(self, clock: Clock, capacity: int = 1000) -> None:
        self._clock = clock
        self.capacity = capacity
        self._entries: deque[AuditLogEntry] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def _next_id(self) -> str:
        millis = int(self._clock.now() * 1000)
        return f"audit_{millis}_{secrets.token_hex(5)[:9]}"

    def append(self, event: AuditEvent) -> AuditLogEntry:
        """Record an event.

        Args:
            event: Event to record

        Returns:
            The stored entry with its id and timestamp
        """
        entry = AuditLogEntry(
            **event.model_dump(),
            id=self._next_id(),
            timestamp=self._clock.utcnow(),
        )
        with self._lock:
            # appendleft on a bounded deque drops from the right (oldest)
            self._entries.appendleft(entry)

        log = logfire.info if event.success else logfire.warn
        log(
            "Audit {event}",
            event=event.event.value,
            success=event.success,
            user_id=str(event.user_id) if event.user_id else None,
            handle=event.handle,
            client_address=event.client_address,
            **{f"meta_{k}": v for k, v in event.metadata.items()},
        )
        return entry

    def recent(self, limit: int = DEFAULT_LIMIT) -> list[AuditLogEntry]:
        """Return up to ``limit`` entries, most recent first."""
        with self._lock:
            return list(self._entries)[: max(0, limit)]

    def for_user(
        self, user_id: UserId, limit: int = DEFAULT_LIMIT
    ) -> list[AuditLogEntry]:
        """Return up to ``limit`` entries for one user, most recent first."""
        with self._lock:
            matching = [entry for entry in self._entries if entry.user_id == user_id]
        return matching[: max(0, limit)]

    def latest(self) -> Optional[AuditLogEntry]:
        """Most recent entry, if any."""
        with self._lock:
            return self._entries[0] if self._entries else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
