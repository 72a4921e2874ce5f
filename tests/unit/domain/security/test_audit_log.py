"""Unit tests for AuditLog."""

from uuid import uuid4

from quill.domain.model import AuditEvent
from quill.domain.security import AuditLog
from quill.domain.value import AuditEventKind, UserId
from quill.util.clock import FakeClock


def login_event(user_id: UserId | None = None, success: bool = True) -> AuditEvent:
    return AuditEvent(
        event=AuditEventKind.LOGIN if success else AuditEventKind.FAILED_LOGIN,
        success=success,
        user_id=user_id,
        client_address="10.0.0.1",
    )


class TestAppend:
    """Tests for AuditLog.append()."""

    def test_assigns_id_and_timestamp(self):
        # Arrange
        clock = FakeClock(start=1_700_000_000.0)
        log = AuditLog(clock=clock)

        # Act
        entry = log.append(login_event())

        # Assert
        assert entry.id.startswith("audit_1700000000000_")
        assert len(entry.id.rsplit("_", 1)[1]) == 9
        assert entry.timestamp.timestamp() == 1_700_000_000.0
        assert entry.client_address == "10.0.0.1"

    def test_ids_are_unique(self):
        log = AuditLog(clock=FakeClock())

        ids = {log.append(login_event()).id for _ in range(50)}

        assert len(ids) == 50

    def test_evicts_oldest_at_capacity(self):
        """Holding ``capacity`` entries, each append drops the oldest."""
        # Arrange
        log = AuditLog(clock=FakeClock(), capacity=3)
        first = log.append(login_event())

        # Act
        entries = [log.append(login_event()) for _ in range(3)]

        # Assert
        assert len(log) == 3
        assert first.id not in {e.id for e in log.recent(10)}
        assert log.latest() == entries[-1]


class TestQueries:
    """Tests for recent() and for_user()."""

    def test_recent_is_newest_first(self):
        # Arrange
        clock = FakeClock()
        log = AuditLog(clock=clock)
        older = log.append(login_event())
        clock.advance(1)
        newer = log.append(login_event(success=False))

        # Act
        recent = log.recent()

        # Assert
        assert [e.id for e in recent] == [newer.id, older.id]

    def test_recent_respects_limit(self):
        log = AuditLog(clock=FakeClock())
        for _ in range(5):
            log.append(login_event())

        assert len(log.recent(limit=2)) == 2

    def test_for_user_filters_by_user(self):
        # Arrange
        log = AuditLog(clock=FakeClock())
        alice, bob = UserId(uuid4()), UserId(uuid4())
        log.append(login_event(alice))
        log.append(login_event(bob))
        log.append(login_event(alice, success=False))

        # Act
        entries = log.for_user(alice)

        # Assert
        assert len(entries) == 2
        assert all(e.user_id == alice for e in entries)
        assert entries[0].event == AuditEventKind.FAILED_LOGIN

    def test_latest_on_empty_log(self):
        assert AuditLog(clock=FakeClock()).latest() is None
