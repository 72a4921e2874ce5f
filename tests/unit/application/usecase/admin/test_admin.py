"""Unit tests for administrator use cases."""

from uuid import uuid4

from dishka import AsyncContainer
import pytest

from quill.application.usecase.admin import (
    EnsureAdminUseCase,
    ListAuditEventsRequest,
    ListAuditEventsUseCase,
)
from quill.application.usecase.common import AccountInfo
from quill.config import AuthSettings, Settings
from quill.domain.error import AuthorizationError, ValidationError
from quill.domain.model import AuditEvent
from quill.domain.security import AuditLog
from quill.domain.service import PasswordHasher, UserService
from quill.domain.value import AuditEventKind
from tests.conftest import make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestEnsureAdminUseCase:
    """Tests for EnsureAdminUseCase."""

    @pytest.mark.asyncio
    async def test_creates_admin_once(self, unit_env: AsyncContainer):
        # Arrange
        user_service = await unit_env.get(UserService)
        hasher = await unit_env.get(PasswordHasher)
        settings = Settings(auth=AuthSettings(admin_password="AdminPass1"))
        use_case = EnsureAdminUseCase(user_service, hasher, settings)

        # Act
        created = await use_case.execute()
        again = await use_case.execute()

        # Assert
        assert created is True
        assert again is False
        admin = await user_service.find_by_handle("@admin")
        assert admin.email == "admin@quill.local"
        assert hasher.verify("AdminPass1", admin.credential.value)

    @pytest.mark.asyncio
    async def test_does_nothing_without_password(self, unit_env: AsyncContainer):
        user_service = await unit_env.get(UserService)
        hasher = await unit_env.get(PasswordHasher)
        use_case = EnsureAdminUseCase(user_service, hasher, Settings(auth=AuthSettings()))

        assert await use_case.execute() is False
        assert await user_service.find_by_handle("@admin") is None


class TestListAuditEventsUseCase:
    """Tests for ListAuditEventsUseCase."""

    @staticmethod
    def record(audit_log: AuditLog, user_id=None) -> None:
        audit_log.append(
            AuditEvent(event=AuditEventKind.FAILED_LOGIN, success=False, user_id=user_id)
        )

    @pytest.mark.asyncio
    async def test_admin_sees_recent_events(self, unit_env: AsyncContainer):
        # Arrange
        audit_log = await unit_env.get(AuditLog)
        for _ in range(3):
            self.record(audit_log)
        use_case = await unit_env.get(ListAuditEventsUseCase)
        admin = AccountInfo.from_user(make_user("@Admin", "Admin"))

        # Act
        result = await use_case.execute(ListAuditEventsRequest(requester=admin, limit=2))

        # Assert
        assert len(result.events) == 2
        assert result.events[0].id == audit_log.latest().id

    @pytest.mark.asyncio
    async def test_filter_by_user(self, unit_env: AsyncContainer):
        # Arrange
        audit_log = await unit_env.get(AuditLog)
        target = make_user("@target", "Target")
        self.record(audit_log, target.id)
        self.record(audit_log)
        use_case = await unit_env.get(ListAuditEventsUseCase)
        admin = AccountInfo.from_user(make_user("@admin", "Admin"))

        # Act
        result = await use_case.execute(
            ListAuditEventsRequest(requester=admin, user_id=str(target.id))
        )

        # Assert
        assert [e.user_id for e in result.events] == [target.id]

    @pytest.mark.asyncio
    async def test_regular_user_is_forbidden(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(ListAuditEventsUseCase)
        requester = AccountInfo.from_user(make_user())

        with pytest.raises(AuthorizationError):
            await use_case.execute(ListAuditEventsRequest(requester=requester))

    @pytest.mark.asyncio
    async def test_bad_user_filter_is_rejected(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(ListAuditEventsUseCase)
        admin = AccountInfo.from_user(make_user("@admin", "Admin"))

        with pytest.raises(ValidationError):
            await use_case.execute(
                ListAuditEventsRequest(requester=admin, user_id="not-a-uuid")
            )

    @pytest.mark.asyncio
    async def test_unknown_user_filter_is_empty(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(ListAuditEventsUseCase)
        admin = AccountInfo.from_user(make_user("@admin", "Admin"))

        result = await use_case.execute(
            ListAuditEventsRequest(requester=admin, user_id=str(uuid4()))
        )

        assert result.events == []
