"""Unit tests for LoginUseCase."""

from dishka import AsyncContainer
import pytest

from quill.application.usecase.auth import (
    LoginRequest,
    LoginUseCase,
    RegisterRequest,
    RegisterUseCase,
)
from quill.domain.error import (
    AccountLockedError,
    InvalidCredentialsError,
    RateLimitedError,
)
from quill.domain.security import AuditLog, LockoutGuard
from quill.domain.service import JWTService, UserService
from quill.domain.value import AuditEventKind, Handle
from quill.util.clock import FakeClock
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()

PASSWORD = "Secret123"


async def register_alice(container: AsyncContainer) -> str:
    use_case = await container.get(RegisterUseCase)
    account = await use_case.execute(
        RegisterRequest(
            email="alice@example.com",
            password=PASSWORD,
            handle="@Alice",
            nickname="Alice",
            client_address="registration-host",
        )
    )
    return account.user_id


def attempt(handle: str = "@alice", password: str = PASSWORD, address: str = "10.0.0.1"):
    return LoginRequest(handle=handle, password=password, client_address=address)


class TestLoginSuccess:
    """Tests for successful logins."""

    @pytest.mark.asyncio
    async def test_login_issues_token_for_account(self, unit_env: AsyncContainer):
        # Arrange
        user_id = await register_alice(unit_env)
        use_case = await unit_env.get(LoginUseCase)
        jwt_service = await unit_env.get(JWTService)

        # Act
        result = await use_case.execute(attempt())

        # Assert
        payload = jwt_service.verify_token(result.token)
        assert payload.user_id == user_id
        assert payload.email == "alice@example.com"
        assert str(result.user.handle) == "@Alice"

    @pytest.mark.asyncio
    async def test_handle_match_ignores_case_and_marker(self, unit_env: AsyncContainer):
        await register_alice(unit_env)
        use_case = await unit_env.get(LoginUseCase)

        result = await use_case.execute(attempt(handle="ALICE"))

        assert result.user.email == "alice@example.com"

    @pytest.mark.asyncio
    async def test_success_resets_failures_and_audits(self, unit_env: AsyncContainer):
        # Arrange
        await register_alice(unit_env)
        use_case = await unit_env.get(LoginUseCase)
        guard = await unit_env.get(LockoutGuard)
        audit_log = await unit_env.get(AuditLog)
        for _ in range(3):
            with pytest.raises(InvalidCredentialsError):
                await use_case.execute(attempt(password="Wrong1234"))

        # Act
        await use_case.execute(attempt())

        # Assert
        assert guard.failed_attempts("@alice") == 0
        assert audit_log.latest().event == AuditEventKind.LOGIN
        assert audit_log.latest().success is True


class TestLoginFailures:
    """Tests for rejected logins."""

    @pytest.mark.asyncio
    async def test_wrong_password_is_generic_and_audited(self, unit_env: AsyncContainer):
        # Arrange
        await register_alice(unit_env)
        use_case = await unit_env.get(LoginUseCase)
        audit_log = await unit_env.get(AuditLog)

        # Act
        with pytest.raises(InvalidCredentialsError) as exc_info:
            await use_case.execute(attempt(password="Wrong1234"))

        # Assert
        assert str(exc_info.value) == "Invalid handle or password"
        entry = audit_log.latest()
        assert entry.event == AuditEventKind.FAILED_LOGIN
        assert entry.metadata == {"reason": "invalid_password"}

    @pytest.mark.asyncio
    async def test_unknown_handle_gives_same_error(self, unit_env: AsyncContainer):
        # Arrange
        use_case = await unit_env.get(LoginUseCase)
        audit_log = await unit_env.get(AuditLog)

        # Act
        with pytest.raises(InvalidCredentialsError) as exc_info:
            await use_case.execute(attempt(handle="@ghost"))

        # Assert
        assert str(exc_info.value) == "Invalid handle or password"
        assert audit_log.latest().metadata == {"reason": "user_not_found"}

    @pytest.mark.asyncio
    async def test_federated_only_account_cannot_use_password(
        self, unit_env: AsyncContainer
    ):
        # Arrange
        user_service = await unit_env.get(UserService)
        user = await user_service.create_user(email="g@example.com", display_name="G")
        await user_service.complete_profile(user, handle=Handle("@gina"), nickname="Gina")
        use_case = await unit_env.get(LoginUseCase)

        # Act / Assert
        with pytest.raises(InvalidCredentialsError):
            await use_case.execute(attempt(handle="@gina"))


class TestLockout:
    """Tests for the lockout path."""

    @pytest.mark.asyncio
    async def test_fifth_wrong_password_reports_lock(self, unit_env: AsyncContainer):
        # Arrange
        await register_alice(unit_env)
        use_case = await unit_env.get(LoginUseCase)
        audit_log = await unit_env.get(AuditLog)
        for _ in range(4):
            with pytest.raises(InvalidCredentialsError):
                await use_case.execute(attempt(password="Wrong1234"))

        # Act
        with pytest.raises(AccountLockedError) as exc_info:
            await use_case.execute(attempt(password="Wrong1234"))

        # Assert
        assert exc_info.value.retry_after == 60
        assert audit_log.latest().event == AuditEventKind.ACCOUNT_LOCKED

    @pytest.mark.asyncio
    async def test_correct_password_fails_while_locked(self, unit_env: AsyncContainer):
        # Arrange
        await register_alice(unit_env)
        use_case = await unit_env.get(LoginUseCase)
        clock = await unit_env.get(FakeClock)
        for _ in range(5):
            with pytest.raises((InvalidCredentialsError, AccountLockedError)):
                await use_case.execute(attempt(password="Wrong1234"))
        clock.advance(30)

        # Act / Assert
        with pytest.raises(AccountLockedError) as exc_info:
            await use_case.execute(attempt())
        assert exc_info.value.retry_after == 30

    @pytest.mark.asyncio
    async def test_login_succeeds_after_lock_expires(self, unit_env: AsyncContainer):
        # Arrange
        await register_alice(unit_env)
        use_case = await unit_env.get(LoginUseCase)
        guard = await unit_env.get(LockoutGuard)
        clock = await unit_env.get(FakeClock)
        for _ in range(5):
            with pytest.raises((InvalidCredentialsError, AccountLockedError)):
                await use_case.execute(attempt(password="Wrong1234"))

        # Act
        clock.advance(61)
        result = await use_case.execute(attempt())

        # Assert
        assert result.token
        assert guard.failed_attempts("@alice") == 0

    @pytest.mark.asyncio
    async def test_unknown_handle_locks_like_real_one(self, unit_env: AsyncContainer):
        """Lockout must not reveal whether an account exists."""
        # Arrange
        use_case = await unit_env.get(LoginUseCase)
        for _ in range(4):
            with pytest.raises(InvalidCredentialsError):
                await use_case.execute(attempt(handle="@ghost"))

        # Act / Assert
        with pytest.raises(AccountLockedError) as exc_info:
            await use_case.execute(attempt(handle="@ghost"))
        assert exc_info.value.retry_after == 60

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("handle", "register_first"), [("@alice", True), ("@ghost", False)]
    )
    async def test_lock_transition_is_audited_once(
        self, unit_env: AsyncContainer, handle, register_first
    ):
        """The locking attempt records account_locked and no failed_login."""
        # Arrange
        if register_first:
            await register_alice(unit_env)
        use_case = await unit_env.get(LoginUseCase)
        audit_log = await unit_env.get(AuditLog)
        for _ in range(4):
            with pytest.raises(InvalidCredentialsError):
                await use_case.execute(attempt(handle=handle, password="Wrong1234"))

        # Act
        with pytest.raises(AccountLockedError):
            await use_case.execute(attempt(handle=handle, password="Wrong1234"))

        # Assert
        assert [e.event for e in audit_log.recent(5)] == [
            AuditEventKind.ACCOUNT_LOCKED,
            *[AuditEventKind.FAILED_LOGIN] * 4,
        ]


class TestRateLimit:
    """Tests for per-address rate limiting."""

    @pytest.mark.asyncio
    async def test_eleventh_attempt_from_address_is_rejected(
        self, unit_env: AsyncContainer
    ):
        # Arrange
        use_case = await unit_env.get(LoginUseCase)
        audit_log = await unit_env.get(AuditLog)
        for i in range(10):
            with pytest.raises(InvalidCredentialsError):
                await use_case.execute(attempt(handle=f"@nobody{i}", address="192.0.2.9"))

        # Act
        with pytest.raises(RateLimitedError) as exc_info:
            await use_case.execute(attempt(handle="@nobody_x", address="192.0.2.9"))

        # Assert
        assert str(exc_info.value) == "Too many login attempts. Try again later."
        assert exc_info.value.retry_after == 900
        assert audit_log.latest().metadata == {"reason": "rate_limited"}

    @pytest.mark.asyncio
    async def test_other_addresses_are_unaffected(self, unit_env: AsyncContainer):
        # Arrange
        await register_alice(unit_env)
        use_case = await unit_env.get(LoginUseCase)
        for i in range(11):
            with pytest.raises((InvalidCredentialsError, RateLimitedError)):
                await use_case.execute(attempt(handle=f"@nobody{i}", address="192.0.2.9"))

        # Act
        result = await use_case.execute(attempt(address="192.0.2.10"))

        # Assert
        assert result.token
