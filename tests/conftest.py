"""Test configuration and fixtures."""

import os
from uuid import uuid4

# Settings are read from the environment when the container resolves them
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("AUTH__JWT_SECRET", "test-secret-key-with-enough-length-for-hs256")
os.environ.setdefault("AUTH__BCRYPT_ROUNDS", "4")
os.environ.setdefault("AUTH__GOOGLE__CLIENT_ID", "test-client-id")
os.environ.setdefault("AUTH__GOOGLE__CLIENT_SECRET", "test-client-secret")

import logfire  # noqa: E402
import pytest  # noqa: E402

from quill.domain.model import User  # noqa: E402
from quill.domain.value import Handle, UserId  # noqa: E402

logfire.configure(send_to_logfire=False, console=False)


def make_user(
    handle: str | None = "@alice",
    nickname: str | None = "Alice",
    email: str | None = None,
) -> User:
    """Helper to build a user with a completed profile by default."""
    if email is None:
        email = f"{(handle or '@anon').lstrip('@').lower()}@example.com"
    return User(
        id=UserId(uuid4()),
        email=email,
        display_name=nickname or "Anonymous",
        handle=Handle(handle) if handle else None,
        nickname=nickname,
    )


@pytest.fixture
def alice() -> User:
    return make_user()
