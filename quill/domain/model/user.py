"""User aggregate root.

Users are created either by credentials registration (handle and nickname
supplied up front) or by a first federated sign-in, in which case the
profile stays pending until profile setup sets handle and nickname.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from quill.domain.model.common import DomainModel
from quill.domain.model.credential import Credential, NoCredential
from quill.domain.value import Handle, UserId

NICKNAME_MIN_LENGTH = 2
NICKNAME_MAX_LENGTH = 50


class User(DomainModel):
    """User aggregate root."""

    id: UserId
    email: str = Field(min_length=3, max_length=255)
    display_name: str = Field(min_length=1, max_length=255)
    handle: Optional[Handle] = None
    nickname: Optional[str] = Field(
        default=None, min_length=NICKNAME_MIN_LENGTH, max_length=NICKNAME_MAX_LENGTH
    )
    avatar_url: Optional[str] = None
    credential: Credential = NoCredential()
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def profile_complete(self) -> bool:
        """Whether the user has chosen a handle and nickname."""
        return self.handle is not None and bool(self.nickname)
