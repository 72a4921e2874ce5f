"""Follow edge between two users."""

from datetime import datetime, timezone

from pydantic import Field, model_validator

from quill.domain.model.common import DomainModel
from quill.domain.value import UserId


class Follow(DomainModel):
    """Directed follower -> followee edge."""

    follower_id: UserId
    followee_id: UserId
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @model_validator(mode="after")
    def validate_not_self(self) -> "Follow":
        """Reject self edges."""
        if self.follower_id == self.followee_id:
            raise ValueError("A user cannot follow themselves")
        return self
