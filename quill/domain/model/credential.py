"""Stored login credential.

A user either has a password hash or has no local credential at all
(federation-only accounts). The two cases are separate types so callers
branch on the variant instead of checking for a missing hash.
"""

from typing import Annotated, Literal, Union

from pydantic import Field

from quill.domain.model.common import DomainModel


class NoCredential(DomainModel):
    """Account that can only sign in through an identity provider."""

    kind: Literal["none"] = "none"


class PasswordHash(DomainModel):
    """bcrypt hash of the account password."""

    kind: Literal["password"] = "password"
    value: str = Field(min_length=1)


Credential = Annotated[Union[NoCredential, PasswordHash], Field(discriminator="kind")]
