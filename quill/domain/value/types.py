"""Domain value objects for Quill.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules.
"""

import re
from enum import Enum

from pydantic import field_validator

from quill.domain.value.common import RootValueObject, ValueObject

HANDLE_MARKER = "@"
HANDLE_PATTERN = re.compile(r"^@[A-Za-z0-9_]{3,31}$")

# Handles only the system may claim
RESERVED_HANDLES = frozenset({"@admin"})


class AuthProvider(str, Enum):
    """Supported federated identity providers."""

    GOOGLE = "google"


class AuditEventKind(str, Enum):
    """Kinds of security events recorded in the audit log."""

    LOGIN = "login"
    LOGOUT = "logout"
    REGISTER = "register"
    FAILED_LOGIN = "failed_login"
    ACCOUNT_LOCKED = "account_locked"


class Handle(RootValueObject[str]):
    """Public user handle, e.g. ``@alice``.

    Starts with ``@`` followed by 3-31 letters, digits or underscores.
    Display keeps the original case; uniqueness and lookup use ``key``.
    """

    @field_validator("root")
    @classmethod
    def validate_handle_format(cls, v: str) -> str:
        """Validate handle marker, alphabet and length."""
        if not HANDLE_PATTERN.match(v):
            raise ValueError(
                "Handle must start with @ and contain 3-31 letters, numbers or underscores"
            )
        return v

    @property
    def key(self) -> str:
        """Case-insensitive form used for uniqueness and lookup."""
        return self.root.lower()

    @property
    def reserved(self) -> bool:
        """Whether only the system may claim this handle."""
        return self.key in RESERVED_HANDLES

    @classmethod
    def normalize(cls, raw: str) -> str:
        """Normalize user input into a lookup key.

        Accepts the handle with or without the leading marker. The result is
        not validated, so unknown shapes simply fail to match.

        Args:
            raw: Handle as typed by a user or taken from a URL

        Returns:
            Lower-cased handle with the marker prefix
        """
        raw = raw.strip().lower()
        if not raw.startswith(HANDLE_MARKER):
            raw = f"{HANDLE_MARKER}{raw}"
        return raw


class OAuthProviderInfo(ValueObject):
    """User info returned from a federated identity provider."""

    provider: AuthProvider
    provider_user_id: str
    email: str
    display_name: str | None = None
    avatar_url: str | None = None
    verified: bool = False
