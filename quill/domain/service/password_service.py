"""Password policy and hashing interface."""

import re

from quill.domain.error import ValidationError

from .base import Service

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128

# ASCII classes only: "²" is not a digit and "À" is not an uppercase letter here
LOWERCASE = re.compile(r"[a-z]")
UPPERCASE = re.compile(r"[A-Z]")
DIGIT = re.compile(r"[0-9]")


def check_password_policy(password: str) -> None:
    """Enforce length and character-class rules for new passwords.

    Raises:
        ValidationError: If the password is too weak
    """
    if not PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH:
        raise ValidationError(
            f"Password must be between {PASSWORD_MIN_LENGTH} and "
            f"{PASSWORD_MAX_LENGTH} characters"
        )
    if not LOWERCASE.search(password):
        raise ValidationError("Password must contain a lowercase letter")
    if not UPPERCASE.search(password):
        raise ValidationError("Password must contain an uppercase letter")
    if not DIGIT.search(password):
        raise ValidationError("Password must contain a number")


class PasswordHasher(Service):
    """One-way password hashing primitive."""

    def hash(self, password: str) -> str:
        """Hash a plaintext password for storage."""
        raise NotImplementedError

    def verify(self, password: str, hashed: str) -> bool:
        """Check a plaintext password against a stored hash.

        Returns False for a malformed hash instead of raising.
        """
        raise NotImplementedError
