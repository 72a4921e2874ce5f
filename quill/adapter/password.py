"""bcrypt password hasher."""

import bcrypt

from quill.domain.service.password_service import PasswordHasher

# bcrypt only reads the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72


class BcryptPasswordHasher(PasswordHasher):
    """PasswordHasher backed by the ``bcrypt`` package."""

    def __init__(self, rounds: int = 10) -> None:
        """Initialize hasher.

        Args:
            rounds: bcrypt cost factor for new hashes
        """
        self.rounds = rounds

    @staticmethod
    def _encode(password: str) -> bytes:
        return password.encode("utf-8")[:BCRYPT_MAX_BYTES]

    def hash(self, password: str) -> str:
        """Hash a password with a fresh salt."""
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(self._encode(password), salt).decode("utf-8")

    def verify(self, password: str, hashed: str) -> bool:
        """Check a password against a stored bcrypt hash."""
        try:
            return bcrypt.checkpw(self._encode(password), hashed.encode("utf-8"))
        except ValueError:
            # Stored value is not a bcrypt hash
            return False
