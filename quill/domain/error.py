"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Malformed or out-of-range input."""

    pass


class SelfFollowError(ValidationError):
    """Raised when a user attempts to follow themselves."""

    def __init__(self) -> None:
        super().__init__("You cannot follow yourself")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ConflictError(DomainError):
    """Raised when a write collides with an existing record."""

    pass


class ProfileAlreadyCompleteError(ConflictError):
    """Raised when profile setup runs for a user who already has a handle."""

    def __init__(self) -> None:
        super().__init__("Profile setup already completed")


class AuthError(DomainError):
    """Authentication failure.

    Messages are generic: callers must not be able to tell a wrong
    password from an unknown handle.
    """

    pass


class InvalidCredentialsError(AuthError):
    """Raised when a handle/password pair does not authenticate."""

    def __init__(self) -> None:
        super().__init__("Invalid handle or password")


class AccountLockedError(AuthError):
    """Raised while a login identifier is locked out."""

    def __init__(self, retry_after: int):
        self.retry_after = retry_after
        super().__init__(
            f"Too many failed login attempts. Try again in {retry_after} seconds."
        )


class RateLimitedError(AuthError):
    """Raised when a client exceeds the request budget for an action."""

    def __init__(self, message: str, retry_after: int):
        self.retry_after = retry_after
        super().__init__(message)


class AuthorizationError(DomainError):
    """Action not permitted for the current session."""

    pass


class ProfileIncompleteError(AuthorizationError):
    """Raised when an action requires a handle and nickname the user has not set."""

    def __init__(self) -> None:
        super().__init__("Complete your profile setup before posting")


class StorageError(DomainError):
    """External database failure.

    The message is logged server-side only; clients see a generic error.
    """

    pass
