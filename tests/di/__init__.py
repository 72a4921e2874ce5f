"""Mock providers for testing."""

from .clock import MockClockProvider
from .google import MockGoogleProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockClockProvider",
    "MockGoogleProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
