"""Profile use cases."""

from .check_handle import CheckHandleRequest, CheckHandleResponse, CheckHandleUseCase
from .setup_profile import SetupProfileRequest, SetupProfileUseCase

__all__ = [
    "CheckHandleRequest",
    "CheckHandleResponse",
    "CheckHandleUseCase",
    "SetupProfileRequest",
    "SetupProfileUseCase",
]
