"""User profile use cases."""

from bailago.application.usecase.user.update_profile import (
    UpdateProfileRequest,
    UpdateProfileResponse,
    UpdateProfileUseCase,
)
from bailago.application.usecase.user.update_push_token import (
    UpdatePushTokenRequest,
    UpdatePushTokenResponse,
    UpdatePushTokenUseCase,
)

__all__ = [
    "UpdateProfileRequest",
    "UpdateProfileResponse",
    "UpdateProfileUseCase",
    "UpdatePushTokenRequest",
    "UpdatePushTokenResponse",
    "UpdatePushTokenUseCase",
]
