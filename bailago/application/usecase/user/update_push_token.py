"""Register or clear a device push token."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from bailago.application.usecase.base import BaseUseCase
from bailago.domain.model.user import UserView
from bailago.domain.outcome import Outcome
from bailago.domain.service import UserRegistry
from bailago.domain.value import UserId


class UpdatePushTokenRequest(BaseModel):
    """Push token request. A None token unregisters the device."""

    user_id: str  # From authenticated user
    push_token: Optional[str] = None
    push_enabled: Optional[bool] = None


class UpdatePushTokenResponse(BaseModel):
    user: UserView


class UpdatePushTokenUseCase(BaseUseCase):
    """Use case for registering the device that receives push notifications."""

    def __init__(self, user_registry: UserRegistry) -> None:
        """Initialize update push token use case.

        Args:
            user_registry: User registry
        """
        self.user_registry = user_registry

    async def execute(self, request: UpdatePushTokenRequest) -> Outcome[UpdatePushTokenResponse]:
        outcome = await self.user_registry.update_push_token(
            UserId(UUID(request.user_id)), request.push_token, request.push_enabled
        )
        if not outcome.ok:
            return Outcome.from_failure(outcome.failure)
        return Outcome.success(UpdatePushTokenResponse(user=outcome.value))
