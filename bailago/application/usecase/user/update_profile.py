"""Update profile use case."""

from uuid import UUID

from pydantic import BaseModel

from bailago.application.usecase.base import BaseUseCase
from bailago.domain.model.user import UserView
from bailago.domain.outcome import Outcome
from bailago.domain.service import ProfileUpdate, UserRegistry
from bailago.domain.value import UserId


class UpdateProfileRequest(ProfileUpdate):
    """Update profile request."""

    user_id: str  # From authenticated user


class UpdateProfileResponse(BaseModel):
    user: UserView


class UpdateProfileUseCase(BaseUseCase):
    """Use case for editing one's own profile."""

    def __init__(self, user_registry: UserRegistry) -> None:
        """Initialize update profile use case.

        Args:
            user_registry: User registry
        """
        self.user_registry = user_registry

    async def execute(self, request: UpdateProfileRequest) -> Outcome[UpdateProfileResponse]:
        outcome = await self.user_registry.update_profile(UserId(UUID(request.user_id)), request)
        if not outcome.ok:
            return Outcome.from_failure(outcome.failure)
        return Outcome.success(UpdateProfileResponse(user=outcome.value))
