"""Reset password use case."""

from pydantic import BaseModel, Field, field_validator

from bailago.application.usecase.base import BaseUseCase, notify_quietly
from bailago.domain.model.user import UserView
from bailago.domain.outcome import Outcome
from bailago.domain.service import NotificationDispatcher, NotificationKind, UserRegistry
from bailago.domain.service.user_registry import PASSWORD_MIN_LENGTH, check_password_length


class ResetPasswordRequest(BaseModel):
    """Reset password request."""

    token: str
    new_password: str = Field(min_length=PASSWORD_MIN_LENGTH)

    @field_validator("new_password")
    @classmethod
    def validate_new_password(cls, value: str) -> str:
        return check_password_length(value)


class ResetPasswordResponse(BaseModel):
    """Reset password response."""

    user: UserView


class ResetPasswordUseCase(BaseUseCase):
    """Use case for completing a password reset."""

    def __init__(
        self,
        user_registry: UserRegistry,
        notification_dispatcher: NotificationDispatcher,
    ) -> None:
        """Initialize reset password use case.

        Args:
            user_registry: User registry
            notification_dispatcher: Confirms the change to the user
        """
        self.user_registry = user_registry
        self.notification_dispatcher = notification_dispatcher

    async def execute(self, request: ResetPasswordRequest) -> Outcome[ResetPasswordResponse]:
        """Replace the password, then confirm the change by notification.

        Returns:
            The user, or NOT_FOUND for an unknown, used or expired token
        """
        outcome = await self.user_registry.reset_password(request.token, request.new_password)
        if not outcome.ok:
            return Outcome.from_failure(outcome.failure)

        await notify_quietly(
            self.notification_dispatcher,
            NotificationKind.PASSWORD_CHANGED,
            outcome.value,
            {},
        )
        return Outcome.success(ResetPasswordResponse(user=outcome.value))
