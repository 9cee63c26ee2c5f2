"""Verify email use case."""

from pydantic import BaseModel

from bailago.application.usecase.base import BaseUseCase, notify_quietly
from bailago.domain.model.user import UserView
from bailago.domain.outcome import Outcome
from bailago.domain.service import NotificationDispatcher, NotificationKind, UserRegistry


class VerifyEmailRequest(BaseModel):
    """Verify email request."""

    token: str


class VerifyEmailResponse(BaseModel):
    """Verify email response."""

    user: UserView


class VerifyEmailUseCase(BaseUseCase):
    """Use case for confirming an email address."""

    def __init__(
        self,
        user_registry: UserRegistry,
        notification_dispatcher: NotificationDispatcher,
    ) -> None:
        """Initialize verify email use case.

        Args:
            user_registry: User registry
            notification_dispatcher: Sends the welcome message
        """
        self.user_registry = user_registry
        self.notification_dispatcher = notification_dispatcher

    async def execute(self, request: VerifyEmailRequest) -> Outcome[VerifyEmailResponse]:
        """Verify the email, then welcome the user.

        Returns:
            The verified user, or NOT_FOUND for an unknown or expired token
        """
        outcome = await self.user_registry.verify_email(request.token)
        if not outcome.ok:
            return Outcome.from_failure(outcome.failure)

        await notify_quietly(
            self.notification_dispatcher,
            NotificationKind.WELCOME,
            outcome.value,
            {"username": outcome.value.username},
        )
        return Outcome.success(VerifyEmailResponse(user=outcome.value))
