"""Request password reset use case."""

import logfire
from pydantic import BaseModel

from bailago.application.usecase.base import BaseUseCase, notify_quietly
from bailago.domain.outcome import Outcome
from bailago.domain.service import NotificationDispatcher, NotificationKind, UserRegistry


class RequestPasswordResetRequest(BaseModel):
    """Request password reset request."""

    email: str


class RequestPasswordResetResponse(BaseModel):
    """Request password reset response."""

    accepted: bool = True


class RequestPasswordResetUseCase(BaseUseCase):
    """Use case for starting a password reset.

    Always reports success so the response does not reveal whether an
    account exists for the email.
    """

    def __init__(
        self,
        user_registry: UserRegistry,
        notification_dispatcher: NotificationDispatcher,
    ) -> None:
        """Initialize request password reset use case.

        Args:
            user_registry: User registry
            notification_dispatcher: Sends the reset email
        """
        self.user_registry = user_registry
        self.notification_dispatcher = notification_dispatcher

    async def execute(
        self, request: RequestPasswordResetRequest
    ) -> Outcome[RequestPasswordResetResponse]:
        outcome = await self.user_registry.create_password_reset_token(request.email)
        if outcome.ok:
            user = await self.user_registry.find_by_email(request.email)
            if user:
                await notify_quietly(
                    self.notification_dispatcher,
                    NotificationKind.PASSWORD_RESET,
                    user,
                    {"token": outcome.value},
                )
        else:
            logfire.info("Password reset skipped", reason=outcome.kind.value)
        return Outcome.success(RequestPasswordResetResponse())
