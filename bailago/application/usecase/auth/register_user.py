"""Register user use case."""

import logfire
from pydantic import BaseModel

from bailago.application.usecase.base import BaseUseCase, notify_quietly
from bailago.domain.model.user import UserView
from bailago.domain.outcome import Outcome
from bailago.domain.service import (
    NotificationDispatcher,
    NotificationKind,
    RegisterUserInput,
    UserRegistry,
)


class RegisterUserRequest(RegisterUserInput):
    """Local registration request."""


class RegisterUserResponse(BaseModel):
    """Register user response."""

    user: UserView


class RegisterUserUseCase(BaseUseCase):
    """Use case for registering a local (email + password) account."""

    def __init__(
        self,
        user_registry: UserRegistry,
        notification_dispatcher: NotificationDispatcher,
    ) -> None:
        """Initialize register user use case.

        Args:
            user_registry: User registry
            notification_dispatcher: Sends the verification email
        """
        self.user_registry = user_registry
        self.notification_dispatcher = notification_dispatcher

    async def execute(self, request: RegisterUserRequest) -> Outcome[RegisterUserResponse]:
        """Execute registration flow.

        Steps:
        1. Create the account (fails with CONFLICT on a taken identity)
        2. Send the email-verification token

        Args:
            request: Registration request

        Returns:
            The new user, or the registry failure
        """
        outcome = await self.user_registry.create(request)
        if not outcome.ok:
            return Outcome.from_failure(outcome.failure)

        registration = outcome.value
        await notify_quietly(
            self.notification_dispatcher,
            NotificationKind.EMAIL_VERIFICATION,
            registration.user,
            {"token": registration.verification_token},
        )
        logfire.info("Registration completed", user_id=str(registration.user.id))
        return Outcome.success(RegisterUserResponse(user=registration.user))
