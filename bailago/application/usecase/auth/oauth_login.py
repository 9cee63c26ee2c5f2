"""OAuth login use case."""

import logfire
from pydantic import BaseModel

from bailago.application.usecase.base import BaseUseCase, notify_quietly
from bailago.domain.model.user import UserView
from bailago.domain.outcome import Outcome
from bailago.domain.service import (
    AccountLifecycleManager,
    NotificationDispatcher,
    NotificationKind,
    UserRegistry,
)
from bailago.domain.value import AuthProvider, OAuthProfile


class OAuthLoginRequest(BaseModel):
    """OAuth login request.

    The provider exchange already happened in the transport layer; these
    are the identity facts it returned.
    """

    provider: AuthProvider
    provider_id: str
    email: str
    profile: OAuthProfile | None = None


class OAuthLoginResponse(BaseModel):
    """OAuth login response."""

    user: UserView
    is_new_user: bool


class OAuthLoginUseCase(BaseUseCase):
    """Use case for Google / Instagram login."""

    def __init__(
        self,
        user_registry: UserRegistry,
        account_lifecycle: AccountLifecycleManager,
        notification_dispatcher: NotificationDispatcher,
    ) -> None:
        """Initialize OAuth login use case.

        Args:
            user_registry: User registry
            account_lifecycle: Records the login as activity
            notification_dispatcher: Sends the welcome message to new users
        """
        self.user_registry = user_registry
        self.account_lifecycle = account_lifecycle
        self.notification_dispatcher = notification_dispatcher

    async def execute(self, request: OAuthLoginRequest) -> Outcome[OAuthLoginResponse]:
        """Execute OAuth login flow.

        Steps:
        1. Find the account linked to the provider identity
        2. If found: record activity and return it
        3. If not: create a pre-verified account and welcome the user

        Args:
            request: Provider identity

        Returns:
            The user and whether it was just created, or CONFLICT when the
            email already belongs to another account
        """
        with logfire.span("oauth_login", provider=request.provider.value):
            existing = await self.user_registry.find_by_provider_identity(
                request.provider, request.provider_id
            )
            if existing:
                activity = await self.account_lifecycle.record_activity(existing.id)
                if not activity.ok:
                    return Outcome.from_failure(activity.failure)
                logfire.info("Existing user logged in", user_id=str(existing.id))
                return Outcome.success(
                    OAuthLoginResponse(user=activity.value, is_new_user=False)
                )

            created = await self.user_registry.create_from_oauth(
                request.provider, request.provider_id, request.email, request.profile
            )
            if not created.ok:
                return Outcome.from_failure(created.failure)

            await notify_quietly(
                self.notification_dispatcher,
                NotificationKind.WELCOME,
                created.value,
                {"username": created.value.username},
            )
            logfire.info("New user created", user_id=str(created.value.id))
            return Outcome.success(OAuthLoginResponse(user=created.value, is_new_user=True))
