"""Authenticate use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from bailago.application.usecase.base import BaseUseCase
from bailago.domain.model.user import UserView
from bailago.domain.outcome import FailureKind, Outcome
from bailago.domain.service import AccountLifecycleManager, UserRegistry
from bailago.domain.value import AccountStatus, UserId


class AuthenticateRequest(BaseModel):
    """Authenticate request."""

    user_id: str  # Subject of an already verified session token


class AuthenticateResponse(BaseModel):
    """Authenticate response."""

    user: UserView


class AuthenticateUseCase(BaseUseCase):
    """Use case run on every authenticated request.

    Resolves the caller and records the request as activity, which keeps
    the account out of the inactivity sweep.
    """

    def __init__(
        self,
        user_registry: UserRegistry,
        account_lifecycle: AccountLifecycleManager,
    ) -> None:
        """Initialize authenticate use case.

        Args:
            user_registry: User registry
            account_lifecycle: Records activity
        """
        self.user_registry = user_registry
        self.account_lifecycle = account_lifecycle

    async def execute(self, request: AuthenticateRequest) -> Outcome[AuthenticateResponse]:
        """Execute authentication flow.

        Returns:
            The caller, NOT_FOUND for an unknown user, or NOT_AUTHORIZED for
            a deleted account
        """
        user_id = UserId(UUID(request.user_id))
        user = await self.user_registry.find_by_id(user_id)
        if user is None:
            return Outcome.fail(FailureKind.NOT_FOUND, "User not found")
        if user.status == AccountStatus.DELETED:
            logfire.warn("Deleted account tried to authenticate", user_id=str(user_id))
            return Outcome.fail(FailureKind.NOT_AUTHORIZED, "Account deleted")

        activity = await self.account_lifecycle.record_activity(user_id)
        if not activity.ok:
            return Outcome.from_failure(activity.failure)
        return Outcome.success(AuthenticateResponse(user=activity.value))
