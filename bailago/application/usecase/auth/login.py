"""Login use case."""

import logfire
from pydantic import BaseModel, Field

from bailago.application.usecase.base import BaseUseCase
from bailago.domain.model.user import UserView
from bailago.domain.outcome import FailureKind, Outcome
from bailago.domain.service import AccountLifecycleManager, UserRegistry


class LoginRequest(BaseModel):
    """Email + password login request."""

    email: str
    password: str = Field(min_length=1)


class LoginResponse(BaseModel):
    """Login response.

    Session token issuance is left to the transport layer.
    """

    user: UserView


class LoginUseCase(BaseUseCase):
    """Use case for local credential login."""

    def __init__(
        self,
        user_registry: UserRegistry,
        account_lifecycle: AccountLifecycleManager,
    ) -> None:
        """Initialize login use case.

        Args:
            user_registry: User registry
            account_lifecycle: Records the login as activity
        """
        self.user_registry = user_registry
        self.account_lifecycle = account_lifecycle

    async def execute(self, request: LoginRequest) -> Outcome[LoginResponse]:
        """Execute login flow.

        Steps:
        1. Look up the live account by email
        2. Check the password
        3. Record activity, which also reactivates a dormant account

        Unknown emails and wrong passwords give the same NOT_AUTHORIZED
        failure. Deleted accounts are never found by email.

        Args:
            request: Login request

        Returns:
            The logged-in user, or NOT_AUTHORIZED
        """
        with logfire.span("login_user"):
            user = await self.user_registry.find_by_email(request.email)
            if user is None or not await self.user_registry.validate_credential(
                user.id, request.password
            ):
                logfire.warn("Login rejected")
                return Outcome.fail(FailureKind.NOT_AUTHORIZED, "Invalid credentials")

            activity = await self.account_lifecycle.record_activity(user.id)
            if not activity.ok:
                return Outcome.from_failure(activity.failure)

            logfire.info("User logged in", user_id=str(user.id))
            return Outcome.success(LoginResponse(user=activity.value))
