"""Account inactivity use cases."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from bailago.application.usecase.base import BaseUseCase
from bailago.domain.model.user import UserView
from bailago.domain.outcome import Outcome
from bailago.domain.service import AccountLifecycleManager, InactivityStatus
from bailago.domain.value import UserId


class AccountRequest(BaseModel):
    user_id: str  # From authenticated user


class GetInactivityStatusResponse(BaseModel):
    inactivity: InactivityStatus


class ReactivateAccountResponse(BaseModel):
    user: UserView


class GetInactivityStatusUseCase(BaseUseCase):
    """Use case for showing a user where their account stands."""

    def __init__(self, account_lifecycle: AccountLifecycleManager) -> None:
        """Initialize get inactivity status use case.

        Args:
            account_lifecycle: Account lifecycle manager
        """
        self.account_lifecycle = account_lifecycle

    async def execute(self, request: AccountRequest) -> Outcome[GetInactivityStatusResponse]:
        outcome = await self.account_lifecycle.get_inactivity_status(UserId(UUID(request.user_id)))
        if not outcome.ok:
            return Outcome.from_failure(outcome.failure)
        return Outcome.success(GetInactivityStatusResponse(inactivity=outcome.value))


class ReactivateAccountUseCase(BaseUseCase):
    """Use case for cancelling a pending deletion."""

    def __init__(self, account_lifecycle: AccountLifecycleManager) -> None:
        """Initialize reactivate account use case.

        Args:
            account_lifecycle: Account lifecycle manager
        """
        self.account_lifecycle = account_lifecycle

    async def execute(self, request: AccountRequest) -> Outcome[ReactivateAccountResponse]:
        """Bring a dormant account back to active.

        Returns:
            Reactivated user, NOT_FOUND, or INVALID_STATE once the account
            has been deleted
        """
        with logfire.span("reactivate_account", user_id=request.user_id):
            outcome = await self.account_lifecycle.reactivate_account(UserId(UUID(request.user_id)))
            if not outcome.ok:
                return Outcome.from_failure(outcome.failure)
            return Outcome.success(ReactivateAccountResponse(user=outcome.value))
