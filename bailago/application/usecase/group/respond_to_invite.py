"""Accept and reject invite use cases."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from bailago.application.usecase.base import BaseUseCase
from bailago.domain.model.group import Group
from bailago.domain.model.invite import GroupInvite
from bailago.domain.outcome import FailureKind, Outcome
from bailago.domain.service import GroupRegistry, InviteRegistry, UserRegistry
from bailago.domain.value import InviteId, UserId


class InviteDecisionRequest(BaseModel):
    """Accept or reject request."""

    invite_id: str
    user_id: str  # From authenticated user, must be the invitee


class AcceptInviteResponse(BaseModel):
    """Accept invite response."""

    invite: GroupInvite
    group: Group


class RejectInviteResponse(BaseModel):
    """Reject invite response."""

    invite: GroupInvite


async def _load_own_invite(
    invite_registry: InviteRegistry, request: InviteDecisionRequest
) -> Outcome[GroupInvite]:
    invite = await invite_registry.find_by_id(InviteId(UUID(request.invite_id)))
    if invite is None:
        return Outcome.fail(FailureKind.NOT_FOUND, "Invite not found")
    if invite.invited_user_id != UserId(UUID(request.user_id)):
        logfire.warn(
            "Invite decision refused, caller is not the invitee",
            invite_id=request.invite_id,
            user_id=request.user_id,
        )
        return Outcome.fail(FailureKind.NOT_AUTHORIZED, "This invite is not yours")
    return Outcome.success(invite)


class AcceptInviteUseCase(BaseUseCase):
    """Use case for accepting an invite, which adds the membership."""

    def __init__(
        self,
        invite_registry: InviteRegistry,
        group_registry: GroupRegistry,
        user_registry: UserRegistry,
    ) -> None:
        """Initialize accept invite use case.

        Args:
            invite_registry: Invite registry
            group_registry: Group registry, for adding the member
            user_registry: User registry
        """
        self.invite_registry = invite_registry
        self.group_registry = group_registry
        self.user_registry = user_registry

    async def execute(self, request: InviteDecisionRequest) -> Outcome[AcceptInviteResponse]:
        """Execute accept flow.

        Returns:
            Invite and joined group, NOT_FOUND, NOT_AUTHORIZED,
            INVALID_STATE for a resolved invite, or EXPIRED
        """
        loaded = await _load_own_invite(self.invite_registry, request)
        if not loaded.ok:
            return Outcome.from_failure(loaded.failure)

        user = await self.user_registry.get_by_id(loaded.value.invited_user_id)
        if not user.ok:
            return Outcome.from_failure(user.failure)
        if await self.group_registry.find_by_id(loaded.value.group_id) is None:
            return Outcome.fail(FailureKind.NOT_FOUND, "Group not found")

        accepted = await self.invite_registry.accept(loaded.value.id)
        if not accepted.ok:
            return Outcome.from_failure(accepted.failure)

        group = await self.group_registry.add_member(loaded.value.group_id, user.value)
        if not group.ok:
            return Outcome.from_failure(group.failure)
        return Outcome.success(AcceptInviteResponse(invite=accepted.value, group=group.value))


class RejectInviteUseCase(BaseUseCase):
    """Use case for declining an invite."""

    def __init__(self, invite_registry: InviteRegistry) -> None:
        """Initialize reject invite use case.

        Args:
            invite_registry: Invite registry
        """
        self.invite_registry = invite_registry

    async def execute(self, request: InviteDecisionRequest) -> Outcome[RejectInviteResponse]:
        loaded = await _load_own_invite(self.invite_registry, request)
        if not loaded.ok:
            return Outcome.from_failure(loaded.failure)

        rejected = await self.invite_registry.reject(loaded.value.id)
        if not rejected.ok:
            return Outcome.from_failure(rejected.failure)
        return Outcome.success(RejectInviteResponse(invite=rejected.value))
