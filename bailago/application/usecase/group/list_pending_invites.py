"""List pending invites use case."""

from uuid import UUID

from pydantic import BaseModel

from bailago.application.usecase.base import BaseUseCase
from bailago.domain.model.invite import GroupInvite
from bailago.domain.outcome import Outcome
from bailago.domain.service import GroupRegistry, InviteRegistry
from bailago.domain.value import UserId


class PendingInvite(BaseModel):
    """An invite together with the name of its group."""

    invite: GroupInvite
    group_name: str


class ListPendingInvitesRequest(BaseModel):
    user_id: str  # From authenticated user


class ListPendingInvitesResponse(BaseModel):
    invites: list[PendingInvite]


class ListPendingInvitesUseCase(BaseUseCase):
    """Use case for listing the invites a user can still accept."""

    def __init__(self, invite_registry: InviteRegistry, group_registry: GroupRegistry) -> None:
        """Initialize list pending invites use case.

        Args:
            invite_registry: Invite registry
            group_registry: Group registry, for group names
        """
        self.invite_registry = invite_registry
        self.group_registry = group_registry

    async def execute(
        self, request: ListPendingInvitesRequest
    ) -> Outcome[ListPendingInvitesResponse]:
        invites = await self.invite_registry.find_pending_for_user(UserId(UUID(request.user_id)))

        pending = []
        for invite in invites:
            group = await self.group_registry.find_by_id(invite.group_id)
            # Skip invites whose group is mid-deletion
            if group is not None:
                pending.append(PendingInvite(invite=invite, group_name=group.name))
        return Outcome.success(ListPendingInvitesResponse(invites=pending))
