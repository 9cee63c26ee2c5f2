"""Invite member use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from bailago.application.usecase.base import BaseUseCase, notify_quietly
from bailago.domain.model.invite import GroupInvite
from bailago.domain.outcome import FailureKind, Outcome
from bailago.domain.service import (
    GroupRegistry,
    InviteRegistry,
    NotificationDispatcher,
    NotificationKind,
    UserRegistry,
)
from bailago.domain.value import GroupId, UserId


class InviteMemberRequest(BaseModel):
    """Invite member request."""

    group_id: str
    user_id: str  # From authenticated user, must be a group admin
    handle: str = Field(min_length=1)  # Username, nickname or display name


class InviteMemberResponse(BaseModel):
    """Invite member response."""

    invite: GroupInvite


class InviteMemberUseCase(BaseUseCase):
    """Use case for an admin inviting a user into a group."""

    def __init__(
        self,
        group_registry: GroupRegistry,
        invite_registry: InviteRegistry,
        user_registry: UserRegistry,
        notification_dispatcher: NotificationDispatcher,
    ) -> None:
        """Initialize invite member use case.

        Args:
            group_registry: Group registry
            invite_registry: Invite registry
            user_registry: User registry, for resolving the handle
            notification_dispatcher: Tells the invitee
        """
        self.group_registry = group_registry
        self.invite_registry = invite_registry
        self.user_registry = user_registry
        self.notification_dispatcher = notification_dispatcher

    async def execute(self, request: InviteMemberRequest) -> Outcome[InviteMemberResponse]:
        """Execute invite flow.

        Steps:
        1. Check the caller is an admin of the group
        2. Resolve the handle to a live user
        3. Refuse users already in the group
        4. Create (or reuse) the pending invite and notify the invitee

        Returns:
            The pending invite, NOT_FOUND, NOT_AUTHORIZED, or CONFLICT for
            an existing member
        """
        group_id = GroupId(UUID(request.group_id))
        admin_id = UserId(UUID(request.user_id))

        with logfire.span("invite_member", group_id=request.group_id):
            group = await self.group_registry.find_by_id(group_id)
            if group is None:
                return Outcome.fail(FailureKind.NOT_FOUND, "Group not found")
            if not group.is_admin(admin_id):
                logfire.warn("Invite refused, caller is not an admin", user_id=request.user_id)
                return Outcome.fail(FailureKind.NOT_AUTHORIZED, "Only admins can invite")

            invitee = await self.user_registry.search_by_handle(request.handle)
            if invitee is None:
                return Outcome.fail(FailureKind.NOT_FOUND, "User not found")
            if group.is_member(invitee.id):
                return Outcome.fail(
                    FailureKind.CONFLICT, "User is already a member", "already_member"
                )

            invite = await self.invite_registry.create(group_id, invitee.id, admin_id)

            inviter = group.member(admin_id)
            await notify_quietly(
                self.notification_dispatcher,
                NotificationKind.GROUP_INVITE,
                invitee,
                {
                    "invite_id": str(invite.id),
                    "group_name": group.name,
                    "invited_by": inviter.user.display_name,
                },
            )
            return Outcome.success(InviteMemberResponse(invite=invite))
