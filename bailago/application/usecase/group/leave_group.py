"""Leave group use case."""

from typing import Optional
from uuid import UUID

import logfire
from pydantic import BaseModel

from bailago.application.usecase.base import BaseUseCase
from bailago.domain.model.group import Group
from bailago.domain.outcome import FailureKind, Outcome
from bailago.domain.service import GroupRegistry
from bailago.domain.value import GroupId, GroupRole, UserId


class LeaveGroupRequest(BaseModel):
    """Leave group request."""

    group_id: str
    user_id: str  # From authenticated user
    new_admin_id: Optional[str] = None  # Required when the creator leaves a shared group


class LeaveGroupResponse(BaseModel):
    """Leave group response."""

    group: Group


class LeaveGroupUseCase(BaseUseCase):
    """Use case for a member leaving a group."""

    def __init__(self, group_registry: GroupRegistry) -> None:
        """Initialize leave group use case.

        Args:
            group_registry: Group registry
        """
        self.group_registry = group_registry

    async def execute(self, request: LeaveGroupRequest) -> Outcome[LeaveGroupResponse]:
        """Execute leave flow.

        The creator cannot leave a group they are alone in; they must delete
        it instead. When other members remain, the creator names one of
        them, who is promoted to admin before the creator leaves.

        Returns:
            The group after departure, NOT_FOUND, INVALID_STATE with code
            ``must_delete`` or ``new_admin_required``, or
            INVARIANT_VIOLATION when the last admin tries to leave
        """
        group_id = GroupId(UUID(request.group_id))
        user_id = UserId(UUID(request.user_id))

        with logfire.span("leave_group", group_id=request.group_id, user_id=request.user_id):
            group = await self.group_registry.find_by_id(group_id)
            if group is None:
                return Outcome.fail(FailureKind.NOT_FOUND, "Group not found")
            if not group.is_member(user_id):
                return Outcome.fail(FailureKind.NOT_FOUND, "Member not found")

            if group.creator_id == user_id:
                if len(group.members) == 1:
                    return Outcome.fail(
                        FailureKind.INVALID_STATE,
                        "You are the only member, delete the group instead",
                        "must_delete",
                    )
                if not request.new_admin_id:
                    return Outcome.fail(
                        FailureKind.INVALID_STATE,
                        "Name a new admin before leaving",
                        "new_admin_required",
                    )
                new_admin_id = UserId(UUID(request.new_admin_id))
                if new_admin_id == user_id or not group.is_member(new_admin_id):
                    return Outcome.fail(
                        FailureKind.NOT_FOUND, "New admin must be another member"
                    )

                promoted = await self.group_registry.update_member_role(
                    group_id, new_admin_id, GroupRole.ADMIN
                )
                if not promoted.ok:
                    return Outcome.from_failure(promoted.failure)

            outcome = await self.group_registry.remove_member(group_id, user_id)
            if not outcome.ok:
                return Outcome.from_failure(outcome.failure)
            logfire.info("Group left", group_id=request.group_id, user_id=request.user_id)
            return Outcome.success(LeaveGroupResponse(group=outcome.value))
