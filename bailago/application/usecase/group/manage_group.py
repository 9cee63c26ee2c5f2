"""Admin-side group management use cases."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from bailago.application.usecase.base import BaseUseCase
from bailago.domain.model.group import Group
from bailago.domain.outcome import FailureKind, Outcome
from bailago.domain.service import GroupDeletion, GroupRegistry, UpdateGroupInput
from bailago.domain.value import GroupId, GroupRole, UserId


async def _require_admin(
    group_registry: GroupRegistry, group_id: GroupId, user_id: UserId
) -> Outcome[Group]:
    group = await group_registry.find_by_id(group_id)
    if group is None:
        return Outcome.fail(FailureKind.NOT_FOUND, "Group not found")
    if not group.is_admin(user_id):
        logfire.warn("Admin action refused", group_id=str(group_id), user_id=str(user_id))
        return Outcome.fail(FailureKind.NOT_AUTHORIZED, "Only admins can manage the group")
    return Outcome.success(group)


class UpdateGroupRequest(BaseModel):
    group_id: str
    user_id: str  # From authenticated user, must be an admin
    changes: UpdateGroupInput


class RemoveMemberRequest(BaseModel):
    group_id: str
    user_id: str  # From authenticated user, must be an admin
    member_id: str


class ChangeMemberRoleRequest(BaseModel):
    group_id: str
    user_id: str  # From authenticated user, must be an admin
    member_id: str
    role: GroupRole


class DeleteGroupRequest(BaseModel):
    group_id: str
    user_id: str  # From authenticated user, must be the creator


class GroupResponse(BaseModel):
    group: Group


class DeleteGroupResponse(BaseModel):
    deletion: GroupDeletion


class UpdateGroupUseCase(BaseUseCase):
    """Use case for an admin editing group details."""

    def __init__(self, group_registry: GroupRegistry) -> None:
        """Initialize update group use case.

        Args:
            group_registry: Group registry
        """
        self.group_registry = group_registry

    async def execute(self, request: UpdateGroupRequest) -> Outcome[GroupResponse]:
        group_id = GroupId(UUID(request.group_id))
        checked = await _require_admin(self.group_registry, group_id, UserId(UUID(request.user_id)))
        if not checked.ok:
            return Outcome.from_failure(checked.failure)

        outcome = await self.group_registry.update(group_id, request.changes)
        if not outcome.ok:
            return Outcome.from_failure(outcome.failure)
        return Outcome.success(GroupResponse(group=outcome.value))


class RemoveMemberUseCase(BaseUseCase):
    """Use case for an admin removing a member."""

    def __init__(self, group_registry: GroupRegistry) -> None:
        """Initialize remove member use case.

        Args:
            group_registry: Group registry
        """
        self.group_registry = group_registry

    async def execute(self, request: RemoveMemberRequest) -> Outcome[GroupResponse]:
        group_id = GroupId(UUID(request.group_id))
        checked = await _require_admin(self.group_registry, group_id, UserId(UUID(request.user_id)))
        if not checked.ok:
            return Outcome.from_failure(checked.failure)

        outcome = await self.group_registry.remove_member(group_id, UserId(UUID(request.member_id)))
        if not outcome.ok:
            return Outcome.from_failure(outcome.failure)
        return Outcome.success(GroupResponse(group=outcome.value))


class ChangeMemberRoleUseCase(BaseUseCase):
    """Use case for an admin promoting or demoting a member."""

    def __init__(self, group_registry: GroupRegistry) -> None:
        """Initialize change member role use case.

        Args:
            group_registry: Group registry
        """
        self.group_registry = group_registry

    async def execute(self, request: ChangeMemberRoleRequest) -> Outcome[GroupResponse]:
        group_id = GroupId(UUID(request.group_id))
        checked = await _require_admin(self.group_registry, group_id, UserId(UUID(request.user_id)))
        if not checked.ok:
            return Outcome.from_failure(checked.failure)

        outcome = await self.group_registry.update_member_role(
            group_id, UserId(UUID(request.member_id)), request.role
        )
        if not outcome.ok:
            return Outcome.from_failure(outcome.failure)
        return Outcome.success(GroupResponse(group=outcome.value))


class DeleteGroupUseCase(BaseUseCase):
    """Use case for the creator deleting a group with its events and invites."""

    def __init__(self, group_registry: GroupRegistry) -> None:
        """Initialize delete group use case.

        Args:
            group_registry: Group registry
        """
        self.group_registry = group_registry

    async def execute(self, request: DeleteGroupRequest) -> Outcome[DeleteGroupResponse]:
        group_id = GroupId(UUID(request.group_id))
        group = await self.group_registry.find_by_id(group_id)
        if group is None:
            return Outcome.fail(FailureKind.NOT_FOUND, "Group not found")
        if group.creator_id != UserId(UUID(request.user_id)):
            logfire.warn("Group deletion refused", group_id=request.group_id, user_id=request.user_id)
            return Outcome.fail(FailureKind.NOT_AUTHORIZED, "Only the creator can delete the group")

        outcome = await self.group_registry.delete(group_id)
        if not outcome.ok:
            return Outcome.from_failure(outcome.failure)
        return Outcome.success(DeleteGroupResponse(deletion=outcome.value))
