"""Group registry domain service."""

from typing import Callable, Optional
from uuid import uuid4

import logfire
from pydantic import BaseModel, ConfigDict, Field

from bailago.domain.model.group import Group, GroupMember
from bailago.domain.model.user import UserSnapshot, UserView, snapshot_of
from bailago.domain.outcome import FailureKind, Outcome
from bailago.domain.repository import GroupRepository
from bailago.domain.service.ports import Clock
from bailago.domain.value import GroupId, GroupRole, UserId

from .base import Service
from .event_registry import EventRegistry
from .invite_registry import InviteRegistry


class CreateGroupInput(BaseModel):
    """Input for creating a group."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=2, max_length=100)
    description: Optional[str] = Field(default=None, max_length=1000)
    image_url: Optional[str] = None


class UpdateGroupInput(BaseModel):
    """Partial group update."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    description: Optional[str] = Field(default=None, max_length=1000)
    image_url: Optional[str] = None


class GroupDeletion(BaseModel):
    """What a group deletion removed besides the group."""

    group_id: GroupId
    events_deleted: int
    invites_deleted: int


class GroupRegistry(Service):
    """Domain service owning groups and their memberships.

    A group always keeps at least one admin. Authorization (who may change
    what) is checked by the callers.
    """

    def __init__(
        self,
        group_repository: GroupRepository,
        event_registry: EventRegistry,
        invite_registry: InviteRegistry,
        clock: Clock,
    ) -> None:
        """Initialize group registry.

        Args:
            group_repository: Group repository
            event_registry: Event registry, for the deletion cascade
            invite_registry: Invite registry, for the deletion cascade
            clock: Time source
        """
        self.group_repository = group_repository
        self.event_registry = event_registry
        self.invite_registry = invite_registry
        self.clock = clock

    async def create(self, data: CreateGroupInput, creator: UserView | UserSnapshot) -> Group:
        """Create a group with its creator as sole admin."""
        with logfire.span("group_registry.create", creator_id=str(creator.id)):
            now = self.clock.now()
            group = Group(
                id=GroupId(uuid4()),
                name=data.name,
                description=data.description,
                image_url=data.image_url,
                creator_id=creator.id,
                members=(
                    GroupMember(
                        user_id=creator.id,
                        user=snapshot_of(creator),
                        role=GroupRole.ADMIN,
                        joined_at=now,
                    ),
                ),
                created_at=now,
                updated_at=now,
            )
            async with self.group_repository.atomic():
                saved = await self.group_repository.save(group)
            logfire.info("Group created", group_id=str(saved.id), name=saved.name)
            return saved

    async def _change(
        self,
        group_id: GroupId,
        apply: Callable[[Group], Outcome[Group]],
    ) -> Outcome[Group]:
        async with self.group_repository.atomic():
            group = await self.group_repository.find_by_id(group_id)
            if not group:
                return Outcome.fail(FailureKind.NOT_FOUND, "Group not found")
            outcome = apply(group)
            if outcome.ok and outcome.value is not group:
                await self.group_repository.save(outcome.value)
            return outcome

    async def update(self, group_id: GroupId, data: UpdateGroupInput) -> Outcome[Group]:
        """Merge explicitly set group fields."""
        changes = data.model_dump(exclude_unset=True)
        if changes.get("name") is None:
            changes.pop("name", None)

        def apply(group: Group) -> Outcome[Group]:
            return Outcome.success(
                group.model_copy(update={**changes, "updated_at": self.clock.now()})
            )

        with logfire.span("group_registry.update", group_id=str(group_id)):
            return await self._change(group_id, apply)

    async def add_member(
        self,
        group_id: GroupId,
        user: UserView | UserSnapshot,
        role: GroupRole = GroupRole.MEMBER,
    ) -> Outcome[Group]:
        """Add a member. Adding an existing member is a no-op."""
        role = GroupRole(role)
        now = self.clock.now()

        def apply(group: Group) -> Outcome[Group]:
            if group.is_member(user.id):
                return Outcome.success(group)
            member = GroupMember(
                user_id=user.id, user=snapshot_of(user), role=role, joined_at=now
            )
            return Outcome.success(
                group.model_copy(
                    update={"members": (*group.members, member), "updated_at": now}
                )
            )

        with logfire.span(
            "group_registry.add_member", group_id=str(group_id), user_id=str(user.id)
        ):
            outcome = await self._change(group_id, apply)
            if outcome.ok:
                logfire.info("Member added", group_id=str(group_id), user_id=str(user.id))
            return outcome

    async def remove_member(self, group_id: GroupId, user_id: UserId) -> Outcome[Group]:
        """Remove a member.

        Returns:
            Updated group, NOT_FOUND for an unknown group or non-member, or
            INVARIANT_VIOLATION when the member is the last admin
        """
        now = self.clock.now()

        def apply(group: Group) -> Outcome[Group]:
            member = group.member(user_id)
            if member is None:
                return Outcome.fail(FailureKind.NOT_FOUND, "Member not found")
            if member.role == GroupRole.ADMIN and group.admin_count <= 1:
                return Outcome.fail(
                    FailureKind.INVARIANT_VIOLATION,
                    "Cannot remove the last admin of a group",
                    "last_admin",
                )
            members = tuple(m for m in group.members if m.user_id != user_id)
            return Outcome.success(
                group.model_copy(update={"members": members, "updated_at": now})
            )

        with logfire.span(
            "group_registry.remove_member", group_id=str(group_id), user_id=str(user_id)
        ):
            outcome = await self._change(group_id, apply)
            if outcome.ok:
                logfire.info("Member removed", group_id=str(group_id), user_id=str(user_id))
            else:
                logfire.warn(
                    "Member removal refused",
                    group_id=str(group_id),
                    reason=outcome.kind.value,
                )
            return outcome

    async def update_member_role(
        self, group_id: GroupId, user_id: UserId, role: GroupRole | str
    ) -> Outcome[Group]:
        """Change a member's role.

        Raises:
            ValueError: If ``role`` is not a valid group role

        Returns:
            Updated group, NOT_FOUND, or INVARIANT_VIOLATION when demoting
            the last admin
        """
        role = GroupRole(role)
        now = self.clock.now()

        def apply(group: Group) -> Outcome[Group]:
            member = group.member(user_id)
            if member is None:
                return Outcome.fail(FailureKind.NOT_FOUND, "Member not found")
            if member.role == role:
                return Outcome.success(group)
            if member.role == GroupRole.ADMIN and group.admin_count <= 1:
                return Outcome.fail(
                    FailureKind.INVARIANT_VIOLATION,
                    "Cannot demote the last admin of a group",
                    "last_admin",
                )
            members = tuple(
                m.model_copy(update={"role": role}) if m.user_id == user_id else m
                for m in group.members
            )
            return Outcome.success(
                group.model_copy(update={"members": members, "updated_at": now})
            )

        with logfire.span(
            "group_registry.update_member_role",
            group_id=str(group_id),
            user_id=str(user_id),
            role=role.value,
        ):
            outcome = await self._change(group_id, apply)
            if outcome.ok:
                logfire.info("Member role updated", group_id=str(group_id), role=role.value)
            return outcome

    async def delete(self, group_id: GroupId) -> Outcome[GroupDeletion]:
        """Delete a group with its events and invites.

        Each step is atomic on its own registry; there is no transaction
        spanning the three, so an interruption can leave orphaned events.

        Returns:
            Counts of removed events and invites, or NOT_FOUND
        """
        with logfire.span("group_registry.delete", group_id=str(group_id)):
            if not await self.group_repository.find_by_id(group_id):
                return Outcome.fail(FailureKind.NOT_FOUND, "Group not found")

            events_deleted = await self.event_registry.delete_by_group(group_id)
            invites_deleted = await self.invite_registry.delete_by_group(group_id)
            async with self.group_repository.atomic():
                await self.group_repository.delete(group_id)

            logfire.info(
                "Group deleted",
                group_id=str(group_id),
                events_deleted=events_deleted,
                invites_deleted=invites_deleted,
            )
            return Outcome.success(
                GroupDeletion(
                    group_id=group_id,
                    events_deleted=events_deleted,
                    invites_deleted=invites_deleted,
                )
            )

    async def find_by_id(self, group_id: GroupId) -> Group | None:
        return await self.group_repository.find_by_id(group_id)

    async def find_by_member(self, user_id: UserId) -> list[Group]:
        return await self.group_repository.find_by_member(user_id)

    async def group_ids_for(self, user_id: UserId) -> frozenset[GroupId]:
        """Ids of the groups a user belongs to, for building a ``Viewer``."""
        return frozenset(g.id for g in await self.group_repository.find_by_member(user_id))

    async def is_admin(self, group_id: GroupId, user_id: UserId) -> bool:
        group = await self.group_repository.find_by_id(group_id)
        return group is not None and group.is_admin(user_id)

    async def is_member(self, group_id: GroupId, user_id: UserId) -> bool:
        group = await self.group_repository.find_by_id(group_id)
        return group is not None and group.is_member(user_id)
