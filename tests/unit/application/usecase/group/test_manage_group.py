"""Unit tests for group management and leaving groups."""

import pytest
from dishka import AsyncContainer

from bailago.application.usecase.event import CreateEventRequest, CreateEventUseCase
from bailago.application.usecase.group import (
    ChangeMemberRoleRequest,
    ChangeMemberRoleUseCase,
    DeleteGroupRequest,
    DeleteGroupUseCase,
    LeaveGroupRequest,
    LeaveGroupUseCase,
    RemoveMemberRequest,
    RemoveMemberUseCase,
    UpdateGroupRequest,
    UpdateGroupUseCase,
)
from bailago.domain.outcome import FailureKind
from bailago.domain.service import (
    CreateGroupInput,
    EventRegistry,
    GroupRegistry,
    UpdateGroupInput,
    UserRegistry,
)
from bailago.domain.value import EventVisibility, GroupRole
from tests.conftest import event_input, register
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def setup_group(unit_env: AsyncContainer):
    user_registry = await unit_env.get(UserRegistry)
    group_registry = await unit_env.get(GroupRegistry)
    creator = await register(user_registry, "maria")
    member = await register(user_registry, "pedro")
    group = await group_registry.create(CreateGroupInput(name="Salsa Madrid"), creator)
    await group_registry.add_member(group.id, member)
    return creator, member, group


class TestAdminOperations:
    """Tests for admin-only group operations."""

    @pytest.mark.asyncio
    async def test_update_group_requires_admin(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(UpdateGroupUseCase)
        creator, member, group = await setup_group(unit_env)
        changes = UpdateGroupInput(description="Every Friday")

        refused = await use_case.execute(
            UpdateGroupRequest(group_id=str(group.id), user_id=str(member.id), changes=changes)
        )
        updated = await use_case.execute(
            UpdateGroupRequest(group_id=str(group.id), user_id=str(creator.id), changes=changes)
        )

        assert refused.kind == FailureKind.NOT_AUTHORIZED
        assert updated.value.group.description == "Every Friday"

    @pytest.mark.asyncio
    async def test_promote_then_remove_former_admin(self, unit_env: AsyncContainer):
        # Arrange
        change_role = await unit_env.get(ChangeMemberRoleUseCase)
        remove = await unit_env.get(RemoveMemberUseCase)
        creator, member, group = await setup_group(unit_env)

        # Act
        promoted = await change_role.execute(
            ChangeMemberRoleRequest(
                group_id=str(group.id),
                user_id=str(creator.id),
                member_id=str(member.id),
                role=GroupRole.ADMIN,
            )
        )
        removed = await remove.execute(
            RemoveMemberRequest(
                group_id=str(group.id), user_id=str(member.id), member_id=str(creator.id)
            )
        )

        # Assert
        assert promoted.value.group.is_admin(member.id)
        assert [m.user_id for m in removed.value.group.members] == [member.id]

    @pytest.mark.asyncio
    async def test_admin_cannot_demote_themselves_when_last(self, unit_env: AsyncContainer):
        change_role = await unit_env.get(ChangeMemberRoleUseCase)
        creator, _, group = await setup_group(unit_env)

        outcome = await change_role.execute(
            ChangeMemberRoleRequest(
                group_id=str(group.id),
                user_id=str(creator.id),
                member_id=str(creator.id),
                role=GroupRole.MEMBER,
            )
        )

        assert outcome.kind == FailureKind.INVARIANT_VIOLATION

    @pytest.mark.asyncio
    async def test_member_cannot_remove_others(self, unit_env: AsyncContainer):
        remove = await unit_env.get(RemoveMemberUseCase)
        creator, member, group = await setup_group(unit_env)

        outcome = await remove.execute(
            RemoveMemberRequest(
                group_id=str(group.id), user_id=str(member.id), member_id=str(creator.id)
            )
        )

        assert outcome.kind == FailureKind.NOT_AUTHORIZED

    @pytest.mark.asyncio
    async def test_only_creator_deletes_group(self, unit_env: AsyncContainer):
        # Arrange
        use_case = await unit_env.get(DeleteGroupUseCase)
        create_event = await unit_env.get(CreateEventUseCase)
        event_registry = await unit_env.get(EventRegistry)
        change_role = await unit_env.get(ChangeMemberRoleUseCase)
        creator, member, group = await setup_group(unit_env)
        await change_role.execute(
            ChangeMemberRoleRequest(
                group_id=str(group.id),
                user_id=str(creator.id),
                member_id=str(member.id),
                role=GroupRole.ADMIN,
            )
        )
        await create_event.execute(
            CreateEventRequest(
                user_id=str(creator.id),
                **event_input(visibility=EventVisibility.GROUP, group_id=group.id).model_dump(),
            )
        )

        # Act
        by_admin = await use_case.execute(
            DeleteGroupRequest(group_id=str(group.id), user_id=str(member.id))
        )
        by_creator = await use_case.execute(
            DeleteGroupRequest(group_id=str(group.id), user_id=str(creator.id))
        )

        # Assert
        assert by_admin.kind == FailureKind.NOT_AUTHORIZED
        assert by_creator.value.deletion.events_deleted == 1
        assert await event_registry.find_by_group(group.id) == []


class TestLeaveGroupUseCase:
    """Tests for LeaveGroupUseCase."""

    @pytest.mark.asyncio
    async def test_member_leaves(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(LeaveGroupUseCase)
        creator, member, group = await setup_group(unit_env)

        outcome = await use_case.execute(
            LeaveGroupRequest(group_id=str(group.id), user_id=str(member.id))
        )

        assert [m.user_id for m in outcome.value.group.members] == [creator.id]

    @pytest.mark.asyncio
    async def test_sole_creator_must_delete(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(LeaveGroupUseCase)
        user_registry = await unit_env.get(UserRegistry)
        group_registry = await unit_env.get(GroupRegistry)
        creator = await register(user_registry, "maria")
        group = await group_registry.create(CreateGroupInput(name="Solo"), creator)

        outcome = await use_case.execute(
            LeaveGroupRequest(group_id=str(group.id), user_id=str(creator.id))
        )

        assert outcome.kind == FailureKind.INVALID_STATE
        assert outcome.failure.code == "must_delete"

    @pytest.mark.asyncio
    async def test_creator_must_name_new_admin(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(LeaveGroupUseCase)
        creator, _, group = await setup_group(unit_env)

        outcome = await use_case.execute(
            LeaveGroupRequest(group_id=str(group.id), user_id=str(creator.id))
        )

        assert outcome.kind == FailureKind.INVALID_STATE
        assert outcome.failure.code == "new_admin_required"

    @pytest.mark.asyncio
    async def test_creator_hands_over_and_leaves(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(LeaveGroupUseCase)
        creator, member, group = await setup_group(unit_env)

        outcome = await use_case.execute(
            LeaveGroupRequest(
                group_id=str(group.id), user_id=str(creator.id), new_admin_id=str(member.id)
            )
        )

        assert not outcome.value.group.is_member(creator.id)
        assert outcome.value.group.is_admin(member.id)

    @pytest.mark.asyncio
    async def test_non_member_cannot_leave(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(LeaveGroupUseCase)
        user_registry = await unit_env.get(UserRegistry)
        _, _, group = await setup_group(unit_env)
        stranger = await register(user_registry, "lucia")

        outcome = await use_case.execute(
            LeaveGroupRequest(group_id=str(group.id), user_id=str(stranger.id))
        )

        assert outcome.kind == FailureKind.NOT_FOUND
