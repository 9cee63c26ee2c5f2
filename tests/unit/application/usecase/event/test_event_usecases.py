"""Unit tests for the event use cases."""

from uuid import uuid4

import pytest
from dishka import AsyncContainer

from bailago.application.usecase.event import (
    CreateEventRequest,
    CreateEventUseCase,
    DeleteEventRequest,
    DeleteEventUseCase,
    GetEventRequest,
    GetEventUseCase,
    JoinEventRequest,
    JoinEventUseCase,
    LeaveEventRequest,
    LeaveEventUseCase,
    ListEventsRequest,
    ListEventsUseCase,
    UpdateEventRequest,
    UpdateEventUseCase,
)
from bailago.domain.outcome import FailureKind
from bailago.domain.service import (
    CreateGroupInput,
    GroupRegistry,
    NotificationDispatcher,
    NotificationKind,
    UpdateEventInput,
    UserRegistry,
)
from bailago.domain.value import DanceType, EventVisibility
from tests.conftest import event_input, register
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


def create_request(user, **overrides) -> CreateEventRequest:
    return CreateEventRequest(user_id=str(user.id), **event_input(**overrides).model_dump())


async def create_event(unit_env: AsyncContainer, user, **overrides):
    use_case = await unit_env.get(CreateEventUseCase)
    outcome = await use_case.execute(create_request(user, **overrides))
    assert outcome.ok, outcome.failure
    return outcome.value.event


class TestCreateEventUseCase:
    """Tests for CreateEventUseCase."""

    @pytest.mark.asyncio
    async def test_create_public_event(self, unit_env: AsyncContainer):
        user_registry = await unit_env.get(UserRegistry)
        use_case = await unit_env.get(CreateEventUseCase)
        creator = await register(user_registry, "maria")

        outcome = await use_case.execute(create_request(creator, dance_type=DanceType.KIZOMBA))

        assert outcome.value.event.creator_id == creator.id
        assert outcome.value.event.dance_type == DanceType.KIZOMBA

    @pytest.mark.asyncio
    async def test_group_event_needs_group_admin(self, unit_env: AsyncContainer):
        # Arrange
        user_registry = await unit_env.get(UserRegistry)
        group_registry = await unit_env.get(GroupRegistry)
        use_case = await unit_env.get(CreateEventUseCase)
        admin = await register(user_registry, "maria")
        member = await register(user_registry, "pedro")
        group = await group_registry.create(CreateGroupInput(name="Salsa Madrid"), admin)
        await group_registry.add_member(group.id, member)

        # Act
        by_member = await use_case.execute(
            create_request(member, visibility=EventVisibility.GROUP, group_id=group.id)
        )
        by_admin = await use_case.execute(
            create_request(admin, visibility=EventVisibility.GROUP, group_id=group.id)
        )

        # Assert
        assert by_member.kind == FailureKind.NOT_AUTHORIZED
        assert by_admin.ok
        assert by_admin.value.event.group_id == group.id

    @pytest.mark.asyncio
    async def test_unknown_creator_is_not_found(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(CreateEventUseCase)

        outcome = await use_case.execute(
            CreateEventRequest(user_id=str(uuid4()), **event_input().model_dump())
        )

        assert outcome.kind == FailureKind.NOT_FOUND


class TestListAndGetEvent:
    """Tests for ListEventsUseCase and GetEventUseCase."""

    @pytest.mark.asyncio
    async def test_list_uses_group_memberships(self, unit_env: AsyncContainer):
        # Arrange
        user_registry = await unit_env.get(UserRegistry)
        group_registry = await unit_env.get(GroupRegistry)
        use_case = await unit_env.get(ListEventsUseCase)
        admin = await register(user_registry, "maria")
        member = await register(user_registry, "pedro")
        outsider = await register(user_registry, "lucia")
        group = await group_registry.create(CreateGroupInput(name="Salsa Madrid"), admin)
        await group_registry.add_member(group.id, member)
        await create_event(unit_env, admin, title="Open Night")
        await create_event(
            unit_env, admin, title="Members Night", visibility=EventVisibility.GROUP, group_id=group.id
        )

        # Act
        anonymous = await use_case.execute(ListEventsRequest())
        as_member = await use_case.execute(ListEventsRequest(user_id=str(member.id)))
        as_outsider = await use_case.execute(ListEventsRequest(user_id=str(outsider.id)))

        # Assert
        assert [e.title for e in anonymous.value.events] == ["Open Night"]
        assert as_member.value.total == 2
        assert as_outsider.value.total == 1

    @pytest.mark.asyncio
    async def test_list_filters_by_city(self, unit_env: AsyncContainer):
        user_registry = await unit_env.get(UserRegistry)
        use_case = await unit_env.get(ListEventsUseCase)
        creator = await register(user_registry, "maria")
        await create_event(unit_env, creator)

        outcome = await use_case.execute(ListEventsRequest(city="barcelona"))

        assert outcome.value.events == []
        assert outcome.value.total == 0

    @pytest.mark.asyncio
    async def test_private_event_is_not_found_for_others(self, unit_env: AsyncContainer):
        user_registry = await unit_env.get(UserRegistry)
        use_case = await unit_env.get(GetEventUseCase)
        creator = await register(user_registry, "maria")
        other = await register(user_registry, "pedro")
        event = await create_event(unit_env, creator, visibility=EventVisibility.PRIVATE)

        as_other = await use_case.execute(
            GetEventRequest(event_id=str(event.id), user_id=str(other.id))
        )
        as_creator = await use_case.execute(
            GetEventRequest(event_id=str(event.id), user_id=str(creator.id))
        )

        assert as_other.kind == FailureKind.NOT_FOUND
        assert as_creator.value.event.id == event.id

    @pytest.mark.asyncio
    async def test_hidden_participants_are_stripped_for_others(self, unit_env: AsyncContainer):
        # Arrange
        user_registry = await unit_env.get(UserRegistry)
        join = await unit_env.get(JoinEventUseCase)
        use_case = await unit_env.get(GetEventUseCase)
        creator = await register(user_registry, "maria")
        dancer = await register(user_registry, "pedro")
        event = await create_event(unit_env, creator, show_participant_names=False)
        await join.execute(JoinEventRequest(event_id=str(event.id), user_id=str(dancer.id)))

        # Act
        as_dancer = await use_case.execute(
            GetEventRequest(event_id=str(event.id), user_id=str(dancer.id))
        )
        as_creator = await use_case.execute(
            GetEventRequest(event_id=str(event.id), user_id=str(creator.id))
        )

        # Assert
        assert as_dancer.ok
        assert as_dancer.value.participants_hidden is True
        assert as_dancer.value.participants == ()
        assert as_dancer.value.event.participant_count == 1
        assert len(as_dancer.value.event.participants) == 1
        assert as_creator.value.participants_hidden is False
        assert [p.user_id for p in as_creator.value.participants] == [dancer.id]

    @pytest.mark.asyncio
    async def test_hidden_roster_for_anonymous_viewer(self, unit_env: AsyncContainer):
        # Arrange
        user_registry = await unit_env.get(UserRegistry)
        use_case = await unit_env.get(GetEventUseCase)
        creator = await register(user_registry, "maria")
        event = await create_event(unit_env, creator, show_participant_names=False)

        # Act
        outcome = await use_case.execute(GetEventRequest(event_id=str(event.id)))

        # Assert
        assert outcome.ok
        assert outcome.value.participants_hidden is True
        assert outcome.value.participants == ()

    @pytest.mark.asyncio
    async def test_visible_roster_is_returned(self, unit_env: AsyncContainer):
        # Arrange
        user_registry = await unit_env.get(UserRegistry)
        join = await unit_env.get(JoinEventUseCase)
        use_case = await unit_env.get(GetEventUseCase)
        creator = await register(user_registry, "maria")
        dancer = await register(user_registry, "pedro")
        event = await create_event(unit_env, creator)
        await join.execute(JoinEventRequest(event_id=str(event.id), user_id=str(dancer.id)))

        # Act
        outcome = await use_case.execute(
            GetEventRequest(event_id=str(event.id), user_id=str(dancer.id))
        )

        # Assert
        assert outcome.value.participants_hidden is False
        assert [p.user_id for p in outcome.value.participants] == [dancer.id]


class TestJoinAndLeaveEvent:
    """Tests for JoinEventUseCase and LeaveEventUseCase."""

    @pytest.mark.asyncio
    async def test_join_notifies_creator_once(self, unit_env: AsyncContainer):
        # Arrange
        user_registry = await unit_env.get(UserRegistry)
        dispatcher = await unit_env.get(NotificationDispatcher)
        use_case = await unit_env.get(JoinEventUseCase)
        creator = await register(user_registry, "maria")
        dancer = await register(user_registry, "pedro")
        event = await create_event(unit_env, creator)
        request = JoinEventRequest(event_id=str(event.id), user_id=str(dancer.id))
        dispatcher.clear()

        # Act
        first = await use_case.execute(request)
        second = await use_case.execute(request)

        # Assert
        assert first.value.already_joined is False
        assert second.value.already_joined is True
        [sent] = dispatcher.of_kind(NotificationKind.NEW_PARTICIPANT)
        assert sent.recipient_id == creator.id
        assert sent.payload == {
            "event_id": str(event.id),
            "event_title": "Salsa Social",
            "participant_name": "Pedro",
        }

    @pytest.mark.asyncio
    async def test_creator_joining_own_event_is_not_notified(self, unit_env: AsyncContainer):
        user_registry = await unit_env.get(UserRegistry)
        dispatcher = await unit_env.get(NotificationDispatcher)
        use_case = await unit_env.get(JoinEventUseCase)
        creator = await register(user_registry, "maria")
        event = await create_event(unit_env, creator)

        outcome = await use_case.execute(
            JoinEventRequest(event_id=str(event.id), user_id=str(creator.id))
        )

        assert outcome.value.event.participant_count == 1
        assert dispatcher.of_kind(NotificationKind.NEW_PARTICIPANT) == []

    @pytest.mark.asyncio
    async def test_join_full_event(self, unit_env: AsyncContainer):
        user_registry = await unit_env.get(UserRegistry)
        use_case = await unit_env.get(JoinEventUseCase)
        creator = await register(user_registry, "maria")
        first = await register(user_registry, "pedro")
        second = await register(user_registry, "lucia")
        event = await create_event(unit_env, creator, max_participants=1)
        await use_case.execute(JoinEventRequest(event_id=str(event.id), user_id=str(first.id)))

        outcome = await use_case.execute(
            JoinEventRequest(event_id=str(event.id), user_id=str(second.id))
        )

        assert outcome.kind == FailureKind.CAPACITY_EXCEEDED

    @pytest.mark.asyncio
    async def test_join_invisible_event_is_not_found(self, unit_env: AsyncContainer):
        user_registry = await unit_env.get(UserRegistry)
        use_case = await unit_env.get(JoinEventUseCase)
        creator = await register(user_registry, "maria")
        dancer = await register(user_registry, "pedro")
        event = await create_event(unit_env, creator, visibility=EventVisibility.PRIVATE)

        outcome = await use_case.execute(
            JoinEventRequest(event_id=str(event.id), user_id=str(dancer.id))
        )

        assert outcome.kind == FailureKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_join_survives_dispatch_failure(self, unit_env: AsyncContainer):
        user_registry = await unit_env.get(UserRegistry)
        dispatcher = await unit_env.get(NotificationDispatcher)
        use_case = await unit_env.get(JoinEventUseCase)
        creator = await register(user_registry, "maria")
        dancer = await register(user_registry, "pedro")
        event = await create_event(unit_env, creator)
        dispatcher.fail = True

        outcome = await use_case.execute(
            JoinEventRequest(event_id=str(event.id), user_id=str(dancer.id))
        )

        assert outcome.ok
        assert outcome.value.event.participant_count == 1

    @pytest.mark.asyncio
    async def test_leave_event(self, unit_env: AsyncContainer):
        user_registry = await unit_env.get(UserRegistry)
        join = await unit_env.get(JoinEventUseCase)
        use_case = await unit_env.get(LeaveEventUseCase)
        creator = await register(user_registry, "maria")
        dancer = await register(user_registry, "pedro")
        event = await create_event(unit_env, creator)
        await join.execute(JoinEventRequest(event_id=str(event.id), user_id=str(dancer.id)))

        outcome = await use_case.execute(
            LeaveEventRequest(event_id=str(event.id), user_id=str(dancer.id))
        )

        assert outcome.value.event.participant_count == 0


class TestUpdateAndDeleteEvent:
    """Tests for UpdateEventUseCase and DeleteEventUseCase."""

    @pytest.mark.asyncio
    async def test_only_creator_can_update(self, unit_env: AsyncContainer):
        user_registry = await unit_env.get(UserRegistry)
        use_case = await unit_env.get(UpdateEventUseCase)
        creator = await register(user_registry, "maria")
        other = await register(user_registry, "pedro")
        event = await create_event(unit_env, creator)
        changes = UpdateEventInput(title="Salsa Marathon")

        refused = await use_case.execute(
            UpdateEventRequest(event_id=str(event.id), user_id=str(other.id), changes=changes)
        )
        updated = await use_case.execute(
            UpdateEventRequest(event_id=str(event.id), user_id=str(creator.id), changes=changes)
        )

        assert refused.kind == FailureKind.NOT_AUTHORIZED
        assert updated.value.event.title == "Salsa Marathon"

    @pytest.mark.asyncio
    async def test_moving_event_to_a_group_needs_admin(self, unit_env: AsyncContainer):
        # Arrange
        user_registry = await unit_env.get(UserRegistry)
        group_registry = await unit_env.get(GroupRegistry)
        use_case = await unit_env.get(UpdateEventUseCase)
        creator = await register(user_registry, "maria")
        other = await register(user_registry, "pedro")
        foreign_group = await group_registry.create(CreateGroupInput(name="Bachata BCN"), other)
        own_group = await group_registry.create(CreateGroupInput(name="Salsa Madrid"), creator)
        event = await create_event(unit_env, creator)

        # Act
        refused = await use_case.execute(
            UpdateEventRequest(
                event_id=str(event.id),
                user_id=str(creator.id),
                changes=UpdateEventInput(
                    visibility=EventVisibility.GROUP, group_id=foreign_group.id
                ),
            )
        )
        moved = await use_case.execute(
            UpdateEventRequest(
                event_id=str(event.id),
                user_id=str(creator.id),
                changes=UpdateEventInput(visibility=EventVisibility.GROUP, group_id=own_group.id),
            )
        )

        # Assert
        assert refused.kind == FailureKind.NOT_AUTHORIZED
        assert moved.value.event.group_id == own_group.id

    @pytest.mark.asyncio
    async def test_only_creator_can_delete(self, unit_env: AsyncContainer):
        user_registry = await unit_env.get(UserRegistry)
        use_case = await unit_env.get(DeleteEventUseCase)
        creator = await register(user_registry, "maria")
        other = await register(user_registry, "pedro")
        event = await create_event(unit_env, creator)

        refused = await use_case.execute(
            DeleteEventRequest(event_id=str(event.id), user_id=str(other.id))
        )
        deleted = await use_case.execute(
            DeleteEventRequest(event_id=str(event.id), user_id=str(creator.id))
        )
        missing = await use_case.execute(
            DeleteEventRequest(event_id=str(event.id), user_id=str(creator.id))
        )

        assert refused.kind == FailureKind.NOT_AUTHORIZED
        assert deleted.value.deleted is True
        assert missing.kind == FailureKind.NOT_FOUND
