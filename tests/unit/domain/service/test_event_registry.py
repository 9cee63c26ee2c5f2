"""Unit tests for EventRegistry."""

import asyncio
from datetime import date
from uuid import uuid4

import pydantic
import pytest
from dishka import AsyncContainer

from bailago.domain.outcome import FailureKind
from bailago.domain.service import (
    EventFilters,
    EventRegistry,
    LocationInput,
    UpdateEventInput,
    UserRegistry,
)
from bailago.domain.value import DanceType, EventVisibility, GroupId, Viewer
from tests.conftest import event_input, register
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


class TestCreate:
    """Tests for event creation."""

    @pytest.mark.asyncio
    async def test_create_event(self, unit_env: AsyncContainer):
        # Arrange
        event_registry = await unit_env.get(EventRegistry)
        user_registry = await unit_env.get(UserRegistry)
        creator = await register(user_registry, "maria")

        # Act
        event = await event_registry.create(event_input(max_participants=20), creator)

        # Assert
        assert event.creator_id == creator.id
        assert event.creator.display_name == "Maria"
        assert event.location.city == "Madrid"
        assert event.location.id is not None
        assert event.participant_count == 0
        assert event.participants == ()
        assert event.max_participants == 20
        assert await event_registry.find_by_id(event.id) == event

    def test_group_event_requires_group_id(self):
        with pytest.raises(pydantic.ValidationError):
            event_input(visibility=EventVisibility.GROUP)

    def test_non_group_event_drops_group_id(self):
        data = event_input(visibility=EventVisibility.PRIVATE, group_id=GroupId(uuid4()))

        assert data.group_id is None

    def test_bad_time_of_day_is_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            event_input(start_time="25:00")


class TestFindAll:
    """Tests for listing with visibility and filters."""

    @pytest.mark.asyncio
    async def test_visibility_per_viewer(self, unit_env: AsyncContainer):
        # Arrange
        event_registry = await unit_env.get(EventRegistry)
        user_registry = await unit_env.get(UserRegistry)
        creator = await register(user_registry, "maria")
        member = await register(user_registry, "pedro")
        outsider = await register(user_registry, "lucia")
        group_id = GroupId(uuid4())

        public = await event_registry.create(event_input(title="Public"), creator)
        private = await event_registry.create(
            event_input(title="Private", visibility=EventVisibility.PRIVATE), creator
        )
        grouped = await event_registry.create(
            event_input(title="Grouped", visibility=EventVisibility.GROUP, group_id=group_id),
            creator,
        )

        async def titles(viewer):
            return {e.title for e in await event_registry.find_all(EventFilters(viewer=viewer))}

        # Act & Assert
        assert await titles(None) == {public.title}
        assert await titles(Viewer(user_id=outsider.id)) == {public.title}
        assert await titles(Viewer(user_id=member.id, group_ids=frozenset({group_id}))) == {
            public.title,
            grouped.title,
        }
        assert await titles(Viewer(user_id=creator.id)) == {
            public.title,
            private.title,
            grouped.title,
        }

    @pytest.mark.asyncio
    async def test_filters_by_dance_type_and_city(self, unit_env: AsyncContainer):
        # Arrange
        event_registry = await unit_env.get(EventRegistry)
        user_registry = await unit_env.get(UserRegistry)
        creator = await register(user_registry, "maria")
        await event_registry.create(event_input(title="Salsa Madrid"), creator)
        await event_registry.create(
            event_input(title="Bachata Madrid", dance_type=DanceType.BACHATA), creator
        )
        await event_registry.create(
            event_input(
                title="Salsa Sevilla",
                location=LocationInput(name="Patio", city="Sevilla"),
            ),
            creator,
        )

        # Act
        salsa = await event_registry.find_all(EventFilters(dance_type=DanceType.SALSA))
        madrid = await event_registry.find_all(EventFilters(city="madr"))
        both = await event_registry.find_all(
            EventFilters(dance_type=DanceType.SALSA, city="MADRID")
        )

        # Assert
        assert {e.title for e in salsa} == {"Salsa Madrid", "Salsa Sevilla"}
        assert {e.title for e in madrid} == {"Salsa Madrid", "Bachata Madrid"}
        assert [e.title for e in both] == ["Salsa Madrid"]

    @pytest.mark.asyncio
    async def test_sorted_by_date_ties_keep_creation_order(self, unit_env: AsyncContainer):
        # Arrange
        event_registry = await unit_env.get(EventRegistry)
        user_registry = await unit_env.get(UserRegistry)
        creator = await register(user_registry, "maria")
        await event_registry.create(event_input(title="Late", date=date(2025, 6, 1)), creator)
        await event_registry.create(event_input(title="Tie A", date=date(2025, 5, 1)), creator)
        await event_registry.create(event_input(title="Early", date=date(2025, 4, 1)), creator)
        await event_registry.create(event_input(title="Tie B", date=date(2025, 5, 1)), creator)

        # Act
        events = await event_registry.find_all()

        # Assert
        assert [e.title for e in events] == ["Early", "Tie A", "Tie B", "Late"]


class TestUpdate:
    """Tests for partial event updates."""

    @pytest.mark.asyncio
    async def test_update_merges_set_fields(self, unit_env: AsyncContainer):
        event_registry = await unit_env.get(EventRegistry)
        user_registry = await unit_env.get(UserRegistry)
        creator = await register(user_registry, "maria")
        event = await event_registry.create(event_input(), creator)

        outcome = await event_registry.update(
            event.id, UpdateEventInput(title="Salsa Social XL", end_time=None)
        )

        assert outcome.ok
        assert outcome.value.title == "Salsa Social XL"
        assert outcome.value.end_time is None
        assert outcome.value.start_time == event.start_time

    @pytest.mark.asyncio
    async def test_new_location_keeps_its_id(self, unit_env: AsyncContainer):
        event_registry = await unit_env.get(EventRegistry)
        user_registry = await unit_env.get(UserRegistry)
        creator = await register(user_registry, "maria")
        event = await event_registry.create(event_input(), creator)

        outcome = await event_registry.update(
            event.id,
            UpdateEventInput(location=LocationInput(name="Club Sol", city="Valencia")),
        )

        assert outcome.value.location.id == event.location.id
        assert outcome.value.location.city == "Valencia"

    @pytest.mark.asyncio
    async def test_capacity_below_participant_count_is_refused(self, unit_env: AsyncContainer):
        # Arrange
        event_registry = await unit_env.get(EventRegistry)
        user_registry = await unit_env.get(UserRegistry)
        creator = await register(user_registry, "maria")
        event = await event_registry.create(event_input(), creator)
        for name in ("pedro", "lucia", "carmen"):
            await event_registry.add_participant(event.id, await register(user_registry, name))

        # Act
        outcome = await event_registry.update(event.id, UpdateEventInput(max_participants=2))

        # Assert
        assert outcome.kind == FailureKind.CAPACITY_EXCEEDED
        assert (await event_registry.find_by_id(event.id)).max_participants is None

    @pytest.mark.asyncio
    async def test_switching_to_group_without_group_id_is_refused(
        self, unit_env: AsyncContainer
    ):
        event_registry = await unit_env.get(EventRegistry)
        user_registry = await unit_env.get(UserRegistry)
        creator = await register(user_registry, "maria")
        event = await event_registry.create(event_input(), creator)

        outcome = await event_registry.update(
            event.id, UpdateEventInput(visibility=EventVisibility.GROUP)
        )

        assert outcome.kind == FailureKind.INVARIANT_VIOLATION
        assert (await event_registry.find_by_id(event.id)).visibility == EventVisibility.PUBLIC

    @pytest.mark.asyncio
    async def test_leaving_group_visibility_clears_group_id(self, unit_env: AsyncContainer):
        event_registry = await unit_env.get(EventRegistry)
        user_registry = await unit_env.get(UserRegistry)
        creator = await register(user_registry, "maria")
        event = await event_registry.create(
            event_input(visibility=EventVisibility.GROUP, group_id=GroupId(uuid4())), creator
        )

        outcome = await event_registry.update(
            event.id, UpdateEventInput(visibility=EventVisibility.PUBLIC)
        )

        assert outcome.value.visibility == EventVisibility.PUBLIC
        assert outcome.value.group_id is None

    @pytest.mark.asyncio
    async def test_update_unknown_event_is_not_found(self, unit_env: AsyncContainer):
        event_registry = await unit_env.get(EventRegistry)

        outcome = await event_registry.update(uuid4(), UpdateEventInput(title="Nope nope"))

        assert outcome.kind == FailureKind.NOT_FOUND


class TestDelete:
    """Tests for event deletion."""

    @pytest.mark.asyncio
    async def test_delete_event(self, unit_env: AsyncContainer):
        event_registry = await unit_env.get(EventRegistry)
        user_registry = await unit_env.get(UserRegistry)
        creator = await register(user_registry, "maria")
        event = await event_registry.create(event_input(), creator)

        assert await event_registry.delete(event.id) is True
        assert await event_registry.delete(event.id) is False
        assert await event_registry.find_by_id(event.id) is None

    @pytest.mark.asyncio
    async def test_delete_by_group(self, unit_env: AsyncContainer):
        # Arrange
        event_registry = await unit_env.get(EventRegistry)
        user_registry = await unit_env.get(UserRegistry)
        creator = await register(user_registry, "maria")
        group_id = GroupId(uuid4())
        for _ in range(2):
            await event_registry.create(
                event_input(visibility=EventVisibility.GROUP, group_id=group_id), creator
            )
        kept = await event_registry.create(event_input(), creator)

        # Act
        count = await event_registry.delete_by_group(group_id)

        # Assert
        assert count == 2
        assert await event_registry.find_by_group(group_id) == []
        assert await event_registry.find_by_creator(creator.id) == [kept]


class TestParticipants:
    """Tests for joining and leaving events."""

    @pytest.mark.asyncio
    async def test_join_is_idempotent(self, unit_env: AsyncContainer):
        # Arrange
        event_registry = await unit_env.get(EventRegistry)
        user_registry = await unit_env.get(UserRegistry)
        creator = await register(user_registry, "maria")
        dancer = await register(user_registry, "pedro")
        event = await event_registry.create(event_input(), creator)

        # Act
        await event_registry.add_participant(event.id, dancer)
        outcome = await event_registry.add_participant(event.id, dancer)

        # Assert
        assert outcome.ok
        assert outcome.value.participant_count == 1
        assert outcome.value.participants[0].user.username == "pedro"
        assert await event_registry.find_by_participant(dancer.id) == [outcome.value]

    @pytest.mark.asyncio
    async def test_full_event_refuses_new_participants(self, unit_env: AsyncContainer):
        # Arrange
        event_registry = await unit_env.get(EventRegistry)
        user_registry = await unit_env.get(UserRegistry)
        creator = await register(user_registry, "maria")
        event = await event_registry.create(event_input(max_participants=1), creator)
        first = await register(user_registry, "pedro")
        second = await register(user_registry, "lucia")
        await event_registry.add_participant(event.id, first)

        # Act
        refused = await event_registry.add_participant(event.id, second)
        rejoin = await event_registry.add_participant(event.id, first)

        # Assert
        assert refused.kind == FailureKind.CAPACITY_EXCEEDED
        assert refused.failure.message == "Event is full"
        assert rejoin.ok

    @pytest.mark.asyncio
    async def test_concurrent_joins_never_exceed_capacity(self, unit_env: AsyncContainer):
        # Arrange
        event_registry = await unit_env.get(EventRegistry)
        user_registry = await unit_env.get(UserRegistry)
        creator = await register(user_registry, "maria")
        event = await event_registry.create(event_input(max_participants=3), creator)
        dancers = [await register(user_registry, f"dancer{n}") for n in range(10)]

        # Act
        outcomes = await asyncio.gather(
            *(event_registry.add_participant(event.id, d) for d in dancers)
        )

        # Assert
        assert sum(1 for o in outcomes if o.ok) == 3
        stored = await event_registry.find_by_id(event.id)
        assert stored.participant_count == 3
        assert len({p.user_id for p in stored.participants}) == 3

    @pytest.mark.asyncio
    async def test_leave_is_idempotent(self, unit_env: AsyncContainer):
        event_registry = await unit_env.get(EventRegistry)
        user_registry = await unit_env.get(UserRegistry)
        creator = await register(user_registry, "maria")
        dancer = await register(user_registry, "pedro")
        event = await event_registry.create(event_input(), creator)
        await event_registry.add_participant(event.id, dancer)

        first = await event_registry.remove_participant(event.id, dancer.id)
        second = await event_registry.remove_participant(event.id, dancer.id)

        assert first.value.participant_count == 0
        assert second.ok
        assert second.value.participant_count == 0

    @pytest.mark.asyncio
    async def test_join_unknown_event_is_not_found(self, unit_env: AsyncContainer):
        event_registry = await unit_env.get(EventRegistry)
        user_registry = await unit_env.get(UserRegistry)
        dancer = await register(user_registry, "pedro")

        outcome = await event_registry.add_participant(uuid4(), dancer)

        assert outcome.kind == FailureKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_hidden_participants_are_visible_to_creator_only(
        self, unit_env: AsyncContainer
    ):
        # Arrange
        event_registry = await unit_env.get(EventRegistry)
        user_registry = await unit_env.get(UserRegistry)
        creator = await register(user_registry, "maria")
        dancer = await register(user_registry, "pedro")
        event = await event_registry.create(event_input(show_participant_names=False), creator)
        event = (await event_registry.add_participant(event.id, dancer)).value

        # Act & Assert
        assert len(event_registry.visible_participants(event, creator.id)) == 1
        assert event_registry.visible_participants(event, dancer.id) == ()
        assert event_registry.visible_participants(event, None) == ()
        assert event.participant_count == 1
