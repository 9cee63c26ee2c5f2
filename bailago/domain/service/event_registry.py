"""Event registry domain service."""

import datetime as dt
from typing import Any, Callable, Optional
from uuid import uuid4

import logfire
import pydantic
from pydantic import BaseModel, ConfigDict, Field, model_validator

from bailago.domain.model.event import (
    TIME_OF_DAY_PATTERN,
    DanceEvent,
    Location,
    Participant,
    is_visible_to,
)
from bailago.domain.model.user import UserSnapshot, UserView, snapshot_of
from bailago.domain.outcome import FailureKind, Outcome
from bailago.domain.repository import EventRepository
from bailago.domain.service.ports import Clock
from bailago.domain.value import (
    DanceType,
    DjMode,
    EventId,
    EventVisibility,
    GroupId,
    LocationId,
    UserId,
    Viewer,
)

from .base import Service
from .dj_workflow import DjWorkflow


class LocationInput(BaseModel):
    """Venue as entered by the event creator."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=200)
    address: str = ""
    city: str = Field(min_length=1, max_length=100)
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)


class CreateEventInput(BaseModel):
    """Input for creating an event."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=3, max_length=100)
    description: str = Field(default="", max_length=1000)
    dance_type: DanceType
    location: LocationInput
    date: dt.date
    start_time: str = Field(pattern=TIME_OF_DAY_PATTERN)
    end_time: Optional[str] = Field(default=None, pattern=TIME_OF_DAY_PATTERN)
    visibility: EventVisibility = EventVisibility.PUBLIC
    group_id: Optional[GroupId] = None
    dj_mode: DjMode = DjMode.OPEN
    dj_name: Optional[str] = Field(default=None, max_length=100)
    dj_contact: Optional[str] = Field(default=None, max_length=200)
    max_participants: Optional[int] = Field(default=None, ge=1, le=10000)
    show_participant_names: bool = True
    image_url: Optional[str] = None

    @model_validator(mode="after")
    def validate_group(self) -> "CreateEventInput":
        """Group events need a group; other events never carry one."""
        if self.visibility == EventVisibility.GROUP:
            if self.group_id is None:
                raise ValueError("Group events require a group_id")
        elif self.group_id is not None:
            self.group_id = None
        return self


class UpdateEventInput(BaseModel):
    """Partial event update. Only explicitly set fields are merged."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: Optional[str] = Field(default=None, min_length=3, max_length=100)
    description: Optional[str] = Field(default=None, max_length=1000)
    dance_type: Optional[DanceType] = None
    location: Optional[LocationInput] = None
    date: Optional[dt.date] = None
    start_time: Optional[str] = Field(default=None, pattern=TIME_OF_DAY_PATTERN)
    end_time: Optional[str] = Field(default=None, pattern=TIME_OF_DAY_PATTERN)
    visibility: Optional[EventVisibility] = None
    group_id: Optional[GroupId] = None
    dj_mode: Optional[DjMode] = None
    dj_name: Optional[str] = Field(default=None, max_length=100)
    dj_contact: Optional[str] = Field(default=None, max_length=200)
    max_participants: Optional[int] = Field(default=None, ge=1, le=10000)
    show_participant_names: Optional[bool] = None
    image_url: Optional[str] = None


# Fields an update may explicitly clear by passing None
_NULLABLE_FIELDS = frozenset(
    {"end_time", "group_id", "dj_name", "dj_contact", "max_participants", "image_url"}
)


class EventFilters(BaseModel):
    """Listing filters. ``viewer`` None means an anonymous caller."""

    dance_type: Optional[DanceType] = None
    city: Optional[str] = None
    viewer: Optional[Viewer] = None


class EventRegistry(Service):
    """Domain service owning dance events.

    DJ requests are handled by an embedded ``DjWorkflow`` sharing the same
    repository and lock.
    """

    def __init__(self, event_repository: EventRepository, clock: Clock) -> None:
        """Initialize event registry.

        Args:
            event_repository: Event repository
            clock: Time source
        """
        self.event_repository = event_repository
        self.clock = clock
        self.dj_workflow = DjWorkflow(event_repository, clock)

    async def find_all(self, filters: EventFilters | None = None) -> list[DanceEvent]:
        """List the events a viewer may see, ascending by date.

        Args:
            filters: Dance type, city substring (case-insensitive) and viewer

        Returns:
            Matching events; events on the same date keep creation order
        """
        filters = filters or EventFilters()
        city = filters.city.lower() if filters.city else None
        with logfire.span(
            "event_registry.find_all",
            dance_type=filters.dance_type.value if filters.dance_type else None,
            city=filters.city,
            anonymous=filters.viewer is None,
        ):
            events = [
                e
                for e in await self.event_repository.find_all()
                if is_visible_to(e, filters.viewer)
                and (filters.dance_type is None or e.dance_type == filters.dance_type)
                and (city is None or city in e.location.city.lower())
            ]
            # sorted() is stable, so ties keep insertion order
            events = sorted(events, key=lambda e: e.date)
            logfire.info("Events listed", count=len(events))
            return events

    async def find_by_id(self, event_id: EventId) -> DanceEvent | None:
        return await self.event_repository.find_by_id(event_id)

    async def find_by_creator(self, creator_id: UserId) -> list[DanceEvent]:
        return await self.event_repository.find_by_creator(creator_id)

    async def find_by_participant(self, user_id: UserId) -> list[DanceEvent]:
        return await self.event_repository.find_by_participant(user_id)

    async def find_by_group(self, group_id: GroupId) -> list[DanceEvent]:
        return await self.event_repository.find_by_group(group_id)

    async def create(
        self, data: CreateEventInput, creator: UserView | UserSnapshot
    ) -> DanceEvent:
        """Create an event.

        Group events assume the caller already checked that the creator is
        an admin of the group.

        Args:
            data: Event input
            creator: Creating user

        Returns:
            Created event
        """
        with logfire.span(
            "event_registry.create",
            creator_id=str(creator.id),
            visibility=data.visibility.value,
        ):
            now = self.clock.now()
            event = DanceEvent(
                id=EventId(uuid4()),
                title=data.title,
                description=data.description,
                dance_type=data.dance_type,
                location=Location(id=LocationId(uuid4()), **data.location.model_dump()),
                date=data.date,
                start_time=data.start_time,
                end_time=data.end_time,
                creator_id=creator.id,
                creator=snapshot_of(creator),
                visibility=data.visibility,
                group_id=data.group_id,
                dj_mode=data.dj_mode,
                dj_name=data.dj_name,
                dj_contact=data.dj_contact,
                max_participants=data.max_participants,
                show_participant_names=data.show_participant_names,
                image_url=data.image_url,
                created_at=now,
                updated_at=now,
            )
            async with self.event_repository.atomic():
                saved = await self.event_repository.save(event)
            logfire.info("Event created", event_id=str(saved.id), title=saved.title)
            return saved

    async def update(self, event_id: EventId, data: UpdateEventInput) -> Outcome[DanceEvent]:
        """Merge explicitly set fields into an event.

        A new location keeps the id of the one it replaces.

        Returns:
            Updated event, NOT_FOUND, CAPACITY_EXCEEDED if the new capacity
            is below the current participant count, or INVARIANT_VIOLATION
            if the merge breaks an event rule
        """
        changes: dict[str, Any] = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key in _NULLABLE_FIELDS
        }
        with logfire.span(
            "event_registry.update", event_id=str(event_id), fields=sorted(changes)
        ):
            async with self.event_repository.atomic():
                event = await self.event_repository.find_by_id(event_id)
                if not event:
                    return Outcome.fail(FailureKind.NOT_FOUND, "Event not found")

                if changes.get("location") is not None:
                    changes["location"] = {**changes["location"], "id": event.location.id}
                capacity = changes.get("max_participants")
                if capacity is not None and capacity < event.participant_count:
                    logfire.warn(
                        "Capacity below participant count",
                        event_id=str(event_id),
                        requested=capacity,
                        participants=event.participant_count,
                    )
                    return Outcome.fail(
                        FailureKind.CAPACITY_EXCEEDED,
                        "Capacity is below the current number of participants",
                    )
                if changes.get("visibility", event.visibility) != EventVisibility.GROUP:
                    changes["group_id"] = None

                try:
                    updated = DanceEvent.model_validate(
                        {**event.model_dump(), **changes, "updated_at": self.clock.now()}
                    )
                except pydantic.ValidationError as e:
                    logfire.warn("Event update rejected", event_id=str(event_id), error=str(e))
                    return Outcome.fail(FailureKind.INVARIANT_VIOLATION, "Invalid event update")

                await self.event_repository.save(updated)

            logfire.info("Event updated", event_id=str(event_id))
            return Outcome.success(updated)

    async def delete(self, event_id: EventId) -> bool:
        """Delete an event outright.

        Returns:
            True if the event existed
        """
        with logfire.span("event_registry.delete", event_id=str(event_id)):
            async with self.event_repository.atomic():
                deleted = await self.event_repository.delete(event_id)
            if deleted:
                logfire.info("Event deleted", event_id=str(event_id))
            return deleted

    async def delete_by_group(self, group_id: GroupId) -> int:
        """Delete every event of a group. Used by the group deletion cascade."""
        with logfire.span("event_registry.delete_by_group", group_id=str(group_id)):
            async with self.event_repository.atomic():
                count = await self.event_repository.delete_by_group(group_id)
            logfire.info("Group events deleted", group_id=str(group_id), count=count)
            return count

    async def _change_roster(
        self,
        event_id: EventId,
        apply: Callable[[DanceEvent], Outcome[DanceEvent]],
    ) -> Outcome[DanceEvent]:
        async with self.event_repository.atomic():
            event = await self.event_repository.find_by_id(event_id)
            if not event:
                return Outcome.fail(FailureKind.NOT_FOUND, "Event not found")
            outcome = apply(event)
            if outcome.ok and outcome.value is not event:
                await self.event_repository.save(outcome.value)
            return outcome

    async def add_participant(
        self, event_id: EventId, user: UserView | UserSnapshot
    ) -> Outcome[DanceEvent]:
        """Add a user to an event's participants.

        Joining twice is a no-op.

        Returns:
            The event, NOT_FOUND, or CAPACITY_EXCEEDED when the event is full
        """
        now = self.clock.now()

        def apply(event: DanceEvent) -> Outcome[DanceEvent]:
            if event.has_participant(user.id):
                return Outcome.success(event)
            if event.is_full:
                return Outcome.fail(FailureKind.CAPACITY_EXCEEDED, "Event is full")
            participants = (
                *event.participants,
                Participant(user_id=user.id, user=snapshot_of(user), joined_at=now),
            )
            return Outcome.success(
                event.model_copy(
                    update={
                        "participants": participants,
                        "participant_count": len(participants),
                        "updated_at": now,
                    }
                )
            )

        with logfire.span(
            "event_registry.add_participant", event_id=str(event_id), user_id=str(user.id)
        ):
            outcome = await self._change_roster(event_id, apply)
            if outcome.ok:
                logfire.info(
                    "Participant added",
                    event_id=str(event_id),
                    user_id=str(user.id),
                    count=outcome.value.participant_count,
                )
            else:
                logfire.warn(
                    "Participant refused", event_id=str(event_id), reason=outcome.kind.value
                )
            return outcome

    async def remove_participant(self, event_id: EventId, user_id: UserId) -> Outcome[DanceEvent]:
        """Remove a user from an event. Removing an absent user is a no-op."""
        now = self.clock.now()

        def apply(event: DanceEvent) -> Outcome[DanceEvent]:
            if not event.has_participant(user_id):
                return Outcome.success(event)
            participants = tuple(p for p in event.participants if p.user_id != user_id)
            return Outcome.success(
                event.model_copy(
                    update={
                        "participants": participants,
                        "participant_count": len(participants),
                        "updated_at": now,
                    }
                )
            )

        with logfire.span(
            "event_registry.remove_participant", event_id=str(event_id), user_id=str(user_id)
        ):
            return await self._change_roster(event_id, apply)

    def visible_participants(
        self, event: DanceEvent, viewer_id: UserId | None
    ) -> tuple[Participant, ...]:
        """Participants a viewer may see.

        When the creator hid participant names, only the creator sees them.
        """
        if not event.show_participant_names and event.creator_id != viewer_id:
            return ()
        return event.participants

    async def add_dj_request(
        self,
        event_id: EventId,
        user: UserView | UserSnapshot,
        message: str | None = None,
    ) -> Outcome[DanceEvent]:
        return await self.dj_workflow.add_dj_request(event_id, user, message)

    async def approve_dj_request(self, event_id: EventId, user_id: UserId) -> Outcome[DanceEvent]:
        return await self.dj_workflow.approve_dj_request(event_id, user_id)

    async def reject_dj_request(self, event_id: EventId, user_id: UserId) -> Outcome[DanceEvent]:
        return await self.dj_workflow.reject_dj_request(event_id, user_id)
