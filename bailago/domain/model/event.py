"""Dance event aggregate root.

An event owns its location, its participant roster and its DJ requests.
Participants and DJ requests embed a ``UserSnapshot`` taken when the user
joined or applied.
"""

import datetime as dt
from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from bailago.domain.model.common import DomainModel, utcnow
from bailago.domain.model.user import UserSnapshot
from bailago.domain.value import (
    DanceType,
    DjMode,
    DjRequestStatus,
    EventId,
    EventVisibility,
    GroupId,
    LocationId,
    UserId,
    Viewer,
)

TIME_OF_DAY_PATTERN = r"^([01]\d|2[0-3]):([0-5]\d)$"


class Location(DomainModel):
    """Venue of an event. Owned by exactly one event."""

    id: LocationId
    name: str = Field(min_length=1)
    address: str = ""
    city: str = Field(min_length=1)
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)


class Participant(DomainModel):
    """A user's participation in an event."""

    user_id: UserId
    user: UserSnapshot
    joined_at: datetime = Field(default_factory=utcnow)


class DjRequest(DomainModel):
    """A user's candidacy to DJ an event."""

    user_id: UserId
    user: UserSnapshot
    message: Optional[str] = None
    requested_at: datetime = Field(default_factory=utcnow)
    status: DjRequestStatus = DjRequestStatus.PENDING


class DanceEvent(DomainModel):
    """Dance event aggregate root.

    Business rules:
    - participant_count always equals len(participants)
    - a user participates at most once
    - participant_count never exceeds max_participants
    - group visibility requires a group_id
    - at most one DJ request is approved at any time
    """

    id: EventId
    title: str = Field(min_length=1, max_length=100)
    description: str = Field(default="", max_length=1000)
    dance_type: DanceType
    location: Location
    date: dt.date
    start_time: str = Field(pattern=TIME_OF_DAY_PATTERN)
    end_time: Optional[str] = Field(default=None, pattern=TIME_OF_DAY_PATTERN)
    creator_id: UserId
    creator: UserSnapshot

    visibility: EventVisibility = EventVisibility.PUBLIC
    group_id: Optional[GroupId] = None

    dj_mode: DjMode = DjMode.OPEN
    dj_name: Optional[str] = None
    dj_contact: Optional[str] = None
    dj_user_id: Optional[UserId] = None
    dj_requests: tuple[DjRequest, ...] = ()

    participants: tuple[Participant, ...] = ()
    participant_count: int = Field(default=0, ge=0)
    max_participants: Optional[int] = Field(default=None, ge=1)
    show_participant_names: bool = True
    image_url: Optional[str] = None

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @model_validator(mode="after")
    def validate_invariants(self) -> "DanceEvent":
        """Check roster and visibility invariants on construction."""
        if self.participant_count != len(self.participants):
            raise ValueError("participant_count must equal the number of participants")
        if len({p.user_id for p in self.participants}) != len(self.participants):
            raise ValueError("A user can participate only once")
        if self.max_participants is not None and self.participant_count > self.max_participants:
            raise ValueError("participant_count exceeds max_participants")
        if self.visibility == EventVisibility.GROUP and self.group_id is None:
            raise ValueError("Group events require a group_id")
        approved = [r for r in self.dj_requests if r.status == DjRequestStatus.APPROVED]
        if len(approved) > 1:
            raise ValueError("At most one DJ request can be approved")
        return self

    @property
    def is_full(self) -> bool:
        return (
            self.max_participants is not None
            and self.participant_count >= self.max_participants
        )

    def has_participant(self, user_id: UserId) -> bool:
        return any(p.user_id == user_id for p in self.participants)

    def dj_request_of(self, user_id: UserId) -> DjRequest | None:
        for request in self.dj_requests:
            if request.user_id == user_id:
                return request
        return None


def is_visible_to(event: DanceEvent, viewer: Viewer | None) -> bool:
    """Decide whether a viewer may list or see an event.

    Public events are visible to everyone, anonymous viewers included.
    The creator always sees their own events. Group events are visible to
    members of that group. Private events are visible only to the creator.
    """
    if event.visibility == EventVisibility.PUBLIC:
        return True
    if viewer is None:
        return False
    if event.creator_id == viewer.user_id:
        return True
    return (
        event.visibility == EventVisibility.GROUP
        and event.group_id is not None
        and event.group_id in viewer.group_ids
    )
