"""Join event use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from bailago.application.usecase.base import BaseUseCase, notify_quietly
from bailago.domain.model.event import DanceEvent, is_visible_to
from bailago.domain.outcome import FailureKind, Outcome
from bailago.domain.service import (
    EventRegistry,
    GroupRegistry,
    NotificationDispatcher,
    NotificationKind,
    UserRegistry,
)
from bailago.domain.value import EventId, UserId, Viewer


class JoinEventRequest(BaseModel):
    """Join event request."""

    event_id: str
    user_id: str  # From authenticated user


class JoinEventResponse(BaseModel):
    """Join event response."""

    event: DanceEvent
    already_joined: bool = False


class JoinEventUseCase(BaseUseCase):
    """Use case for joining an event."""

    def __init__(
        self,
        event_registry: EventRegistry,
        group_registry: GroupRegistry,
        user_registry: UserRegistry,
        notification_dispatcher: NotificationDispatcher,
    ) -> None:
        """Initialize join event use case.

        Args:
            event_registry: Event registry
            group_registry: Group registry, for visibility
            user_registry: User registry
            notification_dispatcher: Tells the creator about new participants
        """
        self.event_registry = event_registry
        self.group_registry = group_registry
        self.user_registry = user_registry
        self.notification_dispatcher = notification_dispatcher

    async def execute(self, request: JoinEventRequest) -> Outcome[JoinEventResponse]:
        """Execute join flow.

        Steps:
        1. Load the user and the event; hidden events count as missing
        2. Add the participant (no-op if already there)
        3. Notify the creator of a new participant

        Returns:
            The event, NOT_FOUND, or CAPACITY_EXCEEDED
        """
        user = await self.user_registry.get_by_id(UserId(UUID(request.user_id)))
        if not user.ok:
            return Outcome.from_failure(user.failure)

        event_id = EventId(UUID(request.event_id))
        event = await self.event_registry.find_by_id(event_id)
        viewer = Viewer(
            user_id=user.value.id,
            group_ids=await self.group_registry.group_ids_for(user.value.id),
        )
        if event is None or not is_visible_to(event, viewer):
            return Outcome.fail(FailureKind.NOT_FOUND, "Event not found")
        already_joined = event.has_participant(user.value.id)

        outcome = await self.event_registry.add_participant(event_id, user.value)
        if not outcome.ok:
            return Outcome.from_failure(outcome.failure)

        if not already_joined and event.creator_id != user.value.id:
            creator = await self.user_registry.find_by_id(event.creator_id)
            if creator:
                await notify_quietly(
                    self.notification_dispatcher,
                    NotificationKind.NEW_PARTICIPANT,
                    creator,
                    {
                        "event_id": str(event_id),
                        "event_title": event.title,
                        "participant_name": user.value.display_name,
                    },
                )
        logfire.info("Event joined", event_id=request.event_id, user_id=request.user_id)
        return Outcome.success(
            JoinEventResponse(event=outcome.value, already_joined=already_joined)
        )
