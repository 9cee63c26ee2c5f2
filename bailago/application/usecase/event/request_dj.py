"""Request to DJ use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from bailago.application.usecase.base import BaseUseCase, notify_quietly
from bailago.domain.model.event import DanceEvent
from bailago.domain.outcome import FailureKind, Outcome
from bailago.domain.service import (
    EventRegistry,
    NotificationDispatcher,
    NotificationKind,
    UserRegistry,
)
from bailago.domain.value import EventId, UserId


class RequestDjRequest(BaseModel):
    """Apply-to-DJ request."""

    event_id: str
    user_id: str  # From authenticated user
    message: Optional[str] = Field(default=None, max_length=500)


class RequestDjResponse(BaseModel):
    """Apply-to-DJ response."""

    event: DanceEvent


class RequestDjUseCase(BaseUseCase):
    """Use case for applying to DJ an event."""

    def __init__(
        self,
        event_registry: EventRegistry,
        user_registry: UserRegistry,
        notification_dispatcher: NotificationDispatcher,
    ) -> None:
        """Initialize request DJ use case.

        Args:
            event_registry: Event registry
            user_registry: User registry
            notification_dispatcher: Tells the creator about new candidates
        """
        self.event_registry = event_registry
        self.user_registry = user_registry
        self.notification_dispatcher = notification_dispatcher

    async def execute(self, request: RequestDjRequest) -> Outcome[RequestDjResponse]:
        """Execute the DJ application.

        The creator is notified only for a first application.

        Returns:
            The event, NOT_FOUND, or INVARIANT_VIOLATION when the event
            plans no DJ
        """
        user = await self.user_registry.get_by_id(UserId(UUID(request.user_id)))
        if not user.ok:
            return Outcome.from_failure(user.failure)

        event_id = EventId(UUID(request.event_id))
        event = await self.event_registry.find_by_id(event_id)
        if event is None:
            return Outcome.fail(FailureKind.NOT_FOUND, "Event not found")
        first_request = event.dj_request_of(user.value.id) is None

        outcome = await self.event_registry.add_dj_request(event_id, user.value, request.message)
        if not outcome.ok:
            return Outcome.from_failure(outcome.failure)

        if first_request and event.creator_id != user.value.id:
            creator = await self.user_registry.find_by_id(event.creator_id)
            if creator:
                await notify_quietly(
                    self.notification_dispatcher,
                    NotificationKind.DJ_REQUEST,
                    creator,
                    {
                        "event_id": str(event_id),
                        "event_title": event.title,
                        "dj_name": user.value.display_name,
                    },
                )
        return Outcome.success(RequestDjResponse(event=outcome.value))
