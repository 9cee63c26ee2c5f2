"""Delete event use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from bailago.application.usecase.base import BaseUseCase
from bailago.domain.outcome import FailureKind, Outcome
from bailago.domain.service import EventRegistry
from bailago.domain.value import EventId, UserId


class DeleteEventRequest(BaseModel):
    """Delete event request."""

    event_id: str
    user_id: str  # From authenticated user


class DeleteEventResponse(BaseModel):
    """Delete event response."""

    deleted: bool


class DeleteEventUseCase(BaseUseCase):
    """Use case for deleting an event. Only its creator may delete it."""

    def __init__(self, event_registry: EventRegistry) -> None:
        """Initialize delete event use case.

        Args:
            event_registry: Event registry
        """
        self.event_registry = event_registry

    async def execute(self, request: DeleteEventRequest) -> Outcome[DeleteEventResponse]:
        event_id = EventId(UUID(request.event_id))
        event = await self.event_registry.find_by_id(event_id)
        if event is None:
            return Outcome.fail(FailureKind.NOT_FOUND, "Event not found")
        if event.creator_id != UserId(UUID(request.user_id)):
            logfire.warn("Event deletion refused", event_id=request.event_id, user_id=request.user_id)
            return Outcome.fail(FailureKind.NOT_AUTHORIZED, "Only the creator can delete this event")

        deleted = await self.event_registry.delete(event_id)
        return Outcome.success(DeleteEventResponse(deleted=deleted))
