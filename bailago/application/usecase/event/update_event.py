"""Update event use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from bailago.application.usecase.base import BaseUseCase
from bailago.domain.model.event import DanceEvent
from bailago.domain.outcome import FailureKind, Outcome
from bailago.domain.service import EventRegistry, GroupRegistry, UpdateEventInput
from bailago.domain.value import EventId, EventVisibility, UserId


class UpdateEventRequest(BaseModel):
    """Update event request."""

    event_id: str
    user_id: str  # From authenticated user
    changes: UpdateEventInput


class UpdateEventResponse(BaseModel):
    """Update event response."""

    event: DanceEvent


class UpdateEventUseCase(BaseUseCase):
    """Use case for editing an event. Only its creator may edit it."""

    def __init__(self, event_registry: EventRegistry, group_registry: GroupRegistry) -> None:
        """Initialize update event use case.

        Args:
            event_registry: Event registry
            group_registry: Group registry, for the group-admin check
        """
        self.event_registry = event_registry
        self.group_registry = group_registry

    async def execute(self, request: UpdateEventRequest) -> Outcome[UpdateEventResponse]:
        """Execute update flow.

        Returns:
            Updated event, NOT_FOUND, NOT_AUTHORIZED, or the registry's
            validation failure
        """
        event_id = EventId(UUID(request.event_id))
        user_id = UserId(UUID(request.user_id))

        event = await self.event_registry.find_by_id(event_id)
        if event is None:
            return Outcome.fail(FailureKind.NOT_FOUND, "Event not found")
        if event.creator_id != user_id:
            logfire.warn("Event update refused", event_id=request.event_id, user_id=request.user_id)
            return Outcome.fail(FailureKind.NOT_AUTHORIZED, "Only the creator can edit this event")

        changes = request.changes
        visibility = changes.visibility or event.visibility
        if visibility == EventVisibility.GROUP:
            group_id = changes.group_id or event.group_id
            if group_id is None or not await self.group_registry.is_admin(group_id, user_id):
                return Outcome.fail(
                    FailureKind.NOT_AUTHORIZED, "Only group admins can create group events"
                )

        outcome = await self.event_registry.update(event_id, changes)
        if not outcome.ok:
            return Outcome.from_failure(outcome.failure)
        return Outcome.success(UpdateEventResponse(event=outcome.value))
