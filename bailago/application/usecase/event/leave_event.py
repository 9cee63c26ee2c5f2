"""Leave event use case."""

from uuid import UUID

from pydantic import BaseModel

from bailago.application.usecase.base import BaseUseCase
from bailago.domain.model.event import DanceEvent
from bailago.domain.outcome import Outcome
from bailago.domain.service import EventRegistry
from bailago.domain.value import EventId, UserId


class LeaveEventRequest(BaseModel):
    """Leave event request."""

    event_id: str
    user_id: str  # From authenticated user


class LeaveEventResponse(BaseModel):
    """Leave event response."""

    event: DanceEvent


class LeaveEventUseCase(BaseUseCase):
    """Use case for leaving an event."""

    def __init__(self, event_registry: EventRegistry) -> None:
        """Initialize leave event use case.

        Args:
            event_registry: Event registry
        """
        self.event_registry = event_registry

    async def execute(self, request: LeaveEventRequest) -> Outcome[LeaveEventResponse]:
        outcome = await self.event_registry.remove_participant(
            EventId(UUID(request.event_id)), UserId(UUID(request.user_id))
        )
        if not outcome.ok:
            return Outcome.from_failure(outcome.failure)
        return Outcome.success(LeaveEventResponse(event=outcome.value))
