"""List events use case."""

from uuid import UUID

from pydantic import BaseModel

from bailago.application.usecase.base import BaseUseCase
from bailago.domain.model.event import DanceEvent
from bailago.domain.outcome import Outcome
from bailago.domain.service import EventFilters, EventRegistry, GroupRegistry
from bailago.domain.value import DanceType, UserId, Viewer


class ListEventsRequest(BaseModel):
    """List events request."""

    user_id: str | None = None  # None for anonymous callers
    dance_type: DanceType | None = None
    city: str | None = None


class ListEventsResponse(BaseModel):
    """List events response."""

    events: list[DanceEvent]
    total: int


class ListEventsUseCase(BaseUseCase):
    """Use case for browsing the events a caller may see."""

    def __init__(self, event_registry: EventRegistry, group_registry: GroupRegistry) -> None:
        """Initialize list events use case.

        Args:
            event_registry: Event registry
            group_registry: Group registry, for the caller's memberships
        """
        self.event_registry = event_registry
        self.group_registry = group_registry

    async def execute(self, request: ListEventsRequest) -> Outcome[ListEventsResponse]:
        viewer = None
        if request.user_id:
            user_id = UserId(UUID(request.user_id))
            viewer = Viewer(
                user_id=user_id,
                group_ids=await self.group_registry.group_ids_for(user_id),
            )

        events = await self.event_registry.find_all(
            EventFilters(dance_type=request.dance_type, city=request.city, viewer=viewer)
        )
        return Outcome.success(ListEventsResponse(events=events, total=len(events)))
