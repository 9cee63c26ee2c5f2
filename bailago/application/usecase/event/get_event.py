"""Get event use case."""

from uuid import UUID

from pydantic import BaseModel

from bailago.application.usecase.base import BaseUseCase
from bailago.domain.model.event import DanceEvent, Participant, is_visible_to
from bailago.domain.outcome import FailureKind, Outcome
from bailago.domain.service import EventRegistry, GroupRegistry
from bailago.domain.value import EventId, UserId, Viewer


class GetEventRequest(BaseModel):
    """Get event request."""

    event_id: str
    user_id: str | None = None  # None for anonymous callers


class GetEventResponse(BaseModel):
    """Get event response.

    ``participants`` holds the roster the caller may see. When the creator
    hid participant names it is empty for everyone else and
    ``participants_hidden`` is set; ``event.participant_count`` stays exact.
    """

    event: DanceEvent
    participants: tuple[Participant, ...] = ()
    participants_hidden: bool = False


class GetEventUseCase(BaseUseCase):
    """Use case for showing one event."""

    def __init__(self, event_registry: EventRegistry, group_registry: GroupRegistry) -> None:
        """Initialize get event use case.

        Args:
            event_registry: Event registry
            group_registry: Group registry, for the caller's memberships
        """
        self.event_registry = event_registry
        self.group_registry = group_registry

    async def execute(self, request: GetEventRequest) -> Outcome[GetEventResponse]:
        """Load an event the caller is allowed to see.

        Returns:
            The event, or NOT_FOUND when it does not exist or is not
            visible to the caller
        """
        event = await self.event_registry.find_by_id(EventId(UUID(request.event_id)))

        viewer = None
        if request.user_id:
            user_id = UserId(UUID(request.user_id))
            viewer = Viewer(
                user_id=user_id, group_ids=await self.group_registry.group_ids_for(user_id)
            )

        if event is None or not is_visible_to(event, viewer):
            return Outcome.fail(FailureKind.NOT_FOUND, "Event not found")

        viewer_id = viewer.user_id if viewer else None
        return Outcome.success(
            GetEventResponse(
                event=event,
                participants=self.event_registry.visible_participants(event, viewer_id),
                participants_hidden=(
                    not event.show_participant_names and event.creator_id != viewer_id
                ),
            )
        )
