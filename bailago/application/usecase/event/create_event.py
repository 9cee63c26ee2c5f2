"""Create event use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from bailago.application.usecase.base import BaseUseCase
from bailago.domain.model.event import DanceEvent
from bailago.domain.outcome import FailureKind, Outcome
from bailago.domain.service import CreateEventInput, EventRegistry, GroupRegistry, UserRegistry
from bailago.domain.value import EventVisibility, UserId


class CreateEventRequest(CreateEventInput):
    """Create event request."""

    user_id: str  # From authenticated user


class CreateEventResponse(BaseModel):
    """Create event response."""

    event: DanceEvent


class CreateEventUseCase(BaseUseCase):
    """Use case for creating an event."""

    def __init__(
        self,
        event_registry: EventRegistry,
        group_registry: GroupRegistry,
        user_registry: UserRegistry,
    ) -> None:
        """Initialize create event use case.

        Args:
            event_registry: Event registry
            group_registry: Group registry, for the group-admin check
            user_registry: User registry
        """
        self.event_registry = event_registry
        self.group_registry = group_registry
        self.user_registry = user_registry

    async def execute(self, request: CreateEventRequest) -> Outcome[CreateEventResponse]:
        """Execute create event flow.

        Steps:
        1. Load the creator
        2. For a group event, check the creator is an admin of the group
        3. Create the event

        Returns:
            Created event, NOT_FOUND, or NOT_AUTHORIZED for a group event
            created by a non-admin
        """
        creator = await self.user_registry.get_by_id(UserId(UUID(request.user_id)))
        if not creator.ok:
            return Outcome.from_failure(creator.failure)

        if request.visibility == EventVisibility.GROUP and not await self.group_registry.is_admin(
            request.group_id, creator.value.id
        ):
            logfire.warn(
                "Group event refused, creator is not an admin",
                user_id=request.user_id,
                group_id=str(request.group_id),
            )
            return Outcome.fail(
                FailureKind.NOT_AUTHORIZED, "Only group admins can create group events"
            )

        event = await self.event_registry.create(request, creator.value)
        return Outcome.success(CreateEventResponse(event=event))
