"""Approve or reject a DJ request."""

from uuid import UUID

import logfire
from pydantic import BaseModel

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


class DecideDjRequestRequest(BaseModel):
    """DJ request decision."""

    event_id: str
    user_id: str  # From authenticated user, must be the creator
    dj_user_id: str
    approve: bool


class DecideDjRequestResponse(BaseModel):
    """DJ request decision response."""

    event: DanceEvent


class DecideDjRequestUseCase(BaseUseCase):
    """Use case for the creator deciding on a DJ candidacy."""

    def __init__(
        self,
        event_registry: EventRegistry,
        user_registry: UserRegistry,
        notification_dispatcher: NotificationDispatcher,
    ) -> None:
        """Initialize decide DJ request use case.

        Args:
            event_registry: Event registry
            user_registry: User registry
            notification_dispatcher: Tells the approved DJ
        """
        self.event_registry = event_registry
        self.user_registry = user_registry
        self.notification_dispatcher = notification_dispatcher

    async def execute(self, request: DecideDjRequestRequest) -> Outcome[DecideDjRequestResponse]:
        event_id = EventId(UUID(request.event_id))
        dj_user_id = UserId(UUID(request.dj_user_id))

        event = await self.event_registry.find_by_id(event_id)
        if event is None:
            return Outcome.fail(FailureKind.NOT_FOUND, "Event not found")
        if event.creator_id != UserId(UUID(request.user_id)):
            logfire.warn(
                "DJ decision refused", event_id=request.event_id, user_id=request.user_id
            )
            return Outcome.fail(
                FailureKind.NOT_AUTHORIZED, "Only the creator can decide on DJ requests"
            )

        if request.approve:
            outcome = await self.event_registry.approve_dj_request(event_id, dj_user_id)
        else:
            outcome = await self.event_registry.reject_dj_request(event_id, dj_user_id)
        if not outcome.ok:
            return Outcome.from_failure(outcome.failure)

        if request.approve:
            dj = await self.user_registry.find_by_id(dj_user_id)
            if dj:
                await notify_quietly(
                    self.notification_dispatcher,
                    NotificationKind.DJ_APPROVED,
                    dj,
                    {"event_id": str(event_id), "event_title": event.title},
                )
        return Outcome.success(DecideDjRequestResponse(event=outcome.value))
