"""DJ candidacy workflow for events."""

from typing import Callable

import logfire

from bailago.domain.model.event import DanceEvent, DjRequest
from bailago.domain.model.user import UserSnapshot, UserView, snapshot_of
from bailago.domain.outcome import FailureKind, Outcome
from bailago.domain.repository import EventRepository
from bailago.domain.service.ports import Clock
from bailago.domain.value import DjMode, DjRequestStatus, EventId, UserId

from .base import Service


class DjWorkflow(Service):
    """Manages DJ requests on events.

    Only one request per event can be approved at a time. Requests are never
    removed, so approved and rejected ones stay visible.
    """

    def __init__(self, event_repository: EventRepository, clock: Clock) -> None:
        """Initialize DJ workflow.

        Args:
            event_repository: Event repository
            clock: Time source
        """
        self.event_repository = event_repository
        self.clock = clock

    async def _change(
        self,
        event_id: EventId,
        apply: Callable[[DanceEvent], Outcome[DanceEvent]],
    ) -> Outcome[DanceEvent]:
        """Read-modify-write one event under the event lock."""
        async with self.event_repository.atomic():
            event = await self.event_repository.find_by_id(event_id)
            if not event:
                return Outcome.fail(FailureKind.NOT_FOUND, "Event not found")
            outcome = apply(event)
            if outcome.ok and outcome.value is not event:
                await self.event_repository.save(outcome.value)
            return outcome

    async def add_dj_request(
        self,
        event_id: EventId,
        user: UserView | UserSnapshot,
        message: str | None = None,
    ) -> Outcome[DanceEvent]:
        """Apply to DJ an event.

        Re-applying is a no-op, whatever the status of the earlier request:
        a rejected request is not reset to pending.

        Returns:
            The event, NOT_FOUND, or INVARIANT_VIOLATION when the event
            plans no DJ
        """
        now = self.clock.now()

        def apply(event: DanceEvent) -> Outcome[DanceEvent]:
            if event.dj_mode == DjMode.NONE:
                return Outcome.fail(
                    FailureKind.INVARIANT_VIOLATION, "This event has no DJ", "dj_mode_none"
                )
            if event.dj_request_of(user.id) is not None:
                return Outcome.success(event)
            request = DjRequest(
                user_id=user.id,
                user=snapshot_of(user),
                message=message,
                requested_at=now,
            )
            return Outcome.success(
                event.model_copy(
                    update={"dj_requests": (*event.dj_requests, request), "updated_at": now}
                )
            )

        with logfire.span(
            "dj_workflow.add_dj_request", event_id=str(event_id), user_id=str(user.id)
        ):
            outcome = await self._change(event_id, apply)
            if outcome.ok:
                logfire.info("DJ request recorded", event_id=str(event_id), user_id=str(user.id))
            else:
                logfire.warn("DJ request refused", event_id=str(event_id), reason=outcome.kind.value)
            return outcome

    async def approve_dj_request(self, event_id: EventId, user_id: UserId) -> Outcome[DanceEvent]:
        """Approve one request and reject every other.

        The approved requester becomes the event's DJ.

        Returns:
            The event, NOT_FOUND, or INVALID_STATE if the user never applied
        """
        now = self.clock.now()

        def apply(event: DanceEvent) -> Outcome[DanceEvent]:
            target = event.dj_request_of(user_id)
            if target is None:
                return Outcome.fail(FailureKind.INVALID_STATE, "DJ request not found")
            requests = tuple(
                r.model_copy(
                    update={
                        "status": DjRequestStatus.APPROVED
                        if r.user_id == user_id
                        else DjRequestStatus.REJECTED
                    }
                )
                for r in event.dj_requests
            )
            return Outcome.success(
                event.model_copy(
                    update={
                        "dj_requests": requests,
                        "dj_user_id": user_id,
                        "dj_name": target.user.display_name,
                        "updated_at": now,
                    }
                )
            )

        with logfire.span(
            "dj_workflow.approve_dj_request", event_id=str(event_id), user_id=str(user_id)
        ):
            outcome = await self._change(event_id, apply)
            if outcome.ok:
                logfire.info("DJ approved", event_id=str(event_id), user_id=str(user_id))
            return outcome

    async def reject_dj_request(self, event_id: EventId, user_id: UserId) -> Outcome[DanceEvent]:
        """Reject one request, leaving the others untouched.

        Rejecting the currently approved DJ also unassigns them.

        Returns:
            The event, NOT_FOUND, or INVALID_STATE if the user never applied
        """
        now = self.clock.now()

        def apply(event: DanceEvent) -> Outcome[DanceEvent]:
            target = event.dj_request_of(user_id)
            if target is None:
                return Outcome.fail(FailureKind.INVALID_STATE, "DJ request not found")
            requests = tuple(
                r.model_copy(update={"status": DjRequestStatus.REJECTED})
                if r.user_id == user_id
                else r
                for r in event.dj_requests
            )
            update: dict = {"dj_requests": requests, "updated_at": now}
            if target.status == DjRequestStatus.APPROVED and event.dj_user_id == user_id:
                update.update(dj_user_id=None, dj_name=None)
            return Outcome.success(event.model_copy(update=update))

        with logfire.span(
            "dj_workflow.reject_dj_request", event_id=str(event_id), user_id=str(user_id)
        ):
            outcome = await self._change(event_id, apply)
            if outcome.ok:
                logfire.info("DJ request rejected", event_id=str(event_id), user_id=str(user_id))
            return outcome
