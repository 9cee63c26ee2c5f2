"""Event use cases."""

from bailago.application.usecase.event.create_event import (
    CreateEventRequest,
    CreateEventResponse,
    CreateEventUseCase,
)
from bailago.application.usecase.event.decide_dj_request import (
    DecideDjRequestRequest,
    DecideDjRequestResponse,
    DecideDjRequestUseCase,
)
from bailago.application.usecase.event.delete_event import (
    DeleteEventRequest,
    DeleteEventResponse,
    DeleteEventUseCase,
)
from bailago.application.usecase.event.get_event import (
    GetEventRequest,
    GetEventResponse,
    GetEventUseCase,
)
from bailago.application.usecase.event.join_event import (
    JoinEventRequest,
    JoinEventResponse,
    JoinEventUseCase,
)
from bailago.application.usecase.event.leave_event import (
    LeaveEventRequest,
    LeaveEventResponse,
    LeaveEventUseCase,
)
from bailago.application.usecase.event.list_events import (
    ListEventsRequest,
    ListEventsResponse,
    ListEventsUseCase,
)
from bailago.application.usecase.event.request_dj import (
    RequestDjRequest,
    RequestDjResponse,
    RequestDjUseCase,
)
from bailago.application.usecase.event.update_event import (
    UpdateEventRequest,
    UpdateEventResponse,
    UpdateEventUseCase,
)

__all__ = [
    "CreateEventRequest",
    "CreateEventResponse",
    "CreateEventUseCase",
    "DecideDjRequestRequest",
    "DecideDjRequestResponse",
    "DecideDjRequestUseCase",
    "DeleteEventRequest",
    "DeleteEventResponse",
    "DeleteEventUseCase",
    "GetEventRequest",
    "GetEventResponse",
    "GetEventUseCase",
    "JoinEventRequest",
    "JoinEventResponse",
    "JoinEventUseCase",
    "LeaveEventRequest",
    "LeaveEventResponse",
    "LeaveEventUseCase",
    "ListEventsRequest",
    "ListEventsResponse",
    "ListEventsUseCase",
    "RequestDjRequest",
    "RequestDjResponse",
    "RequestDjUseCase",
    "UpdateEventRequest",
    "UpdateEventResponse",
    "UpdateEventUseCase",
]
