"""Domain services."""

from .account_lifecycle import (
    AccountLifecycleManager,
    InactivityStatus,
    LifecycleAction,
    SweepFailure,
    SweepResult,
)
from .base import Service
from .dj_workflow import DjWorkflow
from .event_registry import (
    CreateEventInput,
    EventFilters,
    EventRegistry,
    LocationInput,
    UpdateEventInput,
)
from .group_registry import (
    CreateGroupInput,
    GroupDeletion,
    GroupRegistry,
    UpdateGroupInput,
)
from .invite_registry import InviteRegistry
from .ports import (
    Clock,
    NotificationDispatcher,
    NotificationKind,
    PasswordHasher,
    TokenGenerator,
)
from .user_registry import (
    ProfileUpdate,
    RegisterUserInput,
    Registration,
    UserRegistry,
    UserUpdate,
)

__all__ = [
    "Service",
    # Registries
    "AccountLifecycleManager",
    "DjWorkflow",
    "EventRegistry",
    "GroupRegistry",
    "InviteRegistry",
    "UserRegistry",
    # Inputs and results
    "CreateEventInput",
    "CreateGroupInput",
    "EventFilters",
    "GroupDeletion",
    "InactivityStatus",
    "LifecycleAction",
    "LocationInput",
    "ProfileUpdate",
    "RegisterUserInput",
    "Registration",
    "SweepFailure",
    "SweepResult",
    "UpdateEventInput",
    "UpdateGroupInput",
    "UserUpdate",
    # Ports
    "Clock",
    "NotificationDispatcher",
    "NotificationKind",
    "PasswordHasher",
    "TokenGenerator",
]
