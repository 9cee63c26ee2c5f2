"""Domain value objects for BailaGo."""

from bailago.domain.value.identifiers import (
    EventId,
    GroupId,
    InviteId,
    LocationId,
    UserId,
)
from bailago.domain.value.types import (
    AccountStatus,
    AuthProvider,
    DanceType,
    DjMode,
    DjRequestStatus,
    EventVisibility,
    GroupRole,
    InviteStatus,
    OAuthProfile,
    Viewer,
)

__all__ = [
    # Identifiers
    "UserId",
    "EventId",
    "LocationId",
    "GroupId",
    "InviteId",
    # Types
    "AccountStatus",
    "AuthProvider",
    "DanceType",
    "DjMode",
    "DjRequestStatus",
    "EventVisibility",
    "GroupRole",
    "InviteStatus",
    "OAuthProfile",
    "Viewer",
]
