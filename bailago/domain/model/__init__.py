"""Domain model entities for BailaGo."""

from bailago.domain.model.event import (
    DanceEvent,
    DjRequest,
    Location,
    Participant,
    is_visible_to,
)
from bailago.domain.model.group import Group, GroupMember
from bailago.domain.model.invite import GroupInvite
from bailago.domain.model.user import (
    User,
    UserSnapshot,
    UserView,
    snapshot_of,
    to_user_view,
)

__all__ = [
    "User",
    "UserView",
    "UserSnapshot",
    "snapshot_of",
    "to_user_view",
    "DanceEvent",
    "DjRequest",
    "Location",
    "Participant",
    "is_visible_to",
    "Group",
    "GroupMember",
    "GroupInvite",
]
