"""Domain value objects for BailaGo.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum

from bailago.domain.value.common import ValueObject
from bailago.domain.value.identifiers import GroupId, UserId


class DanceType(str, Enum):
    """Dance styles an event or a user's favorites can be tagged with."""

    SALSA = "salsa"
    BACHATA = "bachata"
    KIZOMBA = "kizomba"
    REGGAETON = "reggaeton"
    MERENGUE = "merengue"
    TANGO = "tango"
    SWING = "swing"
    HIPHOP = "hiphop"
    HOUSE = "house"
    TECHNO = "techno"
    LATIN_MIX = "latin_mix"
    OTHER = "other"


class AuthProvider(str, Enum):
    """Supported authentication providers."""

    LOCAL = "local"
    GOOGLE = "google"
    INSTAGRAM = "instagram"


class AccountStatus(str, Enum):
    """Account lifecycle status.

    active -> inactive -> deactivated (deletion scheduled) -> deleted.
    Deleted is terminal.
    """

    ACTIVE = "active"
    INACTIVE = "inactive"
    DEACTIVATED = "deactivated"
    DELETED = "deleted"


class EventVisibility(str, Enum):
    """Who may list and see an event."""

    PUBLIC = "public"
    PRIVATE = "private"
    GROUP = "group"


class DjMode(str, Enum):
    """DJ policy of an event."""

    OPEN = "open"  # anyone may apply
    ASSIGNED = "assigned"  # pre-assigned DJ, others may still apply
    NONE = "none"  # no DJ planned


class DjRequestStatus(str, Enum):
    """Status of a DJ candidacy."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class GroupRole(str, Enum):
    """Role of a member inside a group."""

    ADMIN = "admin"
    MEMBER = "member"
    DJ = "dj"


class InviteStatus(str, Enum):
    """Status of a group invite."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class OAuthProfile(ValueObject):
    """Profile information returned by an OAuth provider on first login."""

    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    display_name: str | None = None
    avatar_url: str | None = None


class Viewer(ValueObject):
    """Identity used for event visibility checks.

    Carries the viewer's group memberships so the event registry never has
    to reach into the group registry.
    """

    user_id: UserId
    group_ids: frozenset[GroupId] = frozenset()
