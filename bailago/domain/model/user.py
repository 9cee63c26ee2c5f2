"""User aggregate root.

Users register locally (email + password) or through an OAuth provider
(Google, Instagram), and move through the inactivity lifecycle. Users are
never hard-deleted: deletion anonymizes the record in place so historical
events and groups keep a valid reference.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from bailago.domain.model.common import DomainModel, utcnow
from bailago.domain.value import AccountStatus, AuthProvider, DanceType, UserId


class User(DomainModel):
    """User aggregate root.

    Holds the credential hash and the one-time tokens. Never hand this
    entity to code outside the user registry; project it with
    ``to_user_view`` instead.
    """

    id: UserId
    email: str
    username: str = Field(min_length=1, max_length=64)
    nickname: Optional[str] = None
    first_name: str = ""
    last_name: str = ""
    display_name: str = ""
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    favorite_dances: frozenset[DanceType] = frozenset()

    # Auth
    password_hash: Optional[str] = None  # None for OAuth-only accounts
    provider: AuthProvider = AuthProvider.LOCAL
    provider_id: Optional[str] = None
    email_verified: bool = False
    email_verification_token: Optional[str] = None
    email_verification_expires: Optional[datetime] = None
    password_reset_token: Optional[str] = None
    password_reset_expires: Optional[datetime] = None

    # Push notifications
    push_token: Optional[str] = None
    push_enabled: bool = True

    # Lifecycle
    status: AccountStatus = AccountStatus.ACTIVE
    last_active_at: datetime = Field(default_factory=utcnow)
    deactivated_at: Optional[datetime] = None
    scheduled_deletion_at: Optional[datetime] = None

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def is_deleted(self) -> bool:
        return self.status == AccountStatus.DELETED


class UserView(DomainModel):
    """Public projection of a user.

    Has no credential or token fields, so nothing can leak by omission.
    """

    id: UserId
    email: str
    username: str
    nickname: Optional[str] = None
    first_name: str = ""
    last_name: str = ""
    display_name: str = ""
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    favorite_dances: frozenset[DanceType] = frozenset()
    provider: AuthProvider
    email_verified: bool
    push_token: Optional[str] = None
    push_enabled: bool
    status: AccountStatus
    last_active_at: datetime
    deactivated_at: Optional[datetime] = None
    scheduled_deletion_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    has_password: bool = False


class UserSnapshot(DomainModel):
    """Denormalized point-in-time copy of a user's public profile.

    Embedded in participants, group members and DJ requests. Not kept in
    sync: later display-name changes do not rewrite historical records.
    """

    id: UserId
    username: str
    display_name: str
    avatar_url: Optional[str] = None


def to_user_view(user: User) -> UserView:
    """Project a user entity to its public view."""
    return UserView(
        id=user.id,
        email=user.email,
        username=user.username,
        nickname=user.nickname,
        first_name=user.first_name,
        last_name=user.last_name,
        display_name=user.display_name,
        avatar_url=user.avatar_url,
        bio=user.bio,
        favorite_dances=user.favorite_dances,
        provider=user.provider,
        email_verified=user.email_verified,
        push_token=user.push_token,
        push_enabled=user.push_enabled,
        status=user.status,
        last_active_at=user.last_active_at,
        deactivated_at=user.deactivated_at,
        scheduled_deletion_at=user.scheduled_deletion_at,
        created_at=user.created_at,
        updated_at=user.updated_at,
        has_password=user.password_hash is not None,
    )


def snapshot_of(user: User | UserView | UserSnapshot) -> UserSnapshot:
    """Take a denormalized snapshot of a user."""
    if isinstance(user, UserSnapshot):
        return user
    return UserSnapshot(
        id=user.id,
        username=user.username,
        display_name=user.display_name,
        avatar_url=user.avatar_url,
    )
