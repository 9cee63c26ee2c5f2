"""Group aggregate root and group invites."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from bailago.domain.model.common import DomainModel, utcnow
from bailago.domain.model.user import UserSnapshot
from bailago.domain.value import GroupId, GroupRole, UserId


class GroupMember(DomainModel):
    """Membership of a user in a group."""

    user_id: UserId
    user: UserSnapshot
    role: GroupRole = GroupRole.MEMBER
    joined_at: datetime = Field(default_factory=utcnow)


class Group(DomainModel):
    """Group aggregate root.

    Business rules:
    - a group always has at least one admin while it exists
    - a group with no members is deleted, never left empty
    - one membership per user
    """

    id: GroupId
    name: str = Field(min_length=2, max_length=100)
    description: Optional[str] = Field(default=None, max_length=1000)
    image_url: Optional[str] = None
    creator_id: UserId
    members: tuple[GroupMember, ...] = ()
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def member(self, user_id: UserId) -> GroupMember | None:
        for member in self.members:
            if member.user_id == user_id:
                return member
        return None

    def is_member(self, user_id: UserId) -> bool:
        return self.member(user_id) is not None

    def is_admin(self, user_id: UserId) -> bool:
        member = self.member(user_id)
        return member is not None and member.role == GroupRole.ADMIN

    @property
    def admin_count(self) -> int:
        return sum(1 for m in self.members if m.role == GroupRole.ADMIN)
