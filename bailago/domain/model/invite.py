"""Group invite entity.

Invites are issued by a group admin to a registered user. Accepting an
invite does not add the member by itself: the caller adds the membership
through the group registry.
"""

from datetime import datetime

from pydantic import Field

from bailago.domain.model.common import DomainModel, utcnow
from bailago.domain.value import GroupId, InviteId, InviteStatus, UserId


class GroupInvite(DomainModel):
    """Invite of a user into a group.

    Business rules:
    - one pending invite per (group, invited user)
    - only pending, unexpired invites can be accepted
    """

    id: InviteId
    group_id: GroupId
    invited_user_id: UserId
    invited_by_user_id: UserId
    status: InviteStatus = InviteStatus.PENDING
    created_at: datetime = Field(default_factory=utcnow)
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at
