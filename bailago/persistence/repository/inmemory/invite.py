"""In-memory group invite repository."""

from contextlib import AbstractAsyncContextManager
from typing import Optional

from bailago.domain.model.invite import GroupInvite
from bailago.domain.repository.invite import InviteRepository
from bailago.domain.value import GroupId, InviteId, InviteStatus, UserId
from bailago.persistence.store import EntityStore


class InMemoryInviteRepository(InviteRepository):
    """In-memory implementation of InviteRepository."""

    def __init__(self) -> None:
        self._store: EntityStore[InviteId, GroupInvite] = EntityStore()

    def atomic(self) -> AbstractAsyncContextManager:
        return self._store.lock

    async def find_by_id(self, invite_id: InviteId) -> Optional[GroupInvite]:
        """Find an invite by ID."""
        return self._store.get(invite_id)

    async def find_pending(
        self, group_id: GroupId, invited_user_id: UserId
    ) -> Optional[GroupInvite]:
        """Find the pending invite for a (group, invitee) pair."""
        return self._store.find_first(
            lambda i: i.group_id == group_id
            and i.invited_user_id == invited_user_id
            and i.status == InviteStatus.PENDING
        )

    async def find_by_invited_user(
        self, invited_user_id: UserId, status: InviteStatus | None = None
    ) -> list[GroupInvite]:
        """List invites addressed to a user."""
        return self._store.filter(
            lambda i: i.invited_user_id == invited_user_id
            and (status is None or i.status == status)
        )

    async def find_by_group(self, group_id: GroupId) -> list[GroupInvite]:
        """List every invite of a group."""
        return self._store.filter(lambda i: i.group_id == group_id)

    async def save(self, invite: GroupInvite) -> GroupInvite:
        """Save an invite (create or update).

        Raises:
            ValueError: If another pending invite exists for the same pair
        """
        if invite.status == InviteStatus.PENDING:
            existing = await self.find_pending(invite.group_id, invite.invited_user_id)
            if existing is not None and existing.id != invite.id:
                raise ValueError("Duplicate pending invite")
        return self._store.put(invite.id, invite)

    async def delete_by_group(self, group_id: GroupId) -> int:
        """Delete every invite of a group."""
        return self._store.delete_where(lambda i: i.group_id == group_id)
