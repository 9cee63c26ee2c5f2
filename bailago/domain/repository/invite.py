"""Group invite repository interface."""

from abc import abstractmethod
from typing import Optional

from bailago.domain.model.invite import GroupInvite
from bailago.domain.repository.base import Repository
from bailago.domain.value import GroupId, InviteId, InviteStatus, UserId


class InviteRepository(Repository):
    """Repository for GroupInvite entity."""

    @abstractmethod
    async def find_by_id(self, invite_id: InviteId) -> Optional[GroupInvite]:
        """Find an invite by ID.

        Args:
            invite_id: The invite's unique identifier

        Returns:
            The invite if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_pending(
        self, group_id: GroupId, invited_user_id: UserId
    ) -> Optional[GroupInvite]:
        """Find the pending invite for a (group, invitee) pair.

        Used during invite creation to prevent duplicates.

        Args:
            group_id: The group
            invited_user_id: The invited user

        Returns:
            The pending invite if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_invited_user(
        self, invited_user_id: UserId, status: InviteStatus | None = None
    ) -> list[GroupInvite]:
        """List invites addressed to a user, optionally filtered by status."""
        pass

    @abstractmethod
    async def find_by_group(self, group_id: GroupId) -> list[GroupInvite]:
        """List every invite of a group, any status."""
        pass

    @abstractmethod
    async def save(self, invite: GroupInvite) -> GroupInvite:
        """Save an invite (create or update).

        Raises:
            ValueError: If a different pending invite already exists for the pair
        """
        pass

    @abstractmethod
    async def delete_by_group(self, group_id: GroupId) -> int:
        """Delete every invite of a group.

        Returns:
            Number of invites deleted
        """
        pass
