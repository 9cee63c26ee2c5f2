"""Group repository interface."""

from abc import abstractmethod
from typing import Optional

from bailago.domain.model.group import Group
from bailago.domain.repository.base import Repository
from bailago.domain.value import GroupId, UserId


class GroupRepository(Repository):
    """Repository for Group aggregate."""

    @abstractmethod
    async def find_by_id(self, group_id: GroupId) -> Optional[Group]:
        """Find a group by ID.

        Args:
            group_id: The group's unique identifier

        Returns:
            The group if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_member(self, user_id: UserId) -> list[Group]:
        """List groups a user belongs to, in creation order."""
        pass

    @abstractmethod
    async def save(self, group: Group) -> Group:
        """Save a group (create or update)."""
        pass

    @abstractmethod
    async def delete(self, group_id: GroupId) -> bool:
        """Delete a group.

        Returns:
            True if the group existed
        """
        pass
