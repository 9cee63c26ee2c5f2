"""In-memory group repository."""

from contextlib import AbstractAsyncContextManager
from typing import Optional

from bailago.domain.model.group import Group
from bailago.domain.repository.group import GroupRepository
from bailago.domain.value import GroupId, UserId
from bailago.persistence.store import EntityStore


class InMemoryGroupRepository(GroupRepository):
    """In-memory implementation of GroupRepository."""

    def __init__(self) -> None:
        self._store: EntityStore[GroupId, Group] = EntityStore()

    def atomic(self) -> AbstractAsyncContextManager:
        return self._store.lock

    async def find_by_id(self, group_id: GroupId) -> Optional[Group]:
        """Find a group by ID."""
        return self._store.get(group_id)

    async def find_by_member(self, user_id: UserId) -> list[Group]:
        """List groups a user belongs to."""
        return self._store.filter(lambda g: g.is_member(user_id))

    async def save(self, group: Group) -> Group:
        """Save or update a group."""
        return self._store.put(group.id, group)

    async def delete(self, group_id: GroupId) -> bool:
        """Delete a group."""
        return self._store.delete(group_id)
