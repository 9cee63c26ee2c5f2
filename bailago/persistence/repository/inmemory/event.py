"""In-memory event repository."""

from contextlib import AbstractAsyncContextManager
from typing import Optional

from bailago.domain.model.event import DanceEvent
from bailago.domain.repository.event import EventRepository
from bailago.domain.value import EventId, GroupId, UserId
from bailago.persistence.store import EntityStore


class InMemoryEventRepository(EventRepository):
    """In-memory implementation of EventRepository."""

    def __init__(self) -> None:
        self._store: EntityStore[EventId, DanceEvent] = EntityStore()

    def atomic(self) -> AbstractAsyncContextManager:
        return self._store.lock

    async def find_by_id(self, event_id: EventId) -> Optional[DanceEvent]:
        """Find an event by ID."""
        return self._store.get(event_id)

    async def find_all(self) -> list[DanceEvent]:
        """List every event in insertion order."""
        return self._store.values()

    async def find_by_creator(self, creator_id: UserId) -> list[DanceEvent]:
        """List events created by a user."""
        return self._store.filter(lambda e: e.creator_id == creator_id)

    async def find_by_participant(self, user_id: UserId) -> list[DanceEvent]:
        """List events a user participates in."""
        return self._store.filter(lambda e: e.has_participant(user_id))

    async def find_by_group(self, group_id: GroupId) -> list[DanceEvent]:
        """List events attached to a group."""
        return self._store.filter(lambda e: e.group_id == group_id)

    async def save(self, event: DanceEvent) -> DanceEvent:
        """Save or update an event."""
        return self._store.put(event.id, event)

    async def delete(self, event_id: EventId) -> bool:
        """Delete an event."""
        return self._store.delete(event_id)

    async def delete_by_group(self, group_id: GroupId) -> int:
        """Delete every event attached to a group."""
        return self._store.delete_where(lambda e: e.group_id == group_id)
