"""Event repository interface."""

from abc import abstractmethod
from typing import Optional

from bailago.domain.model.event import DanceEvent
from bailago.domain.repository.base import Repository
from bailago.domain.value import EventId, GroupId, UserId


class EventRepository(Repository):
    """Repository for DanceEvent aggregate.

    Listing methods return events in insertion order; sorting is the
    registry's concern.
    """

    @abstractmethod
    async def find_by_id(self, event_id: EventId) -> Optional[DanceEvent]:
        """Find an event by ID.

        Args:
            event_id: The event's unique identifier

        Returns:
            The event if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(self) -> list[DanceEvent]:
        """List every event in insertion order."""
        pass

    @abstractmethod
    async def find_by_creator(self, creator_id: UserId) -> list[DanceEvent]:
        """List events created by a user."""
        pass

    @abstractmethod
    async def find_by_participant(self, user_id: UserId) -> list[DanceEvent]:
        """List events a user participates in."""
        pass

    @abstractmethod
    async def find_by_group(self, group_id: GroupId) -> list[DanceEvent]:
        """List events attached to a group."""
        pass

    @abstractmethod
    async def save(self, event: DanceEvent) -> DanceEvent:
        """Save an event (create or update)."""
        pass

    @abstractmethod
    async def delete(self, event_id: EventId) -> bool:
        """Delete an event.

        Returns:
            True if the event existed
        """
        pass

    @abstractmethod
    async def delete_by_group(self, group_id: GroupId) -> int:
        """Delete every event attached to a group.

        Returns:
            Number of events deleted
        """
        pass
