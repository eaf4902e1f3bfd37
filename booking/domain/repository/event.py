"""Event repository interface."""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from booking.domain.model.event import Event
from booking.domain.value import EventId


class EventRepository(ABC):
    """Repository for the Event aggregate.

    Membership changes are always written as complete replacement arrays,
    never as set deltas.
    """

    @abstractmethod
    async def find_by_id(self, event_id: EventId) -> Optional[Event]:
        """Find an event by ID.

        Args:
            event_id: The event's unique identifier

        Returns:
            The event if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(self) -> List[Event]:
        """Return every event ordered by date, then start time."""
        pass

    @abstractmethod
    async def insert(self, event: Event) -> Event:
        """Insert a new event.

        Args:
            event: The event to insert

        Returns:
            The stored event
        """
        pass

    @abstractmethod
    async def update(
        self,
        event_id: EventId,
        changes: dict[str, Any],
        expected_version: Optional[int] = None,
    ) -> Optional[Event]:
        """Apply a partial update and bump the version.

        With ``expected_version`` the write is conditional: it only happens
        while the stored version still equals it.

        Args:
            event_id: Event to update
            changes: Field values to overwrite
            expected_version: Version read before computing the changes

        Returns:
            The updated event, or None if no row matched
        """
        pass

    @abstractmethod
    async def delete(self, event_id: EventId) -> bool:
        """Hard delete an event.

        Args:
            event_id: The event ID to delete

        Returns:
            True if a row was deleted
        """
        pass
