"""In-memory event repository for testing."""

from datetime import datetime
from typing import Any, Optional

from booking.domain.model import Event
from booking.domain.repository.event import EventRepository
from booking.domain.value import EventId


class InMemoryEventRepository(EventRepository):
    """In-memory implementation of EventRepository for testing."""

    def __init__(self) -> None:
        self._events: dict[EventId, Event] = {}

    async def find_by_id(self, event_id: EventId) -> Optional[Event]:
        """Find an event by ID."""
        return self._events.get(event_id)

    async def find_all(self) -> list[Event]:
        """Return every event ordered by date, then start time."""
        return sorted(self._events.values(), key=lambda e: (e.date, e.time))

    async def insert(self, event: Event) -> Event:
        """Insert a new event."""
        if event.id in self._events:
            raise ValueError(f"Event {event.id} already exists")
        self._events[event.id] = event
        return event

    async def update(
        self,
        event_id: EventId,
        changes: dict[str, Any],
        expected_version: Optional[int] = None,
    ) -> Optional[Event]:
        """Apply a partial update and bump the version."""
        current = self._events.get(event_id)
        if current is None:
            return None
        if expected_version is not None and current.version != expected_version:
            return None

        data = current.model_dump(exclude={"end_time", "status"})
        data.update(changes)
        data["version"] = current.version + 1
        data["updated_at"] = datetime.now()
        updated = Event.model_validate(data)

        self._events[event_id] = updated
        return updated

    async def delete(self, event_id: EventId) -> bool:
        """Hard delete an event."""
        return self._events.pop(event_id, None) is not None
