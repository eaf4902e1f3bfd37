"""Session-wide event cache.

The store loads the full event collection once and keeps it until it is
explicitly refreshed, patched or cleared. There is no time-based expiry.
"""

import asyncio
from datetime import datetime
from typing import Awaitable, Callable, Optional

import logfire

from booking.domain.model import Event
from booking.domain.value import EventId

EventLoader = Callable[[], Awaitable[list[Event]]]


class EventStore:
    """Resident snapshot of all events for one client session.

    Reads are synchronous and never do I/O. Reloads replace the whole
    collection in one assignment, so readers see either the old or the new
    snapshot.

    Concurrent ``refetch`` calls are coalesced: a call is satisfied by any
    reload that started after it was made, so redundant invalidations cost at
    most one extra reload.
    """

    def __init__(self, loader: EventLoader) -> None:
        """Initialize the store.

        Args:
            loader: Coroutine returning the full event collection
        """
        self._loader = loader
        self._events: Optional[dict[EventId, Event]] = None
        self._lock = asyncio.Lock()
        self._started = 0  # Reloads started
        self._completed = 0  # Number of the last successful reload
        self._stale = False
        self._reloads = 0
        self.loaded_at: Optional[datetime] = None

    @property
    def is_loaded(self) -> bool:
        return self._events is not None

    @property
    def reload_count(self) -> int:
        """Successful reloads so far."""
        return self._reloads

    async def load(self) -> list[Event]:
        """Return the collection, fetching it only if absent or invalidated."""
        if self._events is not None and not self._stale:
            return self.all()
        return await self.refetch()

    async def refetch(self) -> list[Event]:
        """Reload the whole collection and swap it in.

        On failure the previous snapshot stays in place and the error is
        re-raised.
        """
        ticket = self._started
        async with self._lock:
            if self._completed > ticket:
                logfire.debug("Event refetch coalesced", ticket=ticket)
                return self.all()

            self._started += 1
            number = self._started
            with logfire.span("event_store.refetch", reload=number):
                try:
                    events = await self._loader()
                except Exception as e:
                    logfire.error(
                        "Event refetch failed, keeping cached events",
                        reload=number,
                        error=str(e),
                    )
                    raise

                self._events = {event.id: event for event in events}
                self._completed = number
                self._reloads += 1
                self._stale = False
                self.loaded_at = datetime.now()
                logfire.info("Events loaded", count=len(events), reload=number)
                return self.all()

    def get_by_id(self, event_id: EventId) -> Optional[Event]:
        """Look up a cached event."""
        if self._events is None:
            return None
        return self._events.get(event_id)

    def all(self) -> list[Event]:
        """Cached events ordered by date and start time."""
        if self._events is None:
            return []
        return sorted(self._events.values(), key=lambda e: (e.date, e.time))

    def apply(self, event: Event) -> None:
        """Patch one acknowledged event into the cache.

        An older version never replaces a newer one already cached.
        """
        if self._events is None:
            return
        cached = self._events.get(event.id)
        if cached is not None and cached.version > event.version:
            logfire.debug(
                "Skipped outdated event patch",
                event_id=str(event.id),
                cached_version=cached.version,
                version=event.version,
            )
            return
        self._events = {**self._events, event.id: event}

    def discard(self, event_id: EventId) -> None:
        """Drop a deleted event from the cache."""
        if self._events is None or event_id not in self._events:
            return
        self._events = {k: v for k, v in self._events.items() if k != event_id}

    def invalidate(self) -> None:
        """Mark the snapshot stale; the next load() reloads."""
        self._stale = True

    def clear(self) -> None:
        """Forget everything (session teardown)."""
        self._events = None
        self._stale = False
        self.loaded_at = None
