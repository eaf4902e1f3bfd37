"""Long-lived client session over the booking engine.

A session owns an EventStore and a RealtimeInvalidator. Every mutating call
runs in its own request scope (one transaction), and the acknowledged event
is patched into the store before the call returns.
"""

from datetime import date, datetime, time
from typing import Any, Iterable, Optional

import logfire
from dishka import AsyncContainer

from booking.application.sync.event_store import EventStore
from booking.application.sync.invalidator import RealtimeInvalidator
from booking.domain.model import Actor, Event
from booking.domain.service import (
    ChangeFeed,
    EventQueryService,
    EventService,
    IdentityService,
    MentorRequestService,
    PermissionService,
)
from booking.domain.value import (
    Capabilities,
    EventId,
    EventMode,
    MentorId,
    ProductId,
    Role,
    StaffId,
    StatusFilter,
    ViewMode,
)


class BookingSession:
    """One actor's view of the shared event collection."""

    def __init__(
        self,
        container: AsyncContainer,
        actor: Actor,
        feed: ChangeFeed,
        permission_service: Optional[PermissionService] = None,
    ) -> None:
        """Initialize the session.

        Args:
            container: App-scoped DI container
            actor: Acting user
            feed: Push-notification collaborator
            permission_service: Permission evaluator
        """
        self.container = container
        self.actor = actor
        self.permission_service = permission_service or PermissionService()
        self.query_service = EventQueryService(self.permission_service)
        self.store = EventStore(self._load_events)
        self.invalidator = RealtimeInvalidator(feed, self.store)
        self._known_accepted: set[EventId] = set()

    @classmethod
    async def open(cls, container: AsyncContainer, token: str) -> "BookingSession":
        """Identify the actor from a token and start a session.

        Raises:
            JWTError: If the token is invalid
        """
        async with container() as scope:
            identity_service = await scope.get(IdentityService)
            actor = identity_service.actor_from_token(token)

        feed = await container.get(ChangeFeed)
        session = cls(container, actor, feed)
        await session.start()
        return session

    async def start(self) -> None:
        """Load events and begin listening for changes to this mentor."""
        with logfire.span("booking_session.start", actor_id=str(self.actor.id)):
            await self.store.load()
            await self.invalidator.start(self.actor.mentor_id)
            self._known_accepted = self._accepted_event_ids()

    async def close(self) -> None:
        """Stop listening and drop the cache."""
        await self.invalidator.stop()
        self.store.clear()
        self._known_accepted = set()
        logfire.info("Booking session closed", actor_id=str(self.actor.id))

    async def __aenter__(self) -> "BookingSession":
        if not self.store.is_loaded:
            await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    # Reads

    @property
    def capabilities(self) -> Capabilities:
        return self.permission_service.capabilities_for(self.actor)

    def get_event(self, event_id: EventId) -> Optional[Event]:
        """Cached event, or None if absent or hidden from this mentor."""
        event = self.store.get_by_id(event_id)
        if event is None:
            return None
        if not self.permission_service.can_mentor_view_event(event, self.actor):
            return None
        return event

    def events(
        self,
        view: ViewMode = ViewMode.ALL,
        status: Optional[StatusFilter] = None,
        search: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> list[Event]:
        """Cached events from this actor's perspective."""
        return self.query_service.filter_events(
            self.store.all(),
            self.actor,
            view=view,
            status=status,
            search=search,
            now=now,
        )

    async def refresh(self) -> list[Event]:
        return await self.store.refetch()

    def take_newly_accepted(self) -> list[Event]:
        """Events where this mentor became accepted since the last call."""
        current = self._accepted_event_ids()
        new_ids = current - self._known_accepted
        self._known_accepted = current
        return [e for e in self.store.all() if e.id in new_ids]

    # Role switching

    def available_roles(self) -> list[Role]:
        return self.permission_service.available_roles(self.actor)

    def switch_role(self, role: Role) -> Actor:
        """Activate another role for the rest of the session.

        Raises:
            PermissionDeniedError: If the role may not be activated
        """
        self.actor = self.permission_service.switch_role(self.actor, role)
        return self.actor

    # Mentor request protocol

    async def request(self, event_id: EventId) -> Event:
        async with self.container() as scope:
            service = await scope.get(MentorRequestService)
            event = await service.request(self.actor, event_id)
        return self._acknowledge(event)

    async def withdraw(self, event_id: EventId) -> Event:
        async with self.container() as scope:
            service = await scope.get(MentorRequestService)
            event = await service.withdraw(self.actor, event_id)
        return self._acknowledge(event)

    async def accept(self, event_id: EventId, mentor_id: MentorId) -> Event:
        async with self.container() as scope:
            service = await scope.get(MentorRequestService)
            event = await service.accept(self.actor, event_id, mentor_id)
        return self._acknowledge(event)

    async def decline(self, event_id: EventId, mentor_id: MentorId) -> Event:
        async with self.container() as scope:
            service = await scope.get(MentorRequestService)
            event = await service.decline(self.actor, event_id, mentor_id)
        return self._acknowledge(event)

    async def assign(self, event_id: EventId, mentor_id: MentorId) -> Event:
        async with self.container() as scope:
            service = await scope.get(MentorRequestService)
            event = await service.assign(self.actor, event_id, mentor_id)
        return self._acknowledge(event)

    # Event lifecycle

    async def create_event(
        self,
        company: str,
        date: date,
        time: time,
        duration_minutes: Optional[int] = None,
        mode: EventMode = EventMode.LIVE,
        description: Optional[str] = None,
        teams_link: Optional[str] = None,
        required_mentor_count: Optional[int] = None,
        staff_members: Optional[Iterable[StaffId]] = None,
        product_id: Optional[ProductId] = None,
    ) -> Event:
        async with self.container() as scope:
            service = await scope.get(EventService)
            event = await service.create_event(
                self.actor,
                company=company,
                date=date,
                time=time,
                duration_minutes=duration_minutes,
                mode=mode,
                description=description,
                teams_link=teams_link,
                required_mentor_count=required_mentor_count,
                staff_members=staff_members,
                product_id=product_id,
            )
        return self._acknowledge(event)

    async def update_event(self, event_id: EventId, changes: dict[str, Any]) -> Event:
        async with self.container() as scope:
            service = await scope.get(EventService)
            event = await service.update_event(self.actor, event_id, changes)
        return self._acknowledge(event)

    async def set_lock(self, event_id: EventId, locked: bool) -> Event:
        async with self.container() as scope:
            service = await scope.get(EventService)
            event = await service.set_lock(self.actor, event_id, locked)
        return self._acknowledge(event)

    async def delete_event(self, event_id: EventId) -> None:
        async with self.container() as scope:
            service = await scope.get(EventService)
            await service.delete_event(self.actor, event_id)
        self.store.discard(event_id)

    def _acknowledge(self, event: Event) -> Event:
        # Reached only after the request scope committed
        self.store.apply(event)
        return event

    def _accepted_event_ids(self) -> set[EventId]:
        mentor_id = self.actor.mentor_id
        return {e.id for e in self.store.all() if mentor_id in e.accepted_mentors}

    async def _load_events(self) -> list[Event]:
        async with self.container() as scope:
            service = await scope.get(EventService)
            return await service.list_events()
