"""Event listing rules shared by the API and client sessions."""

from datetime import datetime
from typing import Iterable, Optional

from booking.domain.model import Actor, Event
from booking.domain.value import EventStatus, MembershipSet, Role, StatusFilter, ViewMode
from booking.domain.value.common import ValueObject

from .base import Service
from .permission_service import PermissionService

_OPEN_STATUSES = frozenset(
    {EventStatus.NEW, EventStatus.FIRST_REQUESTS, EventStatus.SUCCESS_PARTLY}
)


class Involvement(ValueObject):
    """How the acting user takes part in an event."""

    requesting: bool = False
    accepted: bool = False
    declined: bool = False
    staff: bool = False

    @property
    def as_mentor(self) -> bool:
        return self.requesting or self.accepted or self.declined


class EventQueryService(Service):
    """Filters and orders events for a given actor."""

    def __init__(self, permission_service: PermissionService) -> None:
        """Initialize event query service.

        Args:
            permission_service: Permission evaluator (mentor visibility)
        """
        self.permission_service = permission_service

    def involvement(self, event: Event, actor: Actor) -> Involvement:
        current = event.membership.set_of(actor.mentor_id)
        return Involvement(
            requesting=current is MembershipSet.REQUESTING,
            accepted=current is MembershipSet.ACCEPTED,
            declined=current is MembershipSet.DECLINED,
            staff=actor.staff_id in event.staff_members,
        )

    def filter_events(
        self,
        events: Iterable[Event],
        actor: Actor,
        view: ViewMode = ViewMode.ALL,
        status: Optional[StatusFilter] = None,
        search: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> list[Event]:
        """Apply view mode, status filter and search.

        Upcoming views are ordered soonest first, the past view most recent
        first.

        Args:
            events: Candidate events
            actor: Acting user
            view: Perspective to list from
            status: Optional status filter
            search: Case-insensitive text matched against company and description
            now: Reference time for past checks

        Returns:
            Matching events
        """
        now = now or datetime.now()
        needle = search.strip().casefold() if search else ""

        selected = [
            event
            for event in events
            if self._in_view(event, actor, view, now)
            and self._matches_status(event, status)
            and self._matches_search(event, needle)
        ]
        selected.sort(key=lambda e: e.starts_at, reverse=view is ViewMode.PAST)
        return selected

    def _in_view(
        self, event: Event, actor: Actor, view: ViewMode, now: datetime
    ) -> bool:
        past = event.is_in_past(now)

        if view is ViewMode.PAST:
            if not past:
                return False
            # Mentors only look back on events they took part in
            if actor.active_role is Role.MENTOR:
                return self.involvement(event, actor).as_mentor
            return True

        if past:
            return False
        if view is ViewMode.MY:
            return self.involvement(event, actor).as_mentor
        if view is ViewMode.STAFF:
            return actor.staff_id in event.staff_members
        return self.permission_service.can_mentor_view_event(event, actor)

    @staticmethod
    def _matches_status(event: Event, status: Optional[StatusFilter]) -> bool:
        if status is None:
            return True
        if status is StatusFilter.NEEDS_MENTORS:
            return event.status in _OPEN_STATUSES and not event.is_full
        return event.status.value == status.value

    @staticmethod
    def _matches_search(event: Event, needle: str) -> bool:
        if not needle:
            return True
        haystack = f"{event.company} {event.description or ''}".casefold()
        return needle in haystack
