"""Mentor request protocol domain service.

Transitions per (event, mentor) pair:

    none       -> requesting   request (the mentor)
    requesting -> none         withdraw (the mentor)
    requesting -> accepted     accept (mentoring management)
    requesting -> declined     decline (mentoring management)
    none       -> accepted     assign (mentoring management)

Nothing leaves accepted or declined.
"""

from datetime import datetime
from typing import Optional

import logfire

from booking.config import BookingSettings
from booking.domain.error import NotEligibleError, NotFoundError, StaleWriteError
from booking.domain.model import Actor, Event
from booking.domain.repository import EventRepository
from booking.domain.value import (
    EventId,
    IneligibilityReason,
    Membership,
    MembershipSet,
    MentorId,
    Role,
)

from .base import Service
from .change_feed import ChangeKind, ChangeNotification, ChangeOutbox
from .permission_service import PermissionService

_ALREADY_IN = {
    MembershipSet.REQUESTING: IneligibilityReason.ALREADY_REQUESTED,
    MembershipSet.ACCEPTED: IneligibilityReason.ALREADY_ACCEPTED,
    MembershipSet.DECLINED: IneligibilityReason.ALREADY_DECLINED,
}


class MentorRequestService(Service):
    """Domain service for mentor membership transitions.

    Every transition is a full-row read-modify-write of the three membership
    arrays. With conditional writes enabled the write carries the version
    that was read and fails with StaleWriteError if another writer got there
    first; without them the last writer wins.
    """

    def __init__(
        self,
        event_repository: EventRepository,
        permission_service: PermissionService,
        outbox: ChangeOutbox,
        settings: BookingSettings,
    ) -> None:
        """Initialize mentor request service.

        Args:
            event_repository: Event repository
            permission_service: Permission evaluator
            outbox: Change notifications of the current unit of work
            settings: Booking settings
        """
        self.event_repository = event_repository
        self.permission_service = permission_service
        self.outbox = outbox
        self.settings = settings

    async def request(
        self, actor: Actor, event_id: EventId, now: Optional[datetime] = None
    ) -> Event:
        """Request to join an event as the acting mentor.

        Raises:
            NotFoundError: If the event does not exist
            NotEligibleError: If the actor may not request the event
        """
        with logfire.span(
            "mentor_request.request", event_id=str(event_id), actor_id=str(actor.id)
        ):
            event = await self._load(event_id)

            reason = self.permission_service.check_request_eligibility(
                event, actor, now
            )
            if reason is not None:
                self._reject(reason, event, actor.mentor_id)

            membership = event.membership.move(
                actor.mentor_id, MembershipSet.REQUESTING
            )
            updated = await self._write(event, membership)
            logfire.info(
                "Mentor requested event",
                event_id=str(event_id),
                mentor_id=str(actor.mentor_id),
                status=updated.status.value,
            )
            return updated

    async def withdraw(self, actor: Actor, event_id: EventId) -> Event:
        """Withdraw the acting mentor's pending request.

        Raises:
            NotFoundError: If the event does not exist
            NotEligibleError: If the actor is not a mentor with a pending request
        """
        with logfire.span(
            "mentor_request.withdraw", event_id=str(event_id), actor_id=str(actor.id)
        ):
            event = await self._load(event_id)

            if actor.active_role is not Role.MENTOR:
                self._reject(IneligibilityReason.NOT_A_MENTOR, event, actor.mentor_id)
            self._require_requesting(event, actor.mentor_id)

            membership = event.membership.move(actor.mentor_id, None)
            updated = await self._write(event, membership)
            logfire.info(
                "Mentor withdrew request",
                event_id=str(event_id),
                mentor_id=str(actor.mentor_id),
            )
            return updated

    async def accept(
        self, actor: Actor, event_id: EventId, mentor_id: MentorId
    ) -> Event:
        """Move a requesting mentor to accepted.

        Raises:
            PermissionDeniedError: If the actor may not assign mentors
            NotFoundError: If the event does not exist
            NotEligibleError: If the mentor is not requesting or the event is full
        """
        with logfire.span(
            "mentor_request.accept",
            event_id=str(event_id),
            mentor_id=str(mentor_id),
            actor_id=str(actor.id),
        ):
            self.permission_service.require(
                actor, "can_assign_mentors", "accept mentor requests"
            )
            event = await self._load(event_id)

            self._require_requesting(event, mentor_id)
            if event.is_full:
                self._reject(IneligibilityReason.EVENT_FULL, event, mentor_id)

            membership = event.membership.move(mentor_id, MembershipSet.ACCEPTED)
            updated = await self._write(event, membership)
            logfire.info(
                "Mentor accepted",
                event_id=str(event_id),
                mentor_id=str(mentor_id),
                status=updated.status.value,
            )
            return updated

    async def decline(
        self, actor: Actor, event_id: EventId, mentor_id: MentorId
    ) -> Event:
        """Move a requesting mentor to declined.

        Raises:
            PermissionDeniedError: If the actor may not assign mentors
            NotFoundError: If the event does not exist
            NotEligibleError: If the mentor is not requesting
        """
        with logfire.span(
            "mentor_request.decline",
            event_id=str(event_id),
            mentor_id=str(mentor_id),
            actor_id=str(actor.id),
        ):
            self.permission_service.require(
                actor, "can_assign_mentors", "decline mentor requests"
            )
            event = await self._load(event_id)

            self._require_requesting(event, mentor_id)

            membership = event.membership.move(mentor_id, MembershipSet.DECLINED)
            updated = await self._write(event, membership)
            logfire.info(
                "Mentor declined",
                event_id=str(event_id),
                mentor_id=str(mentor_id),
                status=updated.status.value,
            )
            return updated

    async def assign(
        self,
        actor: Actor,
        event_id: EventId,
        mentor_id: MentorId,
        now: Optional[datetime] = None,
    ) -> Event:
        """Put a mentor straight into accepted.

        The mentor may be unknown to the event or have a pending request.

        Raises:
            PermissionDeniedError: If the actor may not assign mentors
            NotFoundError: If the event does not exist
            NotEligibleError: If the mentor is accepted or declined already, the
                event is past or it is full
        """
        with logfire.span(
            "mentor_request.assign",
            event_id=str(event_id),
            mentor_id=str(mentor_id),
            actor_id=str(actor.id),
        ):
            self.permission_service.require(
                actor, "can_assign_mentors", "assign mentors"
            )
            event = await self._load(event_id)

            current = event.membership.set_of(mentor_id)
            if current in (MembershipSet.ACCEPTED, MembershipSet.DECLINED):
                self._reject(_ALREADY_IN[current], event, mentor_id)
            if event.is_in_past(now):
                self._reject(IneligibilityReason.EVENT_IN_PAST, event, mentor_id)
            if event.is_full:
                self._reject(IneligibilityReason.EVENT_FULL, event, mentor_id)

            membership = event.membership.move(mentor_id, MembershipSet.ACCEPTED)
            updated = await self._write(event, membership)
            logfire.info(
                "Mentor assigned",
                event_id=str(event_id),
                mentor_id=str(mentor_id),
                status=updated.status.value,
            )
            return updated

    async def _load(self, event_id: EventId) -> Event:
        event = await self.event_repository.find_by_id(event_id)
        if event is None:
            logfire.warn("Mentor operation on non-existent event", event_id=str(event_id))
            raise NotFoundError("Event", str(event_id))
        return event

    def _require_requesting(self, event: Event, mentor_id: MentorId) -> None:
        current = event.membership.set_of(mentor_id)
        if current is MembershipSet.REQUESTING:
            return
        if current is None:
            self._reject(IneligibilityReason.NOT_REQUESTING, event, mentor_id)
        self._reject(_ALREADY_IN[current], event, mentor_id)

    def _reject(
        self, reason: IneligibilityReason, event: Event, mentor_id: MentorId
    ) -> None:
        logfire.warn(
            "Mentor operation rejected",
            event_id=str(event.id),
            mentor_id=str(mentor_id),
            reason=reason.value,
        )
        raise NotEligibleError(
            reason=reason, event_id=str(event.id), mentor_id=str(mentor_id)
        )

    async def _write(self, event: Event, membership: Membership) -> Event:
        """Persist complete membership arrays and queue a change notification."""
        expected_version = event.version if self.settings.conditional_writes else None

        updated = await self.event_repository.update(
            event.id, membership.as_columns(), expected_version=expected_version
        )
        if updated is None:
            if await self.event_repository.find_by_id(event.id) is None:
                raise NotFoundError("Event", str(event.id))
            if expected_version is not None:
                logfire.warn(
                    "Concurrent membership write detected",
                    event_id=str(event.id),
                    expected_version=expected_version,
                )
                raise StaleWriteError(str(event.id), expected_version)
            raise NotFoundError("Event", str(event.id))

        self.outbox.add(
            ChangeNotification(
                event_id=event.id,
                kind=ChangeKind.UPDATE,
                membership=updated.membership,
                previous=event.membership,
            )
        )
        return updated
