"""Event lifecycle domain service."""

from datetime import date, datetime, time
from typing import Any, Iterable, List, Optional
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from booking.config import BookingSettings
from booking.domain.error import (
    NotFoundError,
    PermissionDeniedError,
    StaleWriteError,
    ValidationError,
)
from booking.domain.model import Actor, Event
from booking.domain.repository import EventRepository, ProductRepository
from booking.domain.value import (
    EventId,
    EventMode,
    MentorId,
    ProductId,
    StaffId,
)

from .base import Service
from .change_feed import ChangeKind, ChangeNotification, ChangeOutbox
from .permission_service import PermissionService

# Fields staff may change through update_event. Membership only moves through
# the mentor request protocol and the lock flag through set_lock.
EDITABLE_FIELDS = frozenset(
    {
        "company",
        "description",
        "date",
        "time",
        "duration_minutes",
        "mode",
        "teams_link",
        "required_mentor_count",
        "staff_members",
    }
)

# Editable fields that cannot be cleared
REQUIRED_FIELDS = frozenset(
    {
        "company",
        "date",
        "time",
        "duration_minutes",
        "mode",
        "required_mentor_count",
        "staff_members",
    }
)


class EventService(Service):
    """Domain service for creating, editing, locking and deleting events."""

    def __init__(
        self,
        event_repository: EventRepository,
        product_repository: ProductRepository,
        permission_service: PermissionService,
        outbox: ChangeOutbox,
        settings: BookingSettings,
    ) -> None:
        """Initialize event service.

        Args:
            event_repository: Event repository
            product_repository: Product catalog
            permission_service: Permission evaluator
            outbox: Change notifications of the current unit of work
            settings: Booking settings
        """
        self.event_repository = event_repository
        self.product_repository = product_repository
        self.permission_service = permission_service
        self.outbox = outbox
        self.settings = settings

    async def get_event(self, event_id: EventId) -> Event:
        """Get an event by ID.

        Raises:
            NotFoundError: If the event does not exist
        """
        event = await self.event_repository.find_by_id(event_id)
        if event is None:
            raise NotFoundError("Event", str(event_id))
        return event

    async def list_events(self) -> List[Event]:
        """All events ordered by date and start time."""
        return await self.event_repository.find_all()

    async def create_event(
        self,
        actor: Actor,
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
        """Create an event.

        When a product is given, its approved mentors are snapshotted into
        ``initial_selected_mentors`` and its minimum mentor count becomes the
        default required count.

        Raises:
            PermissionDeniedError: If the actor may not create events
            NotFoundError: If the product does not exist
            ValidationError: If the event data is invalid
        """
        with logfire.span(
            "event_service.create_event", actor_id=str(actor.id), company=company
        ):
            self.permission_service.require(
                actor, "can_create_events", "create events"
            )

            initial_selected_mentors: tuple[MentorId, ...] = ()
            default_required = 1
            if product_id is not None:
                product = await self.product_repository.find_by_id(product_id)
                if product is None:
                    logfire.warn("Event created for unknown product", product_id=product_id)
                    raise NotFoundError("Product", str(product_id))
                initial_selected_mentors = product.approved_mentors
                default_required = product.min_mentor_count

            staff = tuple(staff_members) if staff_members else (actor.staff_id,)
            now = datetime.now()

            try:
                event = Event(
                    id=EventId(uuid4()),
                    company=company,
                    description=description,
                    date=date,
                    time=time,
                    duration_minutes=duration_minutes
                    or self.settings.default_duration_minutes,
                    mode=mode,
                    teams_link=teams_link,
                    required_mentor_count=required_mentor_count or default_required,
                    staff_members=staff,
                    product_id=product_id,
                    initial_selected_mentors=initial_selected_mentors,
                    created_at=now,
                    updated_at=now,
                )
            except PydanticValidationError as e:
                raise ValidationError(str(e)) from e

            saved = await self.event_repository.insert(event)
            self.outbox.add(
                ChangeNotification(
                    event_id=saved.id,
                    kind=ChangeKind.INSERT,
                    membership=saved.membership,
                )
            )
            logfire.info(
                "Event created",
                event_id=str(saved.id),
                required_mentor_count=saved.required_mentor_count,
                product_id=product_id,
            )
            return saved

    async def update_event(
        self,
        actor: Actor,
        event_id: EventId,
        changes: dict[str, Any],
        now: Optional[datetime] = None,
    ) -> Event:
        """Update editable fields of an event.

        Raises:
            PermissionDeniedError: If the actor may not edit this event
            NotFoundError: If the event does not exist
            ValidationError: If a field is not editable or a value is invalid
            StaleWriteError: If the event changed concurrently
        """
        with logfire.span(
            "event_service.update_event",
            event_id=str(event_id),
            actor_id=str(actor.id),
            fields=sorted(changes),
        ):
            self.permission_service.require(actor, "can_edit_events", "edit events")

            unknown = set(changes) - EDITABLE_FIELDS
            if unknown:
                raise ValidationError(
                    f"Fields cannot be edited: {', '.join(sorted(unknown))}"
                )

            cleared = sorted(
                name
                for name in REQUIRED_FIELDS
                if name in changes and changes[name] is None
            )
            if cleared:
                raise ValidationError(f"Fields cannot be cleared: {', '.join(cleared)}")

            event = await self.get_event(event_id)
            self._require_edit(event, actor, now)

            required = changes.get("required_mentor_count")
            if required is not None and required < len(event.accepted_mentors):
                raise ValidationError(
                    f"Event already has {len(event.accepted_mentors)} accepted mentors, "
                    f"cannot require {required}"
                )

            if "staff_members" in changes:
                changes = {**changes, "staff_members": tuple(changes["staff_members"])}

            try:
                # Validate against the full model before writing
                Event.model_validate(
                    {**event.model_dump(exclude={"end_time", "status"}), **changes}
                )
            except PydanticValidationError as e:
                raise ValidationError(str(e)) from e

            updated = await self._write(event, changes)
            logfire.info("Event updated", event_id=str(event_id))
            return updated

    async def set_lock(
        self,
        actor: Actor,
        event_id: EventId,
        locked: bool,
        now: Optional[datetime] = None,
    ) -> Event:
        """Lock or unlock an event.

        Unlocking returns the event to the status implied by its membership.

        Raises:
            PermissionDeniedError: If the actor may not edit this event
            NotFoundError: If the event does not exist
        """
        with logfire.span(
            "event_service.set_lock",
            event_id=str(event_id),
            actor_id=str(actor.id),
            locked=locked,
        ):
            self.permission_service.require(
                actor, "can_edit_events", "lock or unlock events"
            )
            event = await self.get_event(event_id)
            self._require_edit(event, actor, now)

            if event.locked == locked:
                return event

            updated = await self._write(event, {"locked": locked})
            logfire.info(
                "Event lock changed",
                event_id=str(event_id),
                locked=locked,
                status=updated.status.value,
            )
            return updated

    async def delete_event(
        self, actor: Actor, event_id: EventId, now: Optional[datetime] = None
    ) -> None:
        """Hard delete an event.

        Raises:
            PermissionDeniedError: If the actor may not delete this event
            NotFoundError: If the event does not exist
        """
        with logfire.span(
            "event_service.delete_event",
            event_id=str(event_id),
            actor_id=str(actor.id),
        ):
            self.permission_service.require(
                actor, "can_delete_events", "delete events"
            )
            event = await self.get_event(event_id)

            if not self.permission_service.can_delete_event(event, actor, now):
                logfire.warn(
                    "Past event deletion refused",
                    event_id=str(event_id),
                    actor_id=str(actor.id),
                )
                raise PermissionDeniedError(
                    capability="can_view_admin_data",
                    actor_id=str(actor.id),
                    action="delete past events",
                )

            deleted = await self.event_repository.delete(event_id)
            if not deleted:
                raise NotFoundError("Event", str(event_id))

            self.outbox.add(
                ChangeNotification(
                    event_id=event_id,
                    kind=ChangeKind.DELETE,
                    membership=event.membership,
                    previous=event.membership,
                )
            )
            logfire.info("Event deleted", event_id=str(event_id))

    def _require_edit(
        self, event: Event, actor: Actor, now: Optional[datetime]
    ) -> None:
        if not self.permission_service.can_edit_event(event, actor, now):
            logfire.warn(
                "Past event edit refused",
                event_id=str(event.id),
                actor_id=str(actor.id),
            )
            raise PermissionDeniedError(
                capability="can_view_admin_data",
                actor_id=str(actor.id),
                action="edit past events",
            )

    async def _write(self, event: Event, changes: dict[str, Any]) -> Event:
        expected_version = event.version if self.settings.conditional_writes else None

        updated = await self.event_repository.update(
            event.id, changes, expected_version=expected_version
        )
        if updated is None:
            if await self.event_repository.find_by_id(event.id) is None:
                raise NotFoundError("Event", str(event.id))
            if expected_version is not None:
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
