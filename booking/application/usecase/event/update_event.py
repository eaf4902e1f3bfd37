"""Update event use case."""

import datetime as dt
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from booking.domain.model import Actor
from booking.domain.service import EventService, PermissionService
from booking.domain.value import EventId, EventMode, StaffId

from .response import EventResponse


class EventChanges(BaseModel):
    """Editable event fields; only fields that are set are applied."""

    company: Optional[str] = None
    description: Optional[str] = None
    date: Optional[dt.date] = None
    time: Optional[dt.time] = None
    duration_minutes: Optional[int] = Field(default=None, ge=1)
    mode: Optional[EventMode] = None
    teams_link: Optional[str] = None
    required_mentor_count: Optional[int] = Field(default=None, ge=1)
    staff_members: Optional[list[str]] = None


class UpdateEventRequest(BaseModel):
    """Update event request."""

    actor: Actor
    event_id: str  # UUID string
    changes: EventChanges


class UpdateEventUseCase:
    """Use case for editing an event's schedule, capacity or staff."""

    def __init__(
        self, event_service: EventService, permission_service: PermissionService
    ) -> None:
        self.event_service = event_service
        self.permission_service = permission_service

    async def execute(self, request: UpdateEventRequest) -> EventResponse:
        """Execute update event flow.

        Raises:
            PermissionDeniedError: If the actor may not edit this event
            NotFoundError: If the event does not exist
            ValidationError: If a value is invalid
            StaleWriteError: If the event changed concurrently
        """
        changes = request.changes.model_dump(exclude_unset=True)
        if "staff_members" in changes and changes["staff_members"] is not None:
            changes["staff_members"] = [
                StaffId(UUID(s)) for s in changes["staff_members"]
            ]

        event = await self.event_service.update_event(
            request.actor, EventId(UUID(request.event_id)), changes
        )

        return EventResponse.from_event(event, request.actor, self.permission_service)
