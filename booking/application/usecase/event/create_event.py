"""Create event use case."""

import datetime as dt
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from booking.domain.model import Actor
from booking.domain.service import EventService, PermissionService
from booking.domain.value import EventMode, ProductId, StaffId

from .response import EventResponse


class CreateEventRequest(BaseModel):
    """Create event request."""

    actor: Actor
    company: str
    date: dt.date
    time: dt.time
    duration_minutes: Optional[int] = None
    mode: EventMode = EventMode.LIVE
    description: Optional[str] = None
    teams_link: Optional[str] = None
    required_mentor_count: Optional[int] = Field(default=None, ge=1)
    staff_members: Optional[list[str]] = None  # UUID strings, defaults to the actor
    product_id: Optional[int] = None


class CreateEventUseCase:
    """Use case for creating an event."""

    def __init__(
        self, event_service: EventService, permission_service: PermissionService
    ) -> None:
        """Initialize create event use case.

        Args:
            event_service: Event domain service
            permission_service: Permission evaluator
        """
        self.event_service = event_service
        self.permission_service = permission_service

    async def execute(self, request: CreateEventRequest) -> EventResponse:
        """Execute create event flow.

        Raises:
            PermissionDeniedError: If the actor may not create events
            NotFoundError: If the product does not exist
            ValidationError: If the event data is invalid
        """
        staff_members = (
            [StaffId(UUID(s)) for s in request.staff_members]
            if request.staff_members
            else None
        )

        event = await self.event_service.create_event(
            request.actor,
            company=request.company,
            date=request.date,
            time=request.time,
            duration_minutes=request.duration_minutes,
            mode=request.mode,
            description=request.description,
            teams_link=request.teams_link,
            required_mentor_count=request.required_mentor_count,
            staff_members=staff_members,
            product_id=(
                ProductId(request.product_id)
                if request.product_id is not None
                else None
            ),
        )

        return EventResponse.from_event(event, request.actor, self.permission_service)
