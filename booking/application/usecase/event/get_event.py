"""Get event use case."""

from uuid import UUID

from pydantic import BaseModel

from booking.domain.error import NotFoundError
from booking.domain.model import Actor
from booking.domain.service import EventService, PermissionService
from booking.domain.value import EventId

from .response import EventResponse


class GetEventRequest(BaseModel):
    """Get event request."""

    actor: Actor
    event_id: str  # UUID string


class GetEventUseCase:
    """Use case for fetching a single event."""

    def __init__(
        self, event_service: EventService, permission_service: PermissionService
    ) -> None:
        self.event_service = event_service
        self.permission_service = permission_service

    async def execute(self, request: GetEventRequest) -> EventResponse:
        """Execute get event flow.

        Events a mentor may not see are reported as missing.

        Raises:
            NotFoundError: If the event does not exist or is hidden
        """
        event = await self.event_service.get_event(EventId(UUID(request.event_id)))

        if not self.permission_service.can_mentor_view_event(event, request.actor):
            raise NotFoundError("Event", request.event_id)

        return EventResponse.from_event(event, request.actor, self.permission_service)
