"""Delete event use case."""

from uuid import UUID

from pydantic import BaseModel

from booking.domain.model import Actor
from booking.domain.service import EventService
from booking.domain.value import EventId


class DeleteEventRequest(BaseModel):
    """Delete event request."""

    actor: Actor
    event_id: str  # UUID string


class DeleteEventResponse(BaseModel):
    """Delete event response."""

    event_id: str
    deleted: bool


class DeleteEventUseCase:
    """Use case for deleting an event."""

    def __init__(self, event_service: EventService) -> None:
        """Initialize delete event use case.

        Args:
            event_service: Event domain service
        """
        self.event_service = event_service

    async def execute(self, request: DeleteEventRequest) -> DeleteEventResponse:
        """Execute delete event flow.

        Raises:
            PermissionDeniedError: If the actor may not delete this event
            NotFoundError: If the event does not exist
        """
        await self.event_service.delete_event(
            request.actor, EventId(UUID(request.event_id))
        )
        return DeleteEventResponse(event_id=request.event_id, deleted=True)
