"""Lock and unlock event use case."""

from uuid import UUID

from pydantic import BaseModel

from booking.domain.model import Actor
from booking.domain.service import EventService, PermissionService
from booking.domain.value import EventId

from .response import EventResponse


class SetEventLockRequest(BaseModel):
    """Set event lock request."""

    actor: Actor
    event_id: str  # UUID string
    locked: bool


class SetEventLockUseCase:
    """Use case for locking or unlocking an event."""

    def __init__(
        self, event_service: EventService, permission_service: PermissionService
    ) -> None:
        self.event_service = event_service
        self.permission_service = permission_service

    async def execute(self, request: SetEventLockRequest) -> EventResponse:
        event = await self.event_service.set_lock(
            request.actor, EventId(UUID(request.event_id)), request.locked
        )
        return EventResponse.from_event(event, request.actor, self.permission_service)
