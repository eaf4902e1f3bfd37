"""Request to join an event use case."""

from uuid import UUID

from pydantic import BaseModel

from booking.application.usecase.event.response import EventResponse
from booking.domain.error import NotFoundError
from booking.domain.model import Actor
from booking.domain.service import EventService, MentorRequestService, PermissionService
from booking.domain.value import EventId


class RequestMentorRequest(BaseModel):
    """Request mentor request; the acting mentor asks to join."""

    actor: Actor
    event_id: str  # UUID string


class RequestMentorUseCase:
    """Use case for a mentor requesting an event."""

    def __init__(
        self,
        mentor_request_service: MentorRequestService,
        event_service: EventService,
        permission_service: PermissionService,
    ) -> None:
        """Initialize request mentor use case.

        Args:
            mentor_request_service: Mentor request protocol
            event_service: Event lookup (visibility check)
            permission_service: Permission evaluator
        """
        self.mentor_request_service = mentor_request_service
        self.event_service = event_service
        self.permission_service = permission_service

    async def execute(self, request: RequestMentorRequest) -> EventResponse:
        """Execute request flow.

        Raises:
            NotFoundError: If the event does not exist or is hidden from the mentor
            NotEligibleError: If the actor may not request the event
        """
        event_id = EventId(UUID(request.event_id))

        # Hidden events answer as missing, the same as reading them
        current = await self.event_service.get_event(event_id)
        if not self.permission_service.can_mentor_view_event(current, request.actor):
            raise NotFoundError("Event", request.event_id)

        event = await self.mentor_request_service.request(request.actor, event_id)
        return EventResponse.from_event(event, request.actor, self.permission_service)
