"""Accept, decline and assign use cases.

All three act on another mentor's membership and need the assign-mentors
capability.
"""

from enum import Enum
from uuid import UUID

from pydantic import BaseModel

from booking.application.usecase.base import BaseUseCase
from booking.application.usecase.event.response import EventResponse
from booking.domain.model import Actor
from booking.domain.service import MentorRequestService, PermissionService
from booking.domain.value import EventId, MentorId


class MentorDecision(str, Enum):
    """What to do with a mentor."""

    ACCEPT = "accept"
    DECLINE = "decline"
    ASSIGN = "assign"


class DecideRequestRequest(BaseModel):
    """Decide request request."""

    actor: Actor
    event_id: str  # UUID string
    mentor_id: str  # UUID string
    decision: MentorDecision


class DecideRequestUseCase(BaseUseCase):
    """Use case for staff decisions on mentor membership."""

    def __init__(
        self,
        mentor_request_service: MentorRequestService,
        permission_service: PermissionService,
    ) -> None:
        """Initialize decide request use case.

        Args:
            mentor_request_service: Mentor request protocol
            permission_service: Permission evaluator
        """
        self.mentor_request_service = mentor_request_service
        self.permission_service = permission_service

    async def execute(self, request: DecideRequestRequest) -> EventResponse:
        """Execute the decision.

        Raises:
            PermissionDeniedError: If the actor may not assign mentors
            NotFoundError: If the event does not exist
            NotEligibleError: If the mentor's current membership forbids it
        """
        event_id = EventId(UUID(request.event_id))
        mentor_id = MentorId(UUID(request.mentor_id))

        if request.decision == MentorDecision.ACCEPT:
            event = await self.mentor_request_service.accept(
                request.actor, event_id, mentor_id
            )
        elif request.decision == MentorDecision.DECLINE:
            event = await self.mentor_request_service.decline(
                request.actor, event_id, mentor_id
            )
        else:  # MentorDecision.ASSIGN
            event = await self.mentor_request_service.assign(
                request.actor, event_id, mentor_id
            )

        return EventResponse.from_event(event, request.actor, self.permission_service)
