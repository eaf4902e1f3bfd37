"""Withdraw a pending request use case."""

from uuid import UUID

from pydantic import BaseModel

from booking.application.usecase.event.response import EventResponse
from booking.domain.model import Actor
from booking.domain.service import MentorRequestService, PermissionService
from booking.domain.value import EventId


class WithdrawRequestRequest(BaseModel):
    """Withdraw request request."""

    actor: Actor
    event_id: str  # UUID string


class WithdrawRequestUseCase:
    """Use case for a mentor withdrawing their pending request."""

    def __init__(
        self,
        mentor_request_service: MentorRequestService,
        permission_service: PermissionService,
    ) -> None:
        self.mentor_request_service = mentor_request_service
        self.permission_service = permission_service

    async def execute(self, request: WithdrawRequestRequest) -> EventResponse:
        event = await self.mentor_request_service.withdraw(
            request.actor, EventId(UUID(request.event_id))
        )
        return EventResponse.from_event(event, request.actor, self.permission_service)
