"""List events use case."""

from typing import Optional

from pydantic import BaseModel

from booking.domain.model import Actor
from booking.domain.service import EventQueryService, EventService, PermissionService
from booking.domain.value import StatusFilter, ViewMode

from .response import EventResponse


class ListEventsRequest(BaseModel):
    """List events request."""

    actor: Actor
    view: ViewMode = ViewMode.ALL
    status: Optional[StatusFilter] = None
    search: Optional[str] = None


class ListEventsResponse(BaseModel):
    """List events response."""

    events: list[EventResponse]
    total: int


class ListEventsUseCase:
    """Use case for listing events from the actor's perspective."""

    def __init__(
        self,
        event_service: EventService,
        event_query_service: EventQueryService,
        permission_service: PermissionService,
    ) -> None:
        """Initialize list events use case.

        Args:
            event_service: Event domain service
            event_query_service: View and filter rules
            permission_service: Permission evaluator
        """
        self.event_service = event_service
        self.event_query_service = event_query_service
        self.permission_service = permission_service

    async def execute(self, request: ListEventsRequest) -> ListEventsResponse:
        """Execute list events flow.

        Args:
            request: View mode, status filter and search text

        Returns:
            Matching events
        """
        events = await self.event_service.list_events()
        selected = self.event_query_service.filter_events(
            events,
            request.actor,
            view=request.view,
            status=request.status,
            search=request.search,
        )

        return ListEventsResponse(
            events=[
                EventResponse.from_event(e, request.actor, self.permission_service)
                for e in selected
            ],
            total=len(selected),
        )
