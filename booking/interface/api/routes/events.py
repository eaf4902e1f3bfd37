"""Event routes."""

import datetime as dt
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, Query, status
from pydantic import BaseModel, Field

from booking.application.usecase.event import (
    CreateEventRequest,
    CreateEventUseCase,
    DeleteEventRequest,
    DeleteEventResponse,
    DeleteEventUseCase,
    EventChanges,
    EventResponse,
    GetEventRequest,
    GetEventUseCase,
    ListEventsRequest,
    ListEventsResponse,
    ListEventsUseCase,
    SetEventLockRequest,
    SetEventLockUseCase,
    UpdateEventRequest,
    UpdateEventUseCase,
)
from booking.application.usecase.session import ResolveActorUseCase
from booking.domain.value import EventMode, StatusFilter, ViewMode
from booking.interface.api.auth import current_actor

router = APIRouter(prefix="/events", tags=["events"], route_class=DishkaRoute)


class CreateEventAPIRequest(BaseModel):
    """API request for creating an event."""

    company: str = Field(min_length=1, max_length=255)
    date: dt.date
    time: dt.time
    duration_minutes: int | None = Field(default=None, ge=1)
    mode: EventMode = EventMode.LIVE
    description: str | None = Field(default=None, max_length=5000)
    teams_link: str | None = None
    required_mentor_count: int | None = Field(default=None, ge=1)
    staff_members: list[str] | None = None
    product_id: int | None = None


@router.get("", response_model=ListEventsResponse)
async def list_events(
    list_events_use_case: FromDishka[ListEventsUseCase],
    resolve_actor_use_case: FromDishka[ResolveActorUseCase],
    view: ViewMode = ViewMode.ALL,
    status_filter: StatusFilter | None = Query(default=None, alias="status"),
    search: str | None = None,
    authorization: str | None = Header(default=None),
    x_active_role: str | None = Header(default=None),
) -> ListEventsResponse:
    """List events from the caller's perspective.

    Args:
        view: all, my, staff or past
        status_filter: Status to match, or needsMentors (``?status=``)
        search: Text matched against company and description
    """
    actor = await current_actor(resolve_actor_use_case, authorization, x_active_role)
    return await list_events_use_case.execute(
        ListEventsRequest(actor=actor, view=view, status=status_filter, search=search)
    )


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    request: CreateEventAPIRequest,
    create_event_use_case: FromDishka[CreateEventUseCase],
    resolve_actor_use_case: FromDishka[ResolveActorUseCase],
    authorization: str | None = Header(default=None),
    x_active_role: str | None = Header(default=None),
) -> EventResponse:
    """Create an event. Staff-level roles only."""
    actor = await current_actor(resolve_actor_use_case, authorization, x_active_role)
    return await create_event_use_case.execute(
        CreateEventRequest(actor=actor, **request.model_dump())
    )


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: UUID,
    get_event_use_case: FromDishka[GetEventUseCase],
    resolve_actor_use_case: FromDishka[ResolveActorUseCase],
    authorization: str | None = Header(default=None),
    x_active_role: str | None = Header(default=None),
) -> EventResponse:
    actor = await current_actor(resolve_actor_use_case, authorization, x_active_role)
    return await get_event_use_case.execute(
        GetEventRequest(actor=actor, event_id=str(event_id))
    )


@router.patch("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: UUID,
    changes: EventChanges,
    update_event_use_case: FromDishka[UpdateEventUseCase],
    resolve_actor_use_case: FromDishka[ResolveActorUseCase],
    authorization: str | None = Header(default=None),
    x_active_role: str | None = Header(default=None),
) -> EventResponse:
    """Edit an event. Only the fields present in the body change."""
    actor = await current_actor(resolve_actor_use_case, authorization, x_active_role)
    return await update_event_use_case.execute(
        UpdateEventRequest(actor=actor, event_id=str(event_id), changes=changes)
    )


@router.delete("/{event_id}", response_model=DeleteEventResponse)
async def delete_event(
    event_id: UUID,
    delete_event_use_case: FromDishka[DeleteEventUseCase],
    resolve_actor_use_case: FromDishka[ResolveActorUseCase],
    authorization: str | None = Header(default=None),
    x_active_role: str | None = Header(default=None),
) -> DeleteEventResponse:
    actor = await current_actor(resolve_actor_use_case, authorization, x_active_role)
    return await delete_event_use_case.execute(
        DeleteEventRequest(actor=actor, event_id=str(event_id))
    )


@router.post("/{event_id}/lock", response_model=EventResponse)
async def lock_event(
    event_id: UUID,
    set_event_lock_use_case: FromDishka[SetEventLockUseCase],
    resolve_actor_use_case: FromDishka[ResolveActorUseCase],
    authorization: str | None = Header(default=None),
    x_active_role: str | None = Header(default=None),
) -> EventResponse:
    """Lock an event, freezing its status."""
    actor = await current_actor(resolve_actor_use_case, authorization, x_active_role)
    return await set_event_lock_use_case.execute(
        SetEventLockRequest(actor=actor, event_id=str(event_id), locked=True)
    )


@router.delete("/{event_id}/lock", response_model=EventResponse)
async def unlock_event(
    event_id: UUID,
    set_event_lock_use_case: FromDishka[SetEventLockUseCase],
    resolve_actor_use_case: FromDishka[ResolveActorUseCase],
    authorization: str | None = Header(default=None),
    x_active_role: str | None = Header(default=None),
) -> EventResponse:
    actor = await current_actor(resolve_actor_use_case, authorization, x_active_role)
    return await set_event_lock_use_case.execute(
        SetEventLockRequest(actor=actor, event_id=str(event_id), locked=False)
    )
