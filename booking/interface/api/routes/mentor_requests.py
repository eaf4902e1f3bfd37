"""Mentor request routes.

Mentors request and withdraw for themselves. Accept, decline and assign act
on another mentor and are addressed by mentor id.
"""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header

from booking.application.usecase.event import EventResponse
from booking.application.usecase.request import (
    DecideRequestRequest,
    DecideRequestUseCase,
    MentorDecision,
    RequestMentorRequest,
    RequestMentorUseCase,
    WithdrawRequestRequest,
    WithdrawRequestUseCase,
)
from booking.application.usecase.session import ResolveActorUseCase
from booking.interface.api.auth import current_actor

router = APIRouter(prefix="/events", tags=["requests"], route_class=DishkaRoute)


@router.post("/{event_id}/requests", response_model=EventResponse)
async def request_event(
    event_id: UUID,
    request_mentor_use_case: FromDishka[RequestMentorUseCase],
    resolve_actor_use_case: FromDishka[ResolveActorUseCase],
    authorization: str | None = Header(default=None),
    x_active_role: str | None = Header(default=None),
) -> EventResponse:
    """Ask to mentor at an event.

    Returns:
        The event with the caller among the requesting mentors
    """
    actor = await current_actor(resolve_actor_use_case, authorization, x_active_role)
    return await request_mentor_use_case.execute(
        RequestMentorRequest(actor=actor, event_id=str(event_id))
    )


@router.delete("/{event_id}/requests", response_model=EventResponse)
async def withdraw_request(
    event_id: UUID,
    withdraw_request_use_case: FromDishka[WithdrawRequestUseCase],
    resolve_actor_use_case: FromDishka[ResolveActorUseCase],
    authorization: str | None = Header(default=None),
    x_active_role: str | None = Header(default=None),
) -> EventResponse:
    """Withdraw the caller's pending request."""
    actor = await current_actor(resolve_actor_use_case, authorization, x_active_role)
    return await withdraw_request_use_case.execute(
        WithdrawRequestRequest(actor=actor, event_id=str(event_id))
    )


async def _decide(
    use_case: DecideRequestUseCase,
    resolve_actor_use_case: ResolveActorUseCase,
    event_id: UUID,
    mentor_id: UUID,
    decision: MentorDecision,
    authorization: str | None,
    x_active_role: str | None,
) -> EventResponse:
    actor = await current_actor(resolve_actor_use_case, authorization, x_active_role)
    return await use_case.execute(
        DecideRequestRequest(
            actor=actor,
            event_id=str(event_id),
            mentor_id=str(mentor_id),
            decision=decision,
        )
    )


@router.post("/{event_id}/mentors/{mentor_id}/accept", response_model=EventResponse)
async def accept_mentor(
    event_id: UUID,
    mentor_id: UUID,
    decide_request_use_case: FromDishka[DecideRequestUseCase],
    resolve_actor_use_case: FromDishka[ResolveActorUseCase],
    authorization: str | None = Header(default=None),
    x_active_role: str | None = Header(default=None),
) -> EventResponse:
    """Move a requesting mentor to accepted."""
    return await _decide(
        decide_request_use_case,
        resolve_actor_use_case,
        event_id,
        mentor_id,
        MentorDecision.ACCEPT,
        authorization,
        x_active_role,
    )


@router.post("/{event_id}/mentors/{mentor_id}/decline", response_model=EventResponse)
async def decline_mentor(
    event_id: UUID,
    mentor_id: UUID,
    decide_request_use_case: FromDishka[DecideRequestUseCase],
    resolve_actor_use_case: FromDishka[ResolveActorUseCase],
    authorization: str | None = Header(default=None),
    x_active_role: str | None = Header(default=None),
) -> EventResponse:
    """Move a requesting mentor to declined."""
    return await _decide(
        decide_request_use_case,
        resolve_actor_use_case,
        event_id,
        mentor_id,
        MentorDecision.DECLINE,
        authorization,
        x_active_role,
    )


@router.post("/{event_id}/mentors/{mentor_id}/assign", response_model=EventResponse)
async def assign_mentor(
    event_id: UUID,
    mentor_id: UUID,
    decide_request_use_case: FromDishka[DecideRequestUseCase],
    resolve_actor_use_case: FromDishka[ResolveActorUseCase],
    authorization: str | None = Header(default=None),
    x_active_role: str | None = Header(default=None),
) -> EventResponse:
    """Put a mentor straight into the accepted set."""
    return await _decide(
        decide_request_use_case,
        resolve_actor_use_case,
        event_id,
        mentor_id,
        MentorDecision.ASSIGN,
        authorization,
        x_active_role,
    )
