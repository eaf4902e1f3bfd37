"""Session routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header

from booking.application.usecase.session import (
    GetSessionRequest,
    GetSessionResponse,
    GetSessionUseCase,
    ResolveActorUseCase,
)
from booking.interface.api.auth import current_actor

router = APIRouter(tags=["session"], route_class=DishkaRoute)


@router.get("/me", response_model=GetSessionResponse)
async def get_me(
    resolve_actor_use_case: FromDishka[ResolveActorUseCase],
    get_session_use_case: FromDishka[GetSessionUseCase],
    authorization: str | None = Header(default=None),
    x_active_role: str | None = Header(default=None),
) -> GetSessionResponse:
    """Describe the caller: roles, active role, capabilities.

    Available to actors without access so clients can explain why.
    """
    actor = await current_actor(
        resolve_actor_use_case, authorization, x_active_role, require_access=False
    )
    return await get_session_use_case.execute(GetSessionRequest(actor=actor))
