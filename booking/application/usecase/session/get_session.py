"""Session overview use case."""

from typing import Optional

from pydantic import BaseModel

from booking.domain.model import Actor
from booking.domain.service import PermissionService
from booking.domain.value import Role


class GetSessionRequest(BaseModel):
    """Get session request."""

    actor: Actor


class GetSessionResponse(BaseModel):
    """Who the caller is and what they may do."""

    user_id: str
    display_name: Optional[str]
    held_roles: list[Role]
    original_role: Role
    active_role: Role
    available_roles: list[Role]
    has_access: bool
    capabilities: list[str]


class GetSessionUseCase:
    """Use case describing the caller's session."""

    def __init__(self, permission_service: PermissionService) -> None:
        self.permission_service = permission_service

    async def execute(self, request: GetSessionRequest) -> GetSessionResponse:
        actor = request.actor
        return GetSessionResponse(
            user_id=str(actor.id),
            display_name=actor.display_name,
            held_roles=[r for r in Role.assignable() if r in actor.held_roles],
            original_role=actor.original_role,
            active_role=actor.active_role,
            available_roles=self.permission_service.available_roles(actor),
            has_access=actor.has_access,
            capabilities=self.permission_service.capabilities_for(actor).granted(),
        )
