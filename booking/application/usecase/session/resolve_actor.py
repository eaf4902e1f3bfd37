"""Resolve the acting user of a request."""

from typing import Optional

from pydantic import BaseModel

from booking.domain.error import ValidationError
from booking.domain.model import Actor
from booking.domain.service import IdentityService, PermissionService
from booking.domain.value import Role


class ResolveActorRequest(BaseModel):
    """Resolve actor request."""

    token: str
    active_role: Optional[str] = None  # Role to switch to, if any


class ResolveActorUseCase:
    """Use case turning an identity token and role choice into an actor."""

    def __init__(
        self,
        identity_service: IdentityService,
        permission_service: PermissionService,
    ) -> None:
        """Initialize resolve actor use case.

        Args:
            identity_service: Identity token decoding
            permission_service: Role switch rule
        """
        self.identity_service = identity_service
        self.permission_service = permission_service

    async def execute(self, request: ResolveActorRequest) -> Actor:
        """Execute resolve actor flow.

        Raises:
            JWTError: If the token is invalid
            ValidationError: If the requested role name is unknown
            PermissionDeniedError: If the requested role may not be activated
        """
        actor = self.identity_service.actor_from_token(request.token)

        if request.active_role and request.active_role != actor.active_role.value:
            try:
                role = Role(request.active_role)
            except ValueError:
                raise ValidationError(f"Unknown role: {request.active_role}")
            actor = self.permission_service.switch_role(actor, role)

        return actor
