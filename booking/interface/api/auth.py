"""Bearer token handling for API routes."""

from typing import Optional

from booking.application.usecase.session import (
    ResolveActorRequest,
    ResolveActorUseCase,
)
from booking.domain.error import PermissionDeniedError
from booking.domain.model import Actor
from booking.interface.error import AuthenticationError

ACTIVE_ROLE_HEADER = "X-Active-Role"


def bearer_token(authorization: Optional[str]) -> str:
    """Extract the token from an ``Authorization: Bearer`` header.

    Raises:
        AuthenticationError: If the header is missing or not a bearer token
    """
    if not authorization:
        raise AuthenticationError("Authentication required")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("Bearer token required")
    return token.strip()


async def current_actor(
    use_case: ResolveActorUseCase,
    authorization: Optional[str],
    active_role: Optional[str],
    require_access: bool = True,
) -> Actor:
    """Resolve the caller, applying the requested active role.

    Args:
        use_case: Resolve actor use case
        authorization: Authorization header value
        active_role: X-Active-Role header value
        require_access: Reject actors without any recognised role

    Raises:
        AuthenticationError: If no usable token was sent
        JWTError: If the token is invalid
        PermissionDeniedError: If the role may not be activated or the actor
            has no access
    """
    actor = await use_case.execute(
        ResolveActorRequest(token=bearer_token(authorization), active_role=active_role)
    )
    if require_access and not actor.has_access:
        raise PermissionDeniedError(
            capability="access", actor_id=str(actor.id), action="use the booking system"
        )
    return actor
