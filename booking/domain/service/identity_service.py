"""Identity domain service."""

from uuid import UUID

import logfire

from booking.config import AuthSettings
from booking.domain.model import Actor
from booking.domain.value import UserId
from booking.util.jwt import JWTError, verify_token

from .base import Service


class IdentityService(Service):
    """Turns identity tokens into session actors."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize identity service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def actor_from_token(self, token: str) -> Actor:
        """Verify a token and build the actor it describes.

        The held roles are taken from the token as-is.

        Args:
            token: JWT token string

        Returns:
            Actor with its starting role resolved

        Raises:
            JWTError: If token is invalid, expired or its subject is not a UUID
        """
        with logfire.span("identity_service.actor_from_token"):
            try:
                claims = verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.warn("Identity token rejected", error=str(e))
                raise

            try:
                user_id = UserId(UUID(claims.sub))
            except ValueError:
                logfire.warn("Identity token subject is not a UUID", sub=claims.sub)
                raise JWTError("Invalid token subject")

            actor = Actor.from_role_names(
                user_id, claims.roles, display_name=claims.name
            )
            logfire.info(
                "Actor identified",
                actor_id=str(actor.id),
                role=actor.active_role.value,
                has_access=actor.has_access,
            )
            return actor
