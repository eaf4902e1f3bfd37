"""Identity token utilities.

Tokens are issued by the external identity provider. The booking engine only
verifies them; ``create_token`` exists for tests and local tooling.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from pydantic import BaseModel

from booking.config import AuthSettings


class IdentityClaims(BaseModel):
    """Decoded identity token claims."""

    sub: str
    roles: list[str] = []
    name: Optional[str] = None
    exp: Optional[datetime] = None


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(
    user_id: str,
    roles: list[str],
    settings: AuthSettings,
    name: Optional[str] = None,
) -> str:
    """Create an identity token.

    Args:
        user_id: Subject of the token
        roles: Role names placed in the configured roles claim
        settings: Authentication settings
        name: Optional display name

    Returns:
        Encoded JWT token
    """
    expiry = datetime.now(timezone.utc) + timedelta(
        minutes=settings.jwt_expiry_minutes
    )

    payload = {
        "sub": user_id,
        settings.roles_claim: roles,
        "exp": expiry,
    }
    if name:
        payload["name"] = name
    if settings.jwt_audience:
        payload["aud"] = settings.jwt_audience

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> IdentityClaims:
    """Verify and decode an identity token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Identity claims if valid

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")

    roles = payload.get(settings.roles_claim) or []
    if isinstance(roles, str):
        roles = [roles]

    return IdentityClaims(
        sub=str(payload["sub"]),
        roles=[str(role) for role in roles],
        name=payload.get("name"),
        exp=payload.get("exp"),
    )
