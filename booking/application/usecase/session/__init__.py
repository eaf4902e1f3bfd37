"""Session use cases."""

from .get_session import GetSessionRequest, GetSessionResponse, GetSessionUseCase
from .resolve_actor import ResolveActorRequest, ResolveActorUseCase

__all__ = [
    "GetSessionRequest",
    "GetSessionResponse",
    "GetSessionUseCase",
    "ResolveActorRequest",
    "ResolveActorUseCase",
]
