"""Client-side synchronization over the booking engine."""

from .event_store import EventLoader, EventStore
from .invalidator import RealtimeInvalidator
from .session import BookingSession

__all__ = [
    "BookingSession",
    "EventLoader",
    "EventStore",
    "RealtimeInvalidator",
]
