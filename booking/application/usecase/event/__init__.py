"""Event use cases."""

from .create_event import CreateEventRequest, CreateEventUseCase
from .delete_event import DeleteEventRequest, DeleteEventResponse, DeleteEventUseCase
from .get_event import GetEventRequest, GetEventUseCase
from .list_events import ListEventsRequest, ListEventsResponse, ListEventsUseCase
from .response import EventResponse, InvolvementResponse
from .set_event_lock import SetEventLockRequest, SetEventLockUseCase
from .update_event import EventChanges, UpdateEventRequest, UpdateEventUseCase

__all__ = [
    "CreateEventRequest",
    "CreateEventUseCase",
    "DeleteEventRequest",
    "DeleteEventResponse",
    "DeleteEventUseCase",
    "EventChanges",
    "EventResponse",
    "GetEventRequest",
    "GetEventUseCase",
    "InvolvementResponse",
    "ListEventsRequest",
    "ListEventsResponse",
    "ListEventsUseCase",
    "SetEventLockRequest",
    "SetEventLockUseCase",
    "UpdateEventRequest",
    "UpdateEventUseCase",
]
