"""Domain services."""

from .base import Service
from .change_feed import (
    ChangeFeed,
    ChangeHandler,
    ChangeKind,
    ChangeNotification,
    ChangeOutbox,
    Subscription,
)
from .event_query import EventQueryService, Involvement
from .event_service import EventService
from .identity_service import IdentityService
from .mentor_request_service import MentorRequestService
from .permission_service import CAPABILITY_TABLE, PermissionService

__all__ = [
    "CAPABILITY_TABLE",
    "ChangeFeed",
    "ChangeHandler",
    "ChangeKind",
    "ChangeNotification",
    "ChangeOutbox",
    "EventQueryService",
    "EventService",
    "IdentityService",
    "Involvement",
    "MentorRequestService",
    "PermissionService",
    "Service",
    "Subscription",
]
