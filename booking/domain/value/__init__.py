"""Domain value objects for mentor booking."""

from booking.domain.value.identifiers import (
    EventId,
    MentorId,
    ProductId,
    StaffId,
    UserId,
)
from booking.domain.value.membership import Membership
from booking.domain.value.types import (
    Capabilities,
    EventMode,
    EventStatus,
    IneligibilityReason,
    MembershipSet,
    Role,
    StatusFilter,
    ViewMode,
)

__all__ = [
    # Identifiers
    "EventId",
    "UserId",
    "MentorId",
    "StaffId",
    "ProductId",
    # Types
    "Capabilities",
    "EventMode",
    "EventStatus",
    "IneligibilityReason",
    "Membership",
    "MembershipSet",
    "Role",
    "StatusFilter",
    "ViewMode",
]
