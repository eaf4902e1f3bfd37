"""Domain value objects for mentor booking.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum

from booking.domain.value.common import ValueObject


class EventStatus(str, Enum):
    """Booking state of an event, always derived from its membership."""

    NEW = "new"
    FIRST_REQUESTS = "firstRequests"
    SUCCESS_PARTLY = "successPartly"
    SUCCESS_COMPLETE = "successComplete"
    LOCKED = "locked"


class EventMode(str, Enum):
    """Where an event takes place."""

    LIVE = "live"
    ONLINE = "online"
    HYBRID = "hybrid"


class Role(str, Enum):
    """Role an actor can hold or activate.

    GUEST is never held; it is the active role of an actor without any
    recognised role and grants nothing.
    """

    GUEST = "guest"
    MENTOR = "mentor"
    STAFF = "staff"
    MENTORING_MANAGEMENT = "mentoring-management"
    SUPER_ADMIN = "super-admin"

    @classmethod
    def _missing_(cls, value):
        # Identity provider spells it without the hyphen
        if value == "mentoringmanagement":
            return cls.MENTORING_MANAGEMENT
        return None

    @classmethod
    def assignable(cls) -> tuple["Role", ...]:
        """Roles that can be held, in activation priority order."""
        return (cls.SUPER_ADMIN, cls.STAFF, cls.MENTORING_MANAGEMENT, cls.MENTOR)


class MembershipSet(str, Enum):
    """The three mutually exclusive mentor sets of an event."""

    REQUESTING = "requesting_mentors"
    ACCEPTED = "accepted_mentors"
    DECLINED = "declined_mentors"


class IneligibilityReason(str, Enum):
    """Why a mentor operation was rejected."""

    NOT_A_MENTOR = "not-a-mentor"
    ALREADY_REQUESTED = "already-requested"
    ALREADY_ACCEPTED = "already-accepted"
    ALREADY_DECLINED = "already-declined"
    EVENT_FULL = "event-full"
    EVENT_IN_PAST = "event-in-past"
    NOT_REQUESTING = "not-requesting"

    @property
    def message(self) -> str:
        """User-facing explanation."""
        return _INELIGIBILITY_MESSAGES[self]


_INELIGIBILITY_MESSAGES = {
    IneligibilityReason.NOT_A_MENTOR: "Only mentors can request to join events",
    IneligibilityReason.ALREADY_REQUESTED: "Mentor has already requested this event",
    IneligibilityReason.ALREADY_ACCEPTED: "Mentor is already accepted for this event",
    IneligibilityReason.ALREADY_DECLINED: "Mentor was declined for this event",
    IneligibilityReason.EVENT_FULL: "Event already has all required mentors",
    IneligibilityReason.EVENT_IN_PAST: "Event has already taken place",
    IneligibilityReason.NOT_REQUESTING: "Mentor has no pending request for this event",
}


class ViewMode(str, Enum):
    """Event list perspective."""

    ALL = "all"
    MY = "my"  # Events the mentor takes part in
    STAFF = "staff"  # Events the staff member is assigned to
    PAST = "past"


class StatusFilter(str, Enum):
    """Status filter for event lists.

    Mirrors EventStatus plus NEEDS_MENTORS, which matches any open event
    that still has free capacity.
    """

    NEW = "new"
    FIRST_REQUESTS = "firstRequests"
    SUCCESS_PARTLY = "successPartly"
    SUCCESS_COMPLETE = "successComplete"
    LOCKED = "locked"
    NEEDS_MENTORS = "needsMentors"


class Capabilities(ValueObject):
    """Permission bits granted by an active role.

    Computed once per role, independent of any particular event.
    """

    can_create_events: bool = False
    can_edit_events: bool = False
    can_delete_events: bool = False
    can_manage_products: bool = False
    can_view_pending_requests: bool = False
    can_process_mentor_requests: bool = False
    can_view_mentor_profiles: bool = False
    can_view_staff_profiles: bool = False
    can_access_administration: bool = False
    can_manage_traits: bool = False
    can_manage_mentors: bool = False
    can_view_all_profiles: bool = False
    can_edit_any_profile: bool = False
    can_edit_username: bool = False
    can_view_admin_data: bool = False
    can_manage_accounts: bool = False
    can_assign_mentors: bool = False
    can_edit_own_profile: bool = False

    def granted(self) -> list[str]:
        """Names of the capabilities that are set."""
        return [name for name, value in self.model_dump().items() if value]
