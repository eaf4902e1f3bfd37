"""Event aggregate root.

An event is a time-boxed engagement that needs a number of mentors. Staff
own it; mentors join it only through the request protocol.
"""

from datetime import date as date_
from datetime import datetime, time as time_, timedelta
from typing import Optional

from pydantic import Field, computed_field, model_validator

from booking.domain.model.common import DomainModel
from booking.domain.model.status import derive_status
from booking.domain.value import (
    EventId,
    EventMode,
    EventStatus,
    Membership,
    MentorId,
    ProductId,
    StaffId,
)


def compute_end_time(start: time_, duration_minutes: int) -> time_:
    """Return the end time of a slot, wrapping past midnight."""
    start_minutes = start.hour * 60 + start.minute
    end_minutes = (start_minutes + duration_minutes) % (24 * 60)
    return time_(hour=end_minutes // 60, minute=end_minutes % 60)


class Event(DomainModel):
    """Event aggregate root.

    The three membership tuples are disjoint. ``status`` and ``end_time`` are
    derived on every access and cannot be set.
    """

    id: EventId
    company: str = Field(min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=5000)
    date: date_
    time: time_
    duration_minutes: int = Field(default=60, ge=1)
    mode: EventMode = EventMode.LIVE
    teams_link: Optional[str] = None
    required_mentor_count: int = Field(default=1, ge=1)
    requesting_mentors: tuple[MentorId, ...] = ()
    accepted_mentors: tuple[MentorId, ...] = ()
    declined_mentors: tuple[MentorId, ...] = ()
    locked: bool = False
    staff_members: tuple[StaffId, ...] = Field(min_length=1)
    product_id: Optional[ProductId] = None
    initial_selected_mentors: tuple[MentorId, ...] = ()
    version: int = Field(default=1, ge=1)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def validate_membership_partition(self) -> "Event":
        """A mentor may sit in only one membership set."""
        # Membership raises on overlap
        self.membership
        return self

    @computed_field
    @property
    def end_time(self) -> time_:
        """Start time plus duration."""
        return compute_end_time(self.time, self.duration_minutes)

    @computed_field
    @property
    def status(self) -> EventStatus:
        """Derived booking status."""
        return derive_status(
            locked=self.locked,
            accepted_count=len(self.accepted_mentors),
            requesting_count=len(self.requesting_mentors),
            required_mentor_count=self.required_mentor_count,
        )

    @property
    def membership(self) -> Membership:
        return Membership(
            requesting=self.requesting_mentors,
            accepted=self.accepted_mentors,
            declined=self.declined_mentors,
        )

    @property
    def primary_staff_id(self) -> StaffId:
        """Staff member shown as the event's contact."""
        return self.staff_members[0]

    @property
    def starts_at(self) -> datetime:
        return datetime.combine(self.date, self.time)

    @property
    def ends_at(self) -> datetime:
        return self.starts_at + timedelta(minutes=self.duration_minutes)

    @property
    def is_full(self) -> bool:
        return len(self.accepted_mentors) >= self.required_mentor_count

    def is_in_past(self, now: Optional[datetime] = None) -> bool:
        """Whether the event has already started.

        Args:
            now: Reference time (defaults to the current local time)
        """
        return self.starts_at < (now or datetime.now())

    def with_membership(self, membership: Membership) -> "Event":
        """Return a copy carrying the given membership sets."""
        return self.model_copy(
            update={
                "requesting_mentors": membership.requesting,
                "accepted_mentors": membership.accepted,
                "declined_mentors": membership.declined,
            }
        )
