"""Mentor membership of an event."""

from typing import Optional

from pydantic import model_validator

from booking.domain.value.common import ValueObject
from booking.domain.value.identifiers import MentorId
from booking.domain.value.types import MembershipSet


class Membership(ValueObject):
    """Snapshot of the requesting, accepted and declined mentor sets.

    Order is preserved (arrival order); a mentor id appears in at most one
    of the three sets.
    """

    requesting: tuple[MentorId, ...] = ()
    accepted: tuple[MentorId, ...] = ()
    declined: tuple[MentorId, ...] = ()

    @model_validator(mode="after")
    def validate_disjoint(self) -> "Membership":
        """Reject duplicates within or across sets."""
        seen: set[MentorId] = set()
        for mentor_id in (*self.requesting, *self.accepted, *self.declined):
            if mentor_id in seen:
                raise ValueError(
                    f"Mentor {mentor_id} appears more than once in event membership"
                )
            seen.add(mentor_id)
        return self

    def set_of(self, mentor_id: MentorId) -> Optional[MembershipSet]:
        """Return which set holds the mentor, or None."""
        if mentor_id in self.requesting:
            return MembershipSet.REQUESTING
        if mentor_id in self.accepted:
            return MembershipSet.ACCEPTED
        if mentor_id in self.declined:
            return MembershipSet.DECLINED
        return None

    def contains(self, mentor_id: MentorId) -> bool:
        return self.set_of(mentor_id) is not None

    def move(
        self, mentor_id: MentorId, target: Optional[MembershipSet]
    ) -> "Membership":
        """Return a new membership with the mentor moved to target.

        A target of None removes the mentor from every set.
        """
        sets = {
            MembershipSet.REQUESTING: [m for m in self.requesting if m != mentor_id],
            MembershipSet.ACCEPTED: [m for m in self.accepted if m != mentor_id],
            MembershipSet.DECLINED: [m for m in self.declined if m != mentor_id],
        }
        if target is not None:
            sets[target].append(mentor_id)
        return Membership(
            requesting=tuple(sets[MembershipSet.REQUESTING]),
            accepted=tuple(sets[MembershipSet.ACCEPTED]),
            declined=tuple(sets[MembershipSet.DECLINED]),
        )

    def as_columns(self) -> dict[str, list[MentorId]]:
        """Complete replacement arrays keyed by column name."""
        return {
            MembershipSet.REQUESTING.value: list(self.requesting),
            MembershipSet.ACCEPTED.value: list(self.accepted),
            MembershipSet.DECLINED.value: list(self.declined),
        }
