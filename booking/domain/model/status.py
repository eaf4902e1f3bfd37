"""Event status derivation.

Status is a projection of the lock flag and the membership sets. It is never
stored as authoritative state; every reader recomputes it.
"""

from booking.domain.value import EventStatus


def derive_status(
    locked: bool,
    accepted_count: int,
    requesting_count: int,
    required_mentor_count: int,
) -> EventStatus:
    """Derive the booking status of an event.

    The checks run in a fixed order: lock, completeness, partial success,
    pending requests. An event with both accepted and requesting mentors is
    therefore never reported as FIRST_REQUESTS.

    Args:
        locked: Explicit lock flag
        accepted_count: Number of accepted mentors
        requesting_count: Number of pending requests
        required_mentor_count: Mentors needed to fill the event

    Returns:
        The derived status
    """
    if locked:
        return EventStatus.LOCKED
    if accepted_count >= required_mentor_count:
        return EventStatus.SUCCESS_COMPLETE
    if accepted_count > 0:
        return EventStatus.SUCCESS_PARTLY
    if requesting_count > 0:
        return EventStatus.FIRST_REQUESTS
    return EventStatus.NEW
