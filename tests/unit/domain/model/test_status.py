"""Unit tests for event status derivation."""

import pytest

from booking.domain.model import derive_status
from booking.domain.value import EventStatus


class TestDeriveStatus:
    """Status is a pure function of lock flag and membership counts."""

    @pytest.mark.parametrize(
        ("accepted", "requesting", "required", "expected"),
        [
            (0, 0, 2, EventStatus.NEW),
            (0, 1, 2, EventStatus.FIRST_REQUESTS),
            (1, 0, 2, EventStatus.SUCCESS_PARTLY),
            (1, 3, 2, EventStatus.SUCCESS_PARTLY),
            (2, 0, 2, EventStatus.SUCCESS_COMPLETE),
            (3, 1, 2, EventStatus.SUCCESS_COMPLETE),
        ],
    )
    def test_unlocked_status(self, accepted, requesting, required, expected):
        assert (
            derive_status(
                locked=False,
                accepted_count=accepted,
                requesting_count=requesting,
                required_mentor_count=required,
            )
            is expected
        )

    def test_lock_overrides_membership(self):
        """A locked event reports locked whatever its membership."""
        for accepted, requesting in [(0, 0), (1, 1), (5, 0)]:
            assert (
                derive_status(
                    locked=True,
                    accepted_count=accepted,
                    requesting_count=requesting,
                    required_mentor_count=2,
                )
                is EventStatus.LOCKED
            )
