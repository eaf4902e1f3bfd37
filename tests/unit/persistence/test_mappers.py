"""Unit tests for row/model mappers."""

from datetime import datetime, time
from uuid import uuid4

from booking.domain.value import EventMode, MentorId
from booking.persistence.mappers import (
    event_changes_to_columns,
    event_to_dict,
    product_to_dict,
    row_to_event,
    row_to_product,
)
from tests.conftest import make_event, make_product


class TestEventMapping:
    def test_event_to_dict_uses_column_names(self):
        mentor = MentorId(uuid4())
        event = make_event(
            required_mentor_count=3, requesting_mentors=(mentor,), mode=EventMode.HYBRID
        )

        row = event_to_dict(event)

        assert row["amount_requiredmentors"] == 3
        assert "required_mentor_count" not in row
        assert row["requesting_mentors"] == [mentor]
        assert row["mode"] == "hybrid"
        assert row["end_time"] == time(11, 0)
        assert "status" not in row

    def test_row_round_trip(self):
        event = make_event(
            accepted_mentors=(MentorId(uuid4()),),
            initial_selected_mentors=[MentorId(uuid4())],
        )

        restored = row_to_event(event_to_dict(event))

        assert restored == event

    def test_changes_rename_and_normalise(self):
        columns = event_changes_to_columns(
            {"required_mentor_count": 4, "mode": EventMode.ONLINE, "staff_members": ()}
        )

        assert columns == {
            "amount_requiredmentors": 4,
            "mode": "online",
            "staff_members": [],
        }

    def test_null_arrays_read_as_empty(self):
        row = event_to_dict(make_event())
        row["declined_mentors"] = None
        row["updated_at"] = datetime(2026, 1, 1)

        event = row_to_event(row)

        assert event.declined_mentors == ()


class TestProductMapping:
    def test_product_round_trip(self):
        product = make_product(
            product_id=3, approved_mentors=(MentorId(uuid4()),), min_mentor_count=2
        )

        row = product_to_dict(product)

        assert row["min_amount_mentors"] == 2
        assert row_to_product(row) == product
