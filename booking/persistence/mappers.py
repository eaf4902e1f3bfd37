"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand.
A few columns keep the catalog's historical names.
"""

from typing import Any, Dict

from booking.domain.model import Event, Product
from booking.domain.value import (
    EventId,
    EventMode,
    MentorId,
    ProductId,
    StaffId,
)

# Domain field -> column name where they differ
EVENT_COLUMN_NAMES = {"required_mentor_count": "amount_requiredmentors"}


def _mentor_ids(values: Any) -> tuple[MentorId, ...]:
    return tuple(MentorId(value) for value in values or ())


def row_to_event(row: Dict[str, Any]) -> Event:
    """Convert database row to Event domain model.

    Args:
        row: Database row as dict

    Returns:
        Event domain model
    """
    return Event(
        id=EventId(row["id"]),
        company=row["company"],
        description=row.get("description"),
        date=row["date"],
        time=row["time"],
        duration_minutes=row["duration_minutes"],
        mode=EventMode(row["mode"]),
        teams_link=row.get("teams_link"),
        required_mentor_count=row["amount_requiredmentors"],
        requesting_mentors=_mentor_ids(row["requesting_mentors"]),
        accepted_mentors=_mentor_ids(row["accepted_mentors"]),
        declined_mentors=_mentor_ids(row["declined_mentors"]),
        locked=row["locked"],
        staff_members=tuple(StaffId(value) for value in row["staff_members"]),
        product_id=(
            ProductId(row["product_id"]) if row.get("product_id") is not None else None
        ),
        initial_selected_mentors=_mentor_ids(row["initial_selected_mentors"]),
        version=row["version"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def event_to_dict(event: Event) -> Dict[str, Any]:
    """Convert Event domain model to database dict.

    Args:
        event: Event domain model

    Returns:
        Dict suitable for database insertion
    """
    # end_time is computed on the model and stored alongside its inputs
    return event_changes_to_columns(event.model_dump(exclude={"status"}))


def event_changes_to_columns(changes: Dict[str, Any]) -> Dict[str, Any]:
    """Rename domain fields to column names and normalise values.

    Args:
        changes: Partial event field values

    Returns:
        Column values
    """
    columns: Dict[str, Any] = {}
    for field, value in changes.items():
        if isinstance(value, tuple):
            value = list(value)
        elif isinstance(value, EventMode):
            value = value.value
        columns[EVENT_COLUMN_NAMES.get(field, field)] = value
    return columns


def row_to_product(row: Dict[str, Any]) -> Product:
    """Convert database row to Product domain model.

    Args:
        row: Database row as dict

    Returns:
        Product domain model
    """
    return Product(
        id=ProductId(row["id"]),
        title=row["title"],
        description=row.get("description"),
        approved_mentors=_mentor_ids(row["approved_mentors"]),
        required_traits=tuple(row["required_traits"] or ()),
        min_mentor_count=row["min_amount_mentors"],
        max_mentor_count=row.get("max_amount_mentors"),
        is_mentor_product=row["is_mentor_product"],
    )


def product_to_dict(product: Product) -> Dict[str, Any]:
    """Convert Product domain model to database dict.

    Args:
        product: Product domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "id": product.id,
        "title": product.title,
        "description": product.description,
        "approved_mentors": list(product.approved_mentors),
        "required_traits": list(product.required_traits),
        "min_amount_mentors": product.min_mentor_count,
        "max_amount_mentors": product.max_mentor_count,
        "is_mentor_product": product.is_mentor_product,
    }
