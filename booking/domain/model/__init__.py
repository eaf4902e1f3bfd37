"""Domain model entities for mentor booking."""

from booking.domain.model.actor import Actor
from booking.domain.model.event import Event, compute_end_time
from booking.domain.model.product import Product
from booking.domain.model.status import derive_status

__all__ = [
    "Actor",
    "Event",
    "Product",
    "compute_end_time",
    "derive_status",
]
