"""Repository interfaces for the booking domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from booking.domain.repository.event import EventRepository
from booking.domain.repository.product import ProductRepository

__all__ = [
    "EventRepository",
    "ProductRepository",
]
