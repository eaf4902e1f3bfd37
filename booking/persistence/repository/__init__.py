"""PostgreSQL repository implementations."""

from booking.persistence.repository.event import PostgresEventRepository
from booking.persistence.repository.product import PostgresProductRepository

__all__ = [
    "PostgresEventRepository",
    "PostgresProductRepository",
]
