"""In-memory repository implementations for testing."""

from .event import InMemoryEventRepository
from .product import InMemoryProductRepository

__all__ = [
    "InMemoryEventRepository",
    "InMemoryProductRepository",
]
