"""Product repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from booking.domain.model.product import Product
from booking.domain.value import ProductId


class ProductRepository(ABC):
    """Read access to the product catalog.

    ``save`` exists for seeding and tests; the engine never writes products.
    """

    @abstractmethod
    async def find_by_id(self, product_id: ProductId) -> Optional[Product]:
        """Find a product by ID."""
        pass

    @abstractmethod
    async def find_all(self) -> List[Product]:
        """Return all products ordered by ID."""
        pass

    @abstractmethod
    async def save(self, product: Product) -> Product:
        """Create or replace a product."""
        pass
