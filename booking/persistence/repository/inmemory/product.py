"""In-memory product repository for testing."""

from typing import Optional

from booking.domain.model import Product
from booking.domain.repository.product import ProductRepository
from booking.domain.value import ProductId


class InMemoryProductRepository(ProductRepository):
    """In-memory implementation of ProductRepository for testing."""

    def __init__(self) -> None:
        self._products: dict[ProductId, Product] = {}

    async def find_by_id(self, product_id: ProductId) -> Optional[Product]:
        """Find a product by ID."""
        return self._products.get(product_id)

    async def find_all(self) -> list[Product]:
        """Return all products ordered by ID."""
        return [self._products[k] for k in sorted(self._products)]

    async def save(self, product: Product) -> Product:
        """Create or replace a product."""
        self._products[product.id] = product
        return product
