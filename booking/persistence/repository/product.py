"""PostgreSQL implementation of Product repository."""

from typing import List, Optional

import logfire
from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from booking.domain.error import RemoteWriteError
from booking.domain.model import Product
from booking.domain.repository.product import ProductRepository
from booking.domain.value import ProductId
from booking.persistence.mappers import product_to_dict, row_to_product
from booking.persistence.tables import products_table


class PostgresProductRepository(ProductRepository):
    """PostgreSQL implementation of ProductRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, product_id: ProductId) -> Optional[Product]:
        """Find a product by ID."""
        with logfire.span("product_repository.find_by_id", product_id=product_id):
            stmt = select(products_table).where(products_table.c.id == product_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()

            if not row:
                logfire.warn("Product not found", product_id=product_id)
                return None

            return row_to_product(row._asdict())

    async def find_all(self) -> List[Product]:
        """Return all products ordered by ID."""
        with logfire.span("product_repository.find_all"):
            stmt = select(products_table).order_by(products_table.c.id)
            result = await self.session.execute(stmt)
            return [row_to_product(row._asdict()) for row in result.fetchall()]

    async def save(self, product: Product) -> Product:
        """Create or replace a product."""
        with logfire.span("product_repository.save", product_id=product.id):
            values = product_to_dict(product)
            stmt = (
                insert(products_table)
                .values(**values)
                .on_conflict_do_update(
                    index_elements=[products_table.c.id],
                    set_={k: v for k, v in values.items() if k != "id"},
                )
                .returning(products_table)
            )
            try:
                result = await self.session.execute(stmt)
            except SQLAlchemyError as e:
                logfire.error("Product save failed", product_id=product.id, error=str(e))
                raise RemoteWriteError("product save", str(e)) from e

            return row_to_product(result.fetchone()._asdict())
