"""Product repository for database operations.

Provides lookup, listing and removal of products by lifecycle state.
"""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from product_management.catalog.models import Product
from product_management.domain.state_machines import ProductState


class ProductRepository:
    """Repository for Product database operations.

    Every query can be narrowed to a lifecycle state; ``state=None``
    matches products in any stored state.

    Example usage:
        async with async_session_factory() as session:
            repo = ProductRepository(session)
            trashed = await repo.find_all(state=ProductState.TRASHED, limit=15)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def save(self, product: Product) -> Product:
        """Save a product to database.

        Args:
            product: Product to save.

        Returns:
            Saved product.
        """
        self.session.add(product)
        await self.session.flush()
        return product

    async def get_by_id(
        self,
        product_id: int,
        state: ProductState | None = None,
    ) -> Product | None:
        """Get product by ID.

        Args:
            product_id: Product ID.
            state: Required lifecycle state, or None for any.

        Returns:
            Product if found, None otherwise.
        """
        query = select(Product).where(Product.id == product_id)
        if state is not None:
            query = query.where(Product.state == state)

        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_many(
        self,
        product_ids: Sequence[int],
        state: ProductState | None = None,
    ) -> list[Product]:
        """Get all products whose ID is in ``product_ids``.

        Args:
            product_ids: Product IDs to look up.
            state: Required lifecycle state, or None for any.

        Returns:
            Matching products, in no particular order.
        """
        if not product_ids:
            return []

        query = select(Product).where(Product.id.in_(list(product_ids)))
        if state is not None:
            query = query.where(Product.state == state)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def find_all(
        self,
        state: ProductState | None = ProductState.ACTIVE,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[Product]:
        """Find products in a state, with optional pagination.

        Trashed products are listed most recently deleted first;
        everything else by ID.

        Args:
            state: Lifecycle state to list.
            limit: Maximum results, None for all.
            offset: Result offset for pagination.

        Returns:
            Sequence of matching products.
        """
        query = select(Product)
        if state is not None:
            query = query.where(Product.state == state)

        for column in self._get_sort_columns(state):
            query = query.order_by(column)

        if limit is not None:
            query = query.limit(limit).offset(offset)

        result = await self.session.execute(query)
        return result.scalars().all()

    async def count(self, state: ProductState | None = ProductState.ACTIVE) -> int:
        """Count products in a state.

        Args:
            state: Lifecycle state to count, None for all.

        Returns:
            Count of matching products.
        """
        query = select(func.count(Product.id))
        if state is not None:
            query = query.where(Product.state == state)

        result = await self.session.execute(query)
        return result.scalar_one()

    async def delete_many(self, products: Sequence[Product]) -> int:
        """Physically remove several product rows.

        Args:
            products: Products to remove.

        Returns:
            Number of removed products.
        """
        for product in products:
            await self.session.delete(product)

        await self.session.flush()
        return len(products)

    async def delete_by_state(self, state: ProductState) -> list[int]:
        """Physically remove every product in a state.

        Args:
            state: Lifecycle state to purge.

        Returns:
            IDs of the removed products.
        """
        result = await self.session.execute(
            select(Product.id).where(Product.state == state)
        )
        product_ids = list(result.scalars().all())

        if product_ids:
            await self.session.execute(
                delete(Product)
                .where(Product.id.in_(product_ids))
                .execution_options(synchronize_session="fetch")
            )
            await self.session.flush()

        return product_ids

    def _get_sort_columns(self, state: ProductState | None) -> list[Any]:
        """Get SQLAlchemy order-by clauses for a listing.

        Args:
            state: Lifecycle state being listed.

        Returns:
            Order-by clauses.
        """
        if state is ProductState.TRASHED:
            return [Product.deleted_at.desc(), Product.id.asc()]
        return [Product.id.asc()]
