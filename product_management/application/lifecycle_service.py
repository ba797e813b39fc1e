"""Product lifecycle application service.

Moves products between the lifecycle states:
- trash: ACTIVE -> TRASHED (idempotent for already trashed products)
- restore: TRASHED -> ACTIVE
- purge: ACTIVE | TRASHED -> PURGED (row removed)

Every operation has a bulk variant. Bulk variants resolve the whole id
set up front, so a single unresolved id aborts the batch before any
product is touched, and the batch is committed as one unit of work.
"""

from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from product_management.application.bulk_resolver import BulkResolver, parse_product_id
from product_management.application.context import SYSTEM_CONTEXT, AdminContext
from product_management.catalog.models import Product
from product_management.catalog.repository import ProductRepository
from product_management.domain.exceptions import ProductNotFoundError
from product_management.domain.state_machines import ProductState

logger = structlog.get_logger()


class LifecycleService:
    """Application service for trash, restore and purge.

    Example usage:
        service = LifecycleService(session, context=admin)
        await service.trash("42")
        await service.restore_many([1, 2, 3])
        purged = await service.purge_all_trashed()
    """

    def __init__(
        self,
        session: AsyncSession,
        context: AdminContext = SYSTEM_CONTEXT,
        repository: ProductRepository | None = None,
    ) -> None:
        """Initialize service.

        Args:
            session: Async SQLAlchemy session.
            context: The admin performing the operations.
            repository: Product repository, built from ``session`` if omitted.
        """
        self.session = session
        self.context = context
        self.repository = repository or ProductRepository(session)
        self.resolver = BulkResolver(self.repository)
        self.log = logger.bind(**context.log_fields())

    # ------------------------------------------------------------------
    # Single-record operations
    # ------------------------------------------------------------------

    async def trash(self, product_id: Any) -> Product:
        """Move a product to the trash.

        Args:
            product_id: Product identifier.

        Returns:
            The trashed product.

        Raises:
            ProductNotFoundError: If no product has this id.
        """
        product = await self._find(product_id)
        self._trash(product, datetime.now(timezone.utc))
        await self._commit()

        self.log.info("Product trashed", product_id=product.id)
        return product

    async def restore(self, product_id: Any) -> Product:
        """Restore a trashed product.

        Args:
            product_id: Product identifier.

        Returns:
            The restored product.

        Raises:
            ProductNotFoundError: If the id does not belong to a trashed product.
        """
        product = await self._find(product_id, state=ProductState.TRASHED)
        product.restore()
        await self._commit()

        self.log.info("Product restored", product_id=product.id)
        return product

    async def purge(self, product_id: Any) -> None:
        """Permanently remove a product, whatever its state.

        Args:
            product_id: Product identifier.

        Raises:
            ProductNotFoundError: If no product has this id.
        """
        product = await self._find(product_id)
        await self._purge([product])

    async def purge_trashed(self, product_id: Any) -> None:
        """Permanently remove a product that is in the trash.

        Args:
            product_id: Product identifier.

        Raises:
            ProductNotFoundError: If the id does not belong to a trashed product.
        """
        product = await self._find(product_id, state=ProductState.TRASHED)
        await self._purge([product])

    async def purge_all_trashed(self) -> list[int]:
        """Permanently remove every trashed product.

        Returns:
            IDs of the purged products (possibly empty).
        """
        try:
            purged_ids = await self.repository.delete_by_state(ProductState.TRASHED)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        self.log.info("Trash emptied", purged_count=len(purged_ids), product_ids=purged_ids)
        return purged_ids

    # ------------------------------------------------------------------
    # Bulk operations
    # ------------------------------------------------------------------

    async def trash_many(self, product_ids: Sequence[Any] | None) -> list[Product]:
        """Move several products to the trash.

        Args:
            product_ids: Product identifiers.

        Returns:
            The trashed products.

        Raises:
            ValidationError: If no ids were given.
            ProductNotFoundError: If any id does not resolve.
        """
        products = await self.resolver.resolve(product_ids)

        now = datetime.now(timezone.utc)
        for product in products:
            self._trash(product, now)
        await self._commit()

        self.log.info(
            "Products trashed",
            count=len(products),
            product_ids=[p.id for p in products],
        )
        return products

    async def restore_many(self, product_ids: Sequence[Any] | None) -> list[Product]:
        """Restore several trashed products.

        Args:
            product_ids: Product identifiers.

        Returns:
            The restored products.

        Raises:
            ValidationError: If no ids were given.
            ProductNotFoundError: If any id is not a trashed product.
        """
        products = await self.resolver.resolve(product_ids, state=ProductState.TRASHED)

        for product in products:
            product.restore()
        await self._commit()

        self.log.info(
            "Products restored",
            count=len(products),
            product_ids=[p.id for p in products],
        )
        return products

    async def purge_many(self, product_ids: Sequence[Any] | None) -> int:
        """Permanently remove several products, whatever their state.

        Args:
            product_ids: Product identifiers.

        Returns:
            Number of purged products.

        Raises:
            ValidationError: If no ids were given.
            ProductNotFoundError: If any id does not resolve.
        """
        products = await self.resolver.resolve(product_ids)
        return await self._purge(products)

    async def purge_trashed_many(self, product_ids: Sequence[Any] | None) -> int:
        """Permanently remove several trashed products.

        Args:
            product_ids: Product identifiers.

        Returns:
            Number of purged products.

        Raises:
            ValidationError: If no ids were given.
            ProductNotFoundError: If any id is not a trashed product.
        """
        products = await self.resolver.resolve(product_ids, state=ProductState.TRASHED)
        return await self._purge(products)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _find(
        self,
        raw_id: Any,
        state: ProductState | None = None,
    ) -> Product:
        product_id = parse_product_id(raw_id)
        product = None
        if product_id is not None:
            product = await self.repository.get_by_id(product_id, state=state)

        if product is None:
            raise ProductNotFoundError([raw_id])
        return product

    def _trash(self, product: Product, now: datetime) -> None:
        # Re-trashing keeps the original deletion time.
        if product.is_trashed:
            return
        product.trash(now)

    async def _purge(self, products: list[Product]) -> int:
        product_ids = [p.id for p in products]
        for product in products:
            product.ensure_purgeable()

        try:
            count = await self.repository.delete_many(products)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        self.log.info("Products purged", count=count, product_ids=product_ids)
        return count

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise


def get_lifecycle_service(
    session: AsyncSession,
    context: AdminContext = SYSTEM_CONTEXT,
) -> LifecycleService:
    """Get lifecycle service instance.

    Args:
        session: Async SQLAlchemy session.
        context: The admin performing the operations.

    Returns:
        LifecycleService instance.
    """
    return LifecycleService(session, context=context)
