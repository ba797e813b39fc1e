"""Product application service.

Create, read and update operations on products, and the listings of
active and trashed products. Lifecycle transitions live in
``lifecycle_service``.
"""

from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from product_management.application.bulk_resolver import parse_product_id
from product_management.application.context import SYSTEM_CONTEXT, AdminContext
from product_management.catalog.models import Product
from product_management.catalog.pagination import PaginatedResult, PaginationParams
from product_management.catalog.repository import ProductRepository
from product_management.domain.exceptions import ProductNotFoundError
from product_management.domain.state_machines import ProductState

logger = structlog.get_logger()

UPDATABLE_FIELDS = ("name", "description", "price", "quantity")
NULLABLE_FIELDS = ("description",)


class ProductService:
    """Application service for product records."""

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
        self.log = logger.bind(**context.log_fields())

    async def create(
        self,
        name: str,
        description: str | None = None,
        price: int = 0,
        quantity: int = 0,
    ) -> Product:
        """Create an active product.

        Args:
            name: Product name.
            description: Product description.
            price: Price in minor currency units.
            quantity: Available quantity.

        Returns:
            The created product.
        """
        product = Product(
            name=name,
            description=description,
            price=price,
            quantity=quantity,
            state=ProductState.ACTIVE,
        )
        try:
            await self.repository.save(product)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        self.log.info("Product created", product_id=product.id)
        return product

    async def get(self, product_id: Any) -> Product:
        """Get an active product.

        Raises:
            ProductNotFoundError: If the id is not an active product.
        """
        parsed = parse_product_id(product_id)
        product = None
        if parsed is not None:
            product = await self.repository.get_by_id(parsed, state=ProductState.ACTIVE)

        if product is None:
            raise ProductNotFoundError([product_id])
        return product

    async def update(self, product_id: Any, changes: dict[str, Any]) -> Product:
        """Update fields of an active product.

        Args:
            product_id: Product identifier.
            changes: Field values to set; unknown fields and nulls for
                required fields are ignored.

        Returns:
            The updated product.

        Raises:
            ProductNotFoundError: If the id is not an active product.
        """
        product = await self.get(product_id)

        applied = {
            k: v
            for k, v in changes.items()
            if k in UPDATABLE_FIELDS and (v is not None or k in NULLABLE_FIELDS)
        }
        for field_name, value in applied.items():
            setattr(product, field_name, value)

        try:
            await self.session.commit()
            await self.session.refresh(product)
        except Exception:
            await self.session.rollback()
            raise

        self.log.info("Product updated", product_id=product.id, fields=sorted(applied))
        return product

    async def list_products(
        self,
        state: ProductState,
        pagination: PaginationParams,
    ) -> PaginatedResult[Product]:
        """List one page of products in a state.

        Args:
            state: ACTIVE or TRASHED.
            pagination: Page to fetch.

        Returns:
            The page with its total.
        """
        total = await self.repository.count(state=state)
        items = await self.repository.find_all(
            state=state,
            limit=pagination.limit,
            offset=pagination.offset,
        )
        return PaginatedResult(
            items=list(items),
            total=total,
            page=pagination.page,
            per_page=pagination.per_page,
        )

    async def list_all_products(self, state: ProductState) -> list[Product]:
        """List every product in a state, unpaginated."""
        return list(await self.repository.find_all(state=state))


def get_product_service(
    session: AsyncSession,
    context: AdminContext = SYSTEM_CONTEXT,
) -> ProductService:
    """Get product service instance.

    Args:
        session: Async SQLAlchemy session.
        context: The admin performing the operations.

    Returns:
        ProductService instance.
    """
    return ProductService(session, context=context)
