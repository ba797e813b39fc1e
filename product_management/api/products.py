"""Admin product API endpoints.

Provides endpoints for product records and their trash lifecycle:
- GET /products, GET /products/all - active products (paginated / all)
- POST /products - create a product
- GET|PUT /products/{id} - show / update an active product
- DELETE /products/{id}, DELETE /products/bulk - move to trash
- GET /products/trash, GET /products/trash/all - trashed products
- PUT /products/trash/{id}/restore, PUT /products/trash/bulk/restores - restore
- DELETE /products/{id}/force, DELETE /products/force/bulk - purge any product
- DELETE /products/trash/{id}, DELETE /products/trash/bulk - purge trashed products
- DELETE /products/trash/all - empty the trash

Static paths are registered before the ``{product_id}`` paths they
would otherwise be captured by.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from product_management.api.deps import get_lifecycle, get_products
from product_management.api.schemas import (
    BulkIdsRequest,
    ErrorResponse,
    PaginatedProductsResponse,
    PaginationMeta,
    PaginationSchema,
    ProductCreateRequest,
    ProductListResponse,
    ProductResponse,
    ProductSchema,
    ProductUpdateRequest,
    SuccessResponse,
)
from product_management.application.lifecycle_service import LifecycleService
from product_management.application.product_service import ProductService
from product_management.catalog.models import Product
from product_management.catalog.pagination import PaginatedResult, PaginationParams
from product_management.domain.state_machines import ProductState
from product_management.infrastructure.config import settings

router = APIRouter(
    prefix="/api/product-management/admin/products",
    tags=["Products"],
    responses={
        401: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
)

NOT_FOUND = {400: {"model": ErrorResponse, "description": "Product not found"}}

Lifecycle = Annotated[LifecycleService, Depends(get_lifecycle)]
Products = Annotated[ProductService, Depends(get_products)]


# ============================================================================
# Dependencies
# ============================================================================


def get_pagination(
    page: int = Query(default=1, ge=1, description="Page number"),
    per_page: int | None = Query(
        default=None,
        ge=1,
        le=settings.max_per_page,
        description="Items per page",
    ),
) -> PaginationParams:
    """Read pagination query parameters."""
    return PaginationParams(page=page, per_page=per_page or settings.default_per_page)


Pagination = Annotated[PaginationParams, Depends(get_pagination)]


# ============================================================================
# Converters
# ============================================================================


def product_to_schema(product: Product) -> ProductSchema:
    """Convert Product model to response schema."""
    return ProductSchema.model_validate(product)


def page_to_response(
    request: Request,
    result: PaginatedResult[Product],
) -> PaginatedProductsResponse:
    """Convert a result page to the paginated envelope."""
    links: dict[str, str] = {}
    if result.has_prev:
        links["previous"] = str(request.url.include_query_params(page=result.page - 1))
    if result.has_next:
        links["next"] = str(request.url.include_query_params(page=result.page + 1))

    return PaginatedProductsResponse(
        data=[product_to_schema(p) for p in result.items],
        meta=PaginationMeta(
            pagination=PaginationSchema(
                total=result.total,
                count=result.count,
                per_page=result.per_page,
                current_page=result.page,
                total_pages=result.total_pages,
                links=links,
            )
        ),
    )


# ============================================================================
# Active product endpoints
# ============================================================================


@router.get(
    "",
    response_model=PaginatedProductsResponse,
    summary="List products",
)
async def list_products(
    request: Request,
    service: Products,
    pagination: Pagination,
) -> PaginatedProductsResponse:
    """List active products, paginated."""
    result = await service.list_products(ProductState.ACTIVE, pagination)
    return page_to_response(request, result)


@router.get(
    "/all",
    response_model=ProductListResponse,
    summary="List all products",
)
async def list_all_products(service: Products) -> ProductListResponse:
    """List every active product without pagination."""
    products = await service.list_all_products(ProductState.ACTIVE)
    return ProductListResponse(data=[product_to_schema(p) for p in products])


@router.post(
    "",
    response_model=ProductResponse,
    summary="Create product",
)
async def create_product(
    body: ProductCreateRequest,
    service: Products,
) -> ProductResponse:
    """Create an active product."""
    product = await service.create(
        name=body.name,
        description=body.description,
        price=body.price,
        quantity=body.quantity,
    )
    return ProductResponse(data=product_to_schema(product))


# ============================================================================
# Trash endpoints
# ============================================================================


@router.get(
    "/trash",
    response_model=PaginatedProductsResponse,
    summary="List trashed products",
)
async def list_trash(
    request: Request,
    service: Products,
    pagination: Pagination,
) -> PaginatedProductsResponse:
    """List trashed products, most recently trashed first, paginated."""
    result = await service.list_products(ProductState.TRASHED, pagination)
    return page_to_response(request, result)


@router.get(
    "/trash/all",
    response_model=ProductListResponse,
    summary="List all trashed products",
)
async def list_all_trash(service: Products) -> ProductListResponse:
    """List every trashed product without pagination."""
    products = await service.list_all_products(ProductState.TRASHED)
    return ProductListResponse(data=[product_to_schema(p) for p in products])


@router.delete(
    "/trash/all",
    response_model=SuccessResponse,
    summary="Empty the trash",
)
async def purge_all_trash(service: Lifecycle) -> SuccessResponse:
    """Permanently remove every trashed product."""
    await service.purge_all_trashed()
    return SuccessResponse()


@router.delete(
    "/trash/bulk",
    response_model=SuccessResponse,
    responses=NOT_FOUND,
    summary="Purge trashed products",
)
async def purge_trash_bulk(body: BulkIdsRequest, service: Lifecycle) -> SuccessResponse:
    """Permanently remove several trashed products.

    Every id must be a trashed product, otherwise nothing is removed.
    """
    await service.purge_trashed_many(body.ids)
    return SuccessResponse()


@router.put(
    "/trash/bulk/restores",
    response_model=SuccessResponse,
    responses=NOT_FOUND,
    summary="Restore trashed products",
)
async def restore_bulk(body: BulkIdsRequest, service: Lifecycle) -> SuccessResponse:
    """Restore several trashed products.

    Every id must be a trashed product, otherwise nothing is restored.
    """
    await service.restore_many(body.ids)
    return SuccessResponse()


@router.put(
    "/trash/{product_id}/restore",
    response_model=SuccessResponse,
    responses=NOT_FOUND,
    summary="Restore a trashed product",
)
async def restore_product(product_id: str, service: Lifecycle) -> SuccessResponse:
    """Bring a trashed product back to the active listing."""
    await service.restore(product_id)
    return SuccessResponse()


@router.delete(
    "/trash/{product_id}",
    response_model=SuccessResponse,
    responses=NOT_FOUND,
    summary="Purge a trashed product",
)
async def purge_trashed_product(product_id: str, service: Lifecycle) -> SuccessResponse:
    """Permanently remove a product that is in the trash."""
    await service.purge_trashed(product_id)
    return SuccessResponse()


# ============================================================================
# Bulk endpoints
# ============================================================================


@router.delete(
    "/bulk",
    response_model=SuccessResponse,
    responses=NOT_FOUND,
    summary="Trash products",
)
async def trash_bulk(body: BulkIdsRequest, service: Lifecycle) -> SuccessResponse:
    """Move several products to the trash.

    Every id must resolve, otherwise nothing is trashed.
    """
    await service.trash_many(body.ids)
    return SuccessResponse()


@router.delete(
    "/force/bulk",
    response_model=SuccessResponse,
    responses=NOT_FOUND,
    summary="Purge products",
)
async def purge_bulk(body: BulkIdsRequest, service: Lifecycle) -> SuccessResponse:
    """Permanently remove several products, trashed or not.

    Every id must resolve, otherwise nothing is removed.
    """
    await service.purge_many(body.ids)
    return SuccessResponse()


# ============================================================================
# Single product endpoints
# ============================================================================


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses=NOT_FOUND,
    summary="Get product",
)
async def get_product(product_id: str, service: Products) -> ProductResponse:
    """Get an active product."""
    product = await service.get(product_id)
    return ProductResponse(data=product_to_schema(product))


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses=NOT_FOUND,
    summary="Update product",
)
async def update_product(
    product_id: str,
    body: ProductUpdateRequest,
    service: Products,
) -> ProductResponse:
    """Update an active product. Only the fields sent are changed."""
    product = await service.update(product_id, body.model_dump(exclude_unset=True))
    return ProductResponse(data=product_to_schema(product))


@router.delete(
    "/{product_id}",
    response_model=SuccessResponse,
    responses=NOT_FOUND,
    summary="Trash product",
)
async def trash_product(product_id: str, service: Lifecycle) -> SuccessResponse:
    """Move a product to the trash."""
    await service.trash(product_id)
    return SuccessResponse()


@router.delete(
    "/{product_id}/force",
    response_model=SuccessResponse,
    responses=NOT_FOUND,
    summary="Purge product",
)
async def purge_product(product_id: str, service: Lifecycle) -> SuccessResponse:
    """Permanently remove a product, trashed or not."""
    await service.purge(product_id)
    return SuccessResponse()
