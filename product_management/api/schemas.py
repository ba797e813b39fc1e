"""API schemas for the product admin API.

Pydantic models for request/response validation and serialization.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors carry a human-readable message; validation
    failures add per-field errors.
    """

    message: str = Field(..., description="Human-readable error message")
    errors: dict[str, list[str]] | None = Field(
        default=None, description="Validation errors keyed by field"
    )


class SuccessResponse(BaseModel):
    """Acknowledgement of a completed write operation."""

    success: bool = Field(default=True, description="Always true")


class BulkIdsRequest(BaseModel):
    """Request body naming the products a bulk operation applies to."""

    ids: list[int | str] = Field(
        ...,
        min_length=1,
        description="Product identifiers; every one must resolve or nothing is changed",
    )


# ============================================================================
# Pagination Schemas
# ============================================================================


class PaginationSchema(BaseModel):
    """Pagination metadata for a listing page."""

    total: int = Field(..., description="Total number of items")
    count: int = Field(..., description="Number of items on this page")
    per_page: int = Field(..., description="Items per page")
    current_page: int = Field(..., description="Current page number")
    total_pages: int = Field(..., description="Total number of pages")
    links: dict[str, str] = Field(
        default_factory=dict, description="URLs of the previous/next pages"
    )


class PaginationMeta(BaseModel):
    """Meta block of a paginated response."""

    pagination: PaginationSchema


# ============================================================================
# Product Schemas
# ============================================================================


class ProductSchema(BaseModel):
    """Product representation."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Product identifier")
    name: str = Field(..., description="Product name")
    description: str | None = Field(default=None, description="Product description")
    price: int = Field(..., description="Price in minor currency units")
    quantity: int = Field(..., description="Available quantity")
    deleted_at: datetime | None = Field(
        default=None, description="When the product was trashed"
    )
    created_at: datetime = Field(..., description="When the product was created")
    updated_at: datetime = Field(..., description="When the product was last updated")


class ProductCreateRequest(BaseModel):
    """Request to create a product."""

    name: str = Field(..., min_length=1, max_length=255, description="Product name")
    description: str | None = Field(default=None, description="Product description")
    price: int = Field(default=0, ge=0, description="Price in minor currency units")
    quantity: int = Field(default=0, ge=0, description="Available quantity")


class ProductUpdateRequest(BaseModel):
    """Request to update a product. Omitted fields are left unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    price: int | None = Field(default=None, ge=0)
    quantity: int | None = Field(default=None, ge=0)


class ProductResponse(BaseModel):
    """Single product envelope."""

    data: ProductSchema


class ProductListResponse(BaseModel):
    """Unpaginated product listing."""

    data: list[ProductSchema]


class PaginatedProductsResponse(BaseModel):
    """Paginated product listing."""

    data: list[ProductSchema]
    meta: PaginationMeta
