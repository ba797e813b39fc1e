"""Product catalog storage.

Provides the Product model, its repository and pagination containers.
"""

from product_management.catalog.models import Product
from product_management.catalog.pagination import PaginatedResult, PaginationParams
from product_management.catalog.repository import ProductRepository

__all__ = [
    # Models
    "Product",
    # Repository
    "ProductRepository",
    # Pagination
    "PaginatedResult",
    "PaginationParams",
]
