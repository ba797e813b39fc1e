"""Application layer.

Services that orchestrate product storage and lifecycle rules.
"""

from product_management.application.bulk_resolver import BulkResolver, parse_product_id
from product_management.application.context import AdminContext
from product_management.application.lifecycle_service import (
    LifecycleService,
    get_lifecycle_service,
)
from product_management.application.product_service import (
    ProductService,
    get_product_service,
)

__all__ = [
    "AdminContext",
    "BulkResolver",
    "LifecycleService",
    "ProductService",
    "get_lifecycle_service",
    "get_product_service",
    "parse_product_id",
]
