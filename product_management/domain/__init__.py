"""Domain layer.

Contains the product lifecycle state machine and the domain
exceptions raised when its rules are violated.
"""

from product_management.domain.exceptions import (
    DomainError,
    InvalidStateTransitionError,
    ProductError,
    ProductNotFoundError,
    ValidationError,
)
from product_management.domain.state_machines import (
    ProductState,
    validate_product_transition,
)

__all__ = [
    # Exceptions
    "DomainError",
    "InvalidStateTransitionError",
    "ProductError",
    "ProductNotFoundError",
    "ValidationError",
    # State machines
    "ProductState",
    "validate_product_transition",
]
