"""Domain exceptions.

All domain-level errors that represent business rule violations.
These exceptions are raised by the lifecycle state machine and the
application services, and are translated to HTTP responses by the
API layer.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the application layer.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# State Machine Errors
# ============================================================================


class InvalidStateTransitionError(DomainError):
    """Raised when an invalid state transition is attempted.

    This error indicates that the requested operation cannot be performed
    in the current state of the entity.
    """

    def __init__(
        self,
        entity_type: str,
        entity_id: str,
        current_state: str,
        target_state: str,
        allowed_transitions: list[str] | None = None,
    ) -> None:
        """Initialize invalid state transition error.

        Args:
            entity_type: Type of entity (e.g., "Product").
            entity_id: ID of the entity.
            current_state: Current state of the entity.
            target_state: Attempted target state.
            allowed_transitions: List of allowed target states from current state.
        """
        allowed = allowed_transitions or []
        message = (
            f"Cannot transition {entity_type}({entity_id}) "
            f"from '{current_state}' to '{target_state}'. "
            f"Allowed transitions: {allowed}"
        )
        super().__init__(
            message,
            details={
                "entity_type": entity_type,
                "entity_id": entity_id,
                "current_state": current_state,
                "target_state": target_state,
                "allowed_transitions": allowed,
            },
        )


# ============================================================================
# Product Errors
# ============================================================================


class ProductError(DomainError):
    """Base class for product-related errors."""

    pass


class ProductNotFoundError(ProductError):
    """Raised when one or more product ids do not resolve.

    The message is fixed because clients match on it.
    """

    MESSAGE = "Product not found"

    def __init__(self, product_ids: list[Any] | None = None) -> None:
        """Initialize product not found error.

        Args:
            product_ids: The ids that failed to resolve.
        """
        super().__init__(
            self.MESSAGE,
            details={"product_ids": [str(pid) for pid in product_ids or []]},
        )


# ============================================================================
# Request Errors
# ============================================================================


class ValidationError(DomainError):
    """Raised when request data is missing or malformed."""

    MESSAGE = "The given data was invalid."

    def __init__(self, errors: dict[str, list[str]]) -> None:
        """Initialize validation error.

        Args:
            errors: Field name mapped to its error messages.
        """
        super().__init__(self.MESSAGE, details={"errors": errors})
        self.errors = errors
