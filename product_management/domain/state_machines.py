"""State machine for the product lifecycle.

Products are either ACTIVE or TRASHED while their row exists.
PURGED is the terminal state reached by removing the row; it is
never stored, but it is part of the machine so that purge is
validated like every other transition.
"""

from enum import Enum

from product_management.domain.exceptions import InvalidStateTransitionError


class ProductState(str, Enum):
    """Product lifecycle states.

    State diagram:
        ACTIVE ──── trash ────► TRASHED
          ▲                       │
          └────── restore ────────┤
          │                       │
          │ purge                 │ purge
          ▼                       ▼
        PURGED ◄──────────────────┘
    """

    ACTIVE = "active"
    TRASHED = "trashed"
    PURGED = "purged"

    def can_transition_to(self, target: "ProductState") -> bool:
        """Check if transition to target state is valid.

        Args:
            target: Target state to transition to.

        Returns:
            True if transition is valid.
        """
        return target in _PRODUCT_TRANSITIONS.get(self, set())

    def allowed_transitions(self) -> list["ProductState"]:
        """Get list of valid target states.

        Returns:
            List of states that can be transitioned to.
        """
        return sorted(_PRODUCT_TRANSITIONS.get(self, set()), key=lambda s: s.value)


# Product state transitions (defined outside enum to avoid Enum restrictions)
_PRODUCT_TRANSITIONS: dict[ProductState, set[ProductState]] = {
    ProductState.ACTIVE: {ProductState.TRASHED, ProductState.PURGED},
    ProductState.TRASHED: {ProductState.ACTIVE, ProductState.PURGED},
    ProductState.PURGED: set(),  # Terminal state
}


def validate_product_transition(
    product_id: str,
    current_state: ProductState,
    target_state: ProductState,
) -> None:
    """Validate and raise if product state transition is invalid.

    Args:
        product_id: Product identifier for error message.
        current_state: Current product state.
        target_state: Target product state.

    Raises:
        InvalidStateTransitionError: If transition is not valid.
    """
    if not current_state.can_transition_to(target_state):
        raise InvalidStateTransitionError(
            entity_type="Product",
            entity_id=product_id,
            current_state=current_state.value,
            target_state=target_state.value,
            allowed_transitions=[s.value for s in current_state.allowed_transitions()],
        )
