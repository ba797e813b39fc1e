"""SQLAlchemy models for the product catalog.

Defines the Product table for persistent storage.
"""

from datetime import datetime, timezone

import sqlalchemy as sa
from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from product_management.domain.state_machines import (
    ProductState,
    validate_product_transition,
)
from product_management.infrastructure.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Product(Base):
    """Product entity in the catalog.

    The lifecycle state is stored explicitly; ``deleted_at`` records
    when the product was last moved to the trash and is cleared again
    on restore.

    Attributes:
        id: Unique product identifier.
        name: Product name.
        description: Product description.
        price: Price in minor currency units.
        quantity: Available quantity.
        state: Lifecycle state (active or trashed).
        deleted_at: When the product was trashed, None while active.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    state: Mapped[ProductState] = mapped_column(
        sa.Enum(
            ProductState,
            name="product_state",
            native_enum=False,
            length=16,
            values_callable=lambda states: [s.value for s in states],
        ),
        nullable=False,
        default=ProductState.ACTIVE,
        index=True,
    )
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Product(id={self.id}, state={self.state}, name={self.name[:30]})>"

    @property
    def is_trashed(self) -> bool:
        """Whether the product currently sits in the trash."""
        return self.state is ProductState.TRASHED

    def trash(self, now: datetime | None = None) -> None:
        """Move the product to the trash.

        Args:
            now: Deletion time, defaults to the current UTC time.

        Raises:
            InvalidStateTransitionError: If the product is not active.
        """
        validate_product_transition(str(self.id), self.state, ProductState.TRASHED)
        self.state = ProductState.TRASHED
        self.deleted_at = now or _utcnow()

    def restore(self) -> None:
        """Bring the product back from the trash.

        Raises:
            InvalidStateTransitionError: If the product is not trashed.
        """
        validate_product_transition(str(self.id), self.state, ProductState.ACTIVE)
        self.state = ProductState.ACTIVE
        self.deleted_at = None

    def ensure_purgeable(self) -> None:
        """Check that the product may be removed permanently.

        Raises:
            InvalidStateTransitionError: If the product is already purged.
        """
        validate_product_transition(str(self.id), self.state, ProductState.PURGED)
