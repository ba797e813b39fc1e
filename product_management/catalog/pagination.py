"""Pagination containers for catalog listings."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class PaginationParams:
    """Pagination parameters.

    Attributes:
        page: Page number (1-indexed).
        per_page: Items per page.
    """

    page: int = 1
    per_page: int = 15

    @property
    def offset(self) -> int:
        """Calculate offset from page number."""
        return (self.page - 1) * self.per_page

    @property
    def limit(self) -> int:
        """Get limit (alias for per_page)."""
        return self.per_page


@dataclass
class PaginatedResult(Generic[T]):
    """Paginated result container.

    Attributes:
        items: Items on the current page.
        total: Total count across all pages.
        page: Current page.
        per_page: Items per page.
    """

    items: list[T]
    total: int
    page: int
    per_page: int

    @property
    def count(self) -> int:
        """Number of items on the current page."""
        return len(self.items)

    @property
    def total_pages(self) -> int:
        """Calculate total pages."""
        return (self.total + self.per_page - 1) // self.per_page

    @property
    def has_next(self) -> bool:
        """Check if there's a next page."""
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        """Check if there's a previous page."""
        return self.page > 1
