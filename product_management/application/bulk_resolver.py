"""Bulk id resolution.

Bulk operations are all-or-nothing: the whole id set is resolved
before anything is mutated, and a single miss aborts the batch.
"""

from collections.abc import Sequence
from typing import Any

import structlog

from product_management.catalog.models import Product
from product_management.catalog.repository import ProductRepository
from product_management.domain.exceptions import ProductNotFoundError, ValidationError
from product_management.domain.state_machines import ProductState

logger = structlog.get_logger()

# Range of the products.id column (signed 32-bit on PostgreSQL).
MIN_PRODUCT_ID = -(2**31)
MAX_PRODUCT_ID = 2**31 - 1


def parse_product_id(raw: Any) -> int | None:
    """Interpret a client-supplied identifier.

    Integers and strings of ASCII digits are product IDs; anything else,
    including values the id column cannot hold, can never match a product.

    Args:
        raw: Identifier as received from the client.

    Returns:
        Integer ID, or None if ``raw`` is not a valid ID.
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str):
        text = raw.strip()
        digits = text[1:] if text.startswith("-") else text
        if not (digits.isascii() and digits.isdigit()):
            return None
        value = int(text)
    else:
        return None
    if not MIN_PRODUCT_ID <= value <= MAX_PRODUCT_ID:
        return None
    return value


def unique_ids(ids: Sequence[Any]) -> list[tuple[Any, int | None]]:
    """Parse identifiers and drop repeats of the same product.

    ``1``, ``"1"`` and ``"01"`` name the same product and collapse to the
    first occurrence. Unparseable values are kept once each, by their text.

    Returns:
        ``(raw, parsed)`` pairs in first-occurrence order.
    """
    seen: set[Any] = set()
    result = []
    for raw in ids:
        parsed = parse_product_id(raw)
        key = parsed if parsed is not None else ("invalid", str(raw))
        if key in seen:
            continue
        seen.add(key)
        result.append((raw, parsed))
    return result


class BulkResolver:
    """Resolves a requested id set against the product store.

    Example usage:
        resolver = BulkResolver(ProductRepository(session))
        products = await resolver.resolve([1, 2, 3], state=ProductState.TRASHED)
    """

    def __init__(self, repository: ProductRepository) -> None:
        """Initialize resolver.

        Args:
            repository: Product repository.
        """
        self.repository = repository

    async def resolve(
        self,
        ids: Sequence[Any] | None,
        state: ProductState | None = None,
    ) -> list[Product]:
        """Resolve every requested id or fail.

        Args:
            ids: Requested identifiers, in request order.
            state: Lifecycle state every product must be in, None for any.

        Returns:
            Resolved products in request order.

        Raises:
            ValidationError: If ``ids`` is missing or empty.
            ProductNotFoundError: If any id does not resolve.
        """
        if not ids:
            raise ValidationError({"ids": ["The ids field is required."]})

        parsed = unique_ids(ids)

        lookup_ids = [pid for _, pid in parsed if pid is not None]
        found = {
            product.id: product
            for product in await self.repository.get_many(lookup_ids, state=state)
        }

        missing = [raw for raw, pid in parsed if pid is None or pid not in found]
        if missing:
            logger.info(
                "Bulk resolution failed",
                requested=len(parsed),
                missing=[str(raw) for raw in missing],
                state=state.value if state else None,
            )
            raise ProductNotFoundError(missing)

        return [found[pid] for _, pid in parsed]
