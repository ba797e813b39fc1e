"""Tests for bulk id resolution."""

import pytest

from product_management.application.bulk_resolver import (
    BulkResolver,
    parse_product_id,
    unique_ids,
)
from product_management.application.lifecycle_service import LifecycleService
from product_management.catalog.repository import ProductRepository
from product_management.domain.exceptions import ProductNotFoundError, ValidationError
from product_management.domain.state_machines import ProductState


@pytest.fixture
def resolver(session) -> BulkResolver:
    """Resolver over the test database."""
    return BulkResolver(ProductRepository(session))


class TestParseProductId:
    """Tests for parse_product_id."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (5, 5),
            ("5", 5),
            (" 12 ", 12),
            ("UNDEFINED_IDS", None),
            ("undefin_id", None),
            ("", None),
            (None, None),
            (True, None),
            (1.5, None),
            ("-3", -3),
            ("²", None),
            ("١٢", None),
            ("- 1", None),
            (2**31 - 1, 2**31 - 1),
            (2**31, None),
            ("18446744073709551616", None),
            (-(2**31) - 1, None),
        ],
    )
    def test_parse(self, raw, expected) -> None:
        """Only in-range integers and ASCII digit strings are product ids."""
        assert parse_product_id(raw) == expected


def test_unique_ids_keeps_first_occurrence_order() -> None:
    """Repeated ids collapse onto their first position."""
    assert unique_ids([3, 1, "3", 2, 1]) == [(3, 3), (1, 1), (2, 2)]


def test_unique_ids_collapses_equivalent_spellings() -> None:
    """Ids that parse to the same product collapse, keeping the first raw value."""
    assert unique_ids([1, "01", " 1", "x", "x", 2]) == [(1, 1), ("x", None), (2, 2)]


class TestResolve:
    """Tests for BulkResolver.resolve."""

    async def test_empty_ids_is_validation_error(self, resolver) -> None:
        """Empty input fails before any lookup."""
        with pytest.raises(ValidationError) as exc_info:
            await resolver.resolve([])
        assert "ids" in exc_info.value.errors

    async def test_missing_ids_is_validation_error(self, resolver) -> None:
        """Absent input fails the same way."""
        with pytest.raises(ValidationError):
            await resolver.resolve(None)

    async def test_resolves_in_request_order(self, resolver, product_factory) -> None:
        """Resolved products follow the order they were requested in."""
        created = await product_factory(3)
        ids = [p["id"] for p in reversed(created)]

        products = await resolver.resolve(ids)

        assert [p.id for p in products] == ids

    async def test_duplicates_are_collapsed(self, resolver, product_factory) -> None:
        """The same id requested twice resolves once."""
        created = await product_factory(1)
        pid = created[0]["id"]

        products = await resolver.resolve([pid, str(pid), pid])

        assert [p.id for p in products] == [pid]

    async def test_any_unknown_id_fails_whole_set(self, resolver, product_factory) -> None:
        """One unknown id makes the whole resolution fail."""
        created = await product_factory(2)
        ids = [p["id"] for p in created] + [999_999]

        with pytest.raises(ProductNotFoundError) as exc_info:
            await resolver.resolve(ids)

        assert exc_info.value.message == "Product not found"
        assert exc_info.value.details["product_ids"] == ["999999"]

    async def test_non_numeric_id_never_resolves(self, resolver, product_factory) -> None:
        """Identifiers that are not integers are reported as missing."""
        await product_factory(1)

        with pytest.raises(ProductNotFoundError):
            await resolver.resolve(["UNDEFINED_IDS"])

    async def test_required_state_is_enforced(self, resolver, session, product_factory) -> None:
        """Products in the wrong state do not resolve."""
        created = await product_factory(2)
        ids = [p["id"] for p in created]
        await LifecycleService(session).trash(ids[0])

        with pytest.raises(ProductNotFoundError) as exc_info:
            await resolver.resolve(ids, state=ProductState.TRASHED)
        assert exc_info.value.details["product_ids"] == [str(ids[1])]

        products = await resolver.resolve([ids[0]], state=ProductState.TRASHED)
        assert [p.id for p in products] == [ids[0]]

    async def test_equivalent_spellings_resolve_once(self, resolver, product_factory) -> None:
        """Zero-padded and padded strings name the same product."""
        created = await product_factory(1)
        pid = created[0]["id"]

        products = await resolver.resolve([pid, f"0{pid}", f" {pid}"])

        assert [p.id for p in products] == [pid]

    async def test_out_of_range_id_is_not_found(self, resolver, product_factory) -> None:
        """Ids the column cannot hold are reported missing, not sent to the store."""
        created = await product_factory(1)

        with pytest.raises(ProductNotFoundError) as exc_info:
            await resolver.resolve([created[0]["id"], 18446744073709551616])

        assert exc_info.value.details["product_ids"] == ["18446744073709551616"]
