"""Tests for the product service."""

import pytest

from product_management.application.lifecycle_service import LifecycleService
from product_management.application.product_service import ProductService
from product_management.catalog.pagination import PaginationParams
from product_management.domain.exceptions import ProductNotFoundError
from product_management.domain.state_machines import ProductState


@pytest.fixture
def service(session) -> ProductService:
    """Product service over the test database."""
    return ProductService(session)


async def test_create_product(service, load_product) -> None:
    """Created products are active and persisted."""
    product = await service.create(name="Desk", description="Oak", price=12000, quantity=3)

    assert product.id is not None
    stored = await load_product(product.id)
    assert stored.name == "Desk"
    assert stored.state is ProductState.ACTIVE
    assert stored.deleted_at is None


async def test_get_hides_trashed_products(service, session, product_factory) -> None:
    """Trashed products are not returned by get."""
    [created] = await product_factory(1)
    assert (await service.get(created["id"])).name == created["name"]

    await LifecycleService(session).trash(created["id"])

    with pytest.raises(ProductNotFoundError):
        await service.get(created["id"])


async def test_update_changes_only_given_fields(service, product_factory) -> None:
    """Update leaves omitted fields untouched and ignores nulls for required fields."""
    [created] = await product_factory(1)

    product = await service.update(
        created["id"],
        {"price": 1, "name": None, "description": None, "state": "trashed"},
    )

    assert product.price == 1
    assert product.name == created["name"]
    assert product.description is None
    assert product.state is ProductState.ACTIVE


async def test_list_products_pages_by_state(service, session, product_factory) -> None:
    """Listings are split by state and paginated."""
    created = await product_factory(5)
    await LifecycleService(session).trash_many([p["id"] for p in created[:2]])

    page = await service.list_products(ProductState.ACTIVE, PaginationParams(page=1, per_page=2))
    assert page.total == 3
    assert page.count == 2
    assert page.total_pages == 2
    assert page.has_next and not page.has_prev

    trashed = await service.list_all_products(ProductState.TRASHED)
    assert sorted(p.id for p in trashed) == sorted(p["id"] for p in created[:2])
