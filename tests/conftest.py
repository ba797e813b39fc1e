"""Shared fixtures.

Every test gets its own in-memory SQLite database. API tests run the
real application over ``httpx.ASGITransport`` with the session
dependency pointed at that database.
"""

import itertools
from collections.abc import AsyncGenerator, Awaitable, Callable
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from product_management.catalog.models import Product
from product_management.domain.state_machines import ProductState
from product_management.infrastructure.config import settings
from product_management.infrastructure.database import Base, get_session
from product_management.main import app

_name_counter = itertools.count(1)


def product_payload(product: Product) -> dict[str, Any]:
    """Fields of a product that survive a trash/restore cycle unchanged."""
    return {
        "id": product.id,
        "name": product.name,
        "description": product.description,
        "price": product.price,
        "quantity": product.quantity,
    }


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def engine():
    """Create an isolated in-memory database with all tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test database."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """A session for service-level tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def product_factory(
    session_factory,
) -> Callable[..., Awaitable[list[dict[str, Any]]]]:
    """Insert active products and return their payloads."""

    async def _create(count: int = 1, **overrides: Any) -> list[dict[str, Any]]:
        async with session_factory() as session:
            products = []
            for _ in range(count):
                n = next(_name_counter)
                fields = {
                    "name": f"Product {n}",
                    "description": f"Description of product {n}",
                    "price": 1000 + n,
                    "quantity": n,
                    "state": ProductState.ACTIVE,
                }
                fields.update(overrides)
                products.append(Product(**fields))
            session.add_all(products)
            await session.commit()
            return [product_payload(p) for p in products]

    return _create


@pytest.fixture
def load_product(session_factory) -> Callable[[int], Awaitable[Product | None]]:
    """Read a product row straight from the store, whatever its state."""

    async def _load(product_id: int) -> Product | None:
        async with session_factory() as session:
            return await session.get(Product, product_id)

    return _load


# ============================================================================
# Client Fixtures
# ============================================================================


@pytest.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Create test client without authentication."""

    async def override_get_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as client:
            yield client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Get authentication headers."""
    return {"Authorization": f"Bearer {settings.admin_api_key}"}


@pytest.fixture
def auth_client(client: AsyncClient, auth_headers: dict[str, str]) -> AsyncClient:
    """Test client with valid admin authentication."""
    client.headers.update(auth_headers)
    return client
