"""Service test fixtures: in-memory stores, fake gateway, async DB + API client.

Invariants:
    - Service tests run on dict-backed stores and a scripted payment gateway
    - Every API test gets a fresh in-memory SQLite database
    - get_db and get_payment_gateway dependencies overridden per test
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - FakeGateway records every charge so tests can assert "no charge happened"
"""

from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

import salesdesk.infrastructure.database as db_module
import salesdesk.models  # noqa: F401
from salesdesk.api.dependencies import get_payment_gateway
from salesdesk.core.checkout_rules import BuyerDetails
from salesdesk.core.commerce import Product
from salesdesk.db.base import Base
from salesdesk.infrastructure.database import get_db, DatabaseSessionManager
from salesdesk.infrastructure.memory_store import (
    InMemoryOrderRepository, InMemoryPageRepository, InMemoryProductRepository,
)
from salesdesk.main import app
from salesdesk.services.catalog import CatalogService
from salesdesk.services.checkout import CheckoutService
from salesdesk.services.orders import OrderService
from salesdesk.services.page_builder import PageBuilderService
from tests.services.fakes import BUYER_FORM, FakeGateway, SteppingClock


# ─── Service-level fixtures (no database) ───────────────────────

@pytest.fixture
def buyer():
    return BuyerDetails(**BUYER_FORM)


@pytest.fixture
def product_store():
    return InMemoryProductRepository([
        Product(id="prod-1", name="Digital Marketing Masterclass", price=Decimal("297")),
        Product(id="prod-2", name="Habit Tracker Template", price=Decimal("39.99")),
    ])


@pytest.fixture
def page_store():
    return InMemoryPageRepository()


@pytest.fixture
def order_store():
    return InMemoryOrderRepository()


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def builder(page_store, product_store):
    return PageBuilderService(page_store, product_store, clock=SteppingClock())


@pytest.fixture
def catalog(product_store):
    return CatalogService(product_store)


@pytest.fixture
def checkout(page_store, product_store, order_store, gateway):
    return CheckoutService(
        page_store, product_store, order_store, gateway, payment_timeout=0.05,
    )


@pytest.fixture
def order_service(order_store, product_store, page_store):
    return OrderService(order_store, product_store, page_store)


@pytest.fixture
async def published_page(builder):
    page = await builder.create_page("Habit Tracker Launch", "prod-2")
    return await builder.publish(page.id)


# ─── API fixtures (in-memory SQLite) ────────────────────────────

@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory, gateway):
    """FastAPI test client with DB and payment gateway overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_payment_gateway] = lambda: gateway

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def api_product(client):
    resp = await client.post("/api/v1/products", json={
        "name": "Habit Tracker Template", "price": "39.99",
    })
    assert resp.status_code == 201
    return resp.json()


@pytest.fixture
async def api_published_page(client, api_product):
    resp = await client.post("/api/v1/pages", json={
        "title": "Habit Tracker Launch", "product_id": api_product["id"],
    })
    page_id = resp.json()["id"]
    resp = await client.post(f"/api/v1/pages/{page_id}/publish")
    assert resp.status_code == 200
    return resp.json()
