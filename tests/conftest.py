"""
Shared test fixtures.

The suite runs against an in-memory SQLite database; every test gets a
fresh engine with the schema created and the demo catalog seeded.
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ.setdefault("ENV_MODE", "development")

from decimal import Decimal

import httpx
import pytest
import pytest_asyncio
from sqlalchemy import func, select

from delivery_api.database import build_engine, build_session_maker, get_db, init_db
from delivery_api.main import app
from delivery_api.models import Customer, Product, Restaurant
from delivery_api.services.commands import DeliveryAddress, LineRequest, PlaceOrderCommand


# ============================================================================
# Database
# ============================================================================

@pytest_asyncio.fixture
async def engine():
    test_engine = build_engine("sqlite+aiosqlite:///:memory:")
    await init_db(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_maker(engine):
    return build_session_maker(engine)


@pytest_asyncio.fixture
async def catalog_rows(session_maker):
    """
    Customer 1; restaurant 10 with products 100 (25.00), 101 (10.50)
    and unavailable 102 (7.00); restaurant 20 with product 200 (12.00).
    """
    async with session_maker() as session:
        session.add_all([
            Customer(id=1, name="Ana Souza", email="ana@example.com"),
            Restaurant(
                id=10,
                name="Pizzaria Bella",
                category="Italiana",
                phone="11999990000",
                delivery_fee=Decimal("5.00"),
                delivery_time_minutes=40,
            ),
            Restaurant(id=20, name="Sushi Kaze", category="Japonesa"),
        ])
        await session.flush()
        session.add_all([
            Product(id=100, restaurant_id=10, name="Pizza Margherita", category="Pizza", price=Decimal("25.00")),
            Product(id=101, restaurant_id=10, name="Refrigerante 2L", category="Bebida", price=Decimal("10.50")),
            Product(id=102, restaurant_id=10, name="Pudim", category="Sobremesa", price=Decimal("7.00"), available=False),
            Product(id=200, restaurant_id=20, name="Temaki", category="Japonesa", price=Decimal("12.00")),
        ])
        await session.commit()


@pytest_asyncio.fixture
async def session(session_maker, catalog_rows):
    async with session_maker() as db:
        yield db


async def count_rows(session_maker, model) -> int:
    async with session_maker() as db:
        result = await db.execute(select(func.count(model.id)))
        return result.scalar()


# ============================================================================
# HTTP
# ============================================================================

@pytest_asyncio.fixture
async def client(session_maker, catalog_rows):
    async def override_get_db():
        async with session_maker() as db:
            yield db

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
        yield http
    app.dependency_overrides.clear()


# ============================================================================
# Request Helpers
# ============================================================================

ADDRESS = DeliveryAddress(
    street="Rua das Flores",
    number="123",
    complement="Apto 42",
    neighborhood="Centro",
    city="São Paulo",
    state="SP",
    postal_code="01001-000",
)


def make_command(*lines, customer_id=1, restaurant_id=10) -> PlaceOrderCommand:
    return PlaceOrderCommand(
        customer_id=customer_id,
        restaurant_id=restaurant_id,
        delivery_address=ADDRESS,
        items=tuple(LineRequest(product_id=p, quantity=q) for p, q in lines),
    )


def make_payload(*lines, customer_id=1, restaurant_id=10) -> dict:
    return {
        "customer_id": customer_id,
        "restaurant_id": restaurant_id,
        "delivery_address": {
            "street": ADDRESS.street,
            "number": ADDRESS.number,
            "complement": ADDRESS.complement,
            "neighborhood": ADDRESS.neighborhood,
            "city": ADDRESS.city,
            "state": ADDRESS.state,
            "postal_code": ADDRESS.postal_code,
        },
        "items": [{"product_id": p, "quantity": q} for p, q in lines],
    }
