"""
Demo Catalog Seeder

Creates the tables and inserts a small demo catalog so orders can be
placed right away.
Run from project root: python scripts/seed.py
"""

import asyncio
import os
import sys
from decimal import Decimal

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import select

from delivery_api.database import async_session_maker, engine, init_db
from delivery_api.models import Customer, Product, Restaurant

DEMO_CUSTOMERS = [
    {"id": 1, "name": "Ana Souza", "email": "ana.souza@example.com"},
    {"id": 2, "name": "Bruno Lima", "email": "bruno.lima@example.com"},
]

DEMO_RESTAURANTS = [
    {
        "id": 10,
        "name": "Pizzaria Bella",
        "category": "Italiana",
        "phone": "11999990000",
        "delivery_fee": Decimal("5.00"),
        "delivery_time_minutes": 40,
    },
]

DEMO_PRODUCTS = [
    {"id": 100, "restaurant_id": 10, "name": "Pizza Margherita", "category": "Pizza", "price": Decimal("25.00")},
    {"id": 101, "restaurant_id": 10, "name": "Refrigerante 2L", "category": "Bebida", "price": Decimal("10.50")},
    {"id": 102, "restaurant_id": 10, "name": "Tiramisu", "category": "Sobremesa", "price": Decimal("18.90")},
]


async def seed() -> None:
    """Insert demo rows that do not exist yet."""
    await init_db()

    async with async_session_maker() as session:
        for model, rows in (
            (Customer, DEMO_CUSTOMERS),
            (Restaurant, DEMO_RESTAURANTS),
            (Product, DEMO_PRODUCTS),
        ):
            for row in rows:
                existing = await session.execute(select(model).where(model.id == row["id"]))
                if existing.scalar_one_or_none() is None:
                    session.add(model(**row))
                    print(f"   + {model.__name__} #{row['id']}")
            # Parents must exist before children reference them
            await session.flush()
        await session.commit()

    await engine.dispose()


if __name__ == "__main__":
    print("=" * 60)
    print("Seeding demo catalog")
    print("=" * 60)
    asyncio.run(seed())
    print("Done")
