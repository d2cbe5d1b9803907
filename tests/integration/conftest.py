"""
Integration test fixtures.

Runs the PostgreSQL repositories against a real database. Tests are
skipped unless ORDER_SERVICE_TEST_DATABASE_URL points at a disposable
database: the fixtures truncate the order tables and reseed products.
"""

import os
from decimal import Decimal

import pytest
import pytest_asyncio

from app.config import Settings
from app.database import DatabaseManager

TEST_DATABASE_URL = os.getenv("ORDER_SERVICE_TEST_DATABASE_URL")

SEED_PRODUCTS = [
    (1, "Product 1", Decimal("10.00"), Decimal("1.00")),
    (2, "Product 2", Decimal("5.00"), Decimal("0.50")),
]


@pytest_asyncio.fixture
async def pg_pool():
    """Connection pool on a freshly reset schema."""
    if not TEST_DATABASE_URL:
        pytest.skip("ORDER_SERVICE_TEST_DATABASE_URL not set")

    manager = DatabaseManager(
        Settings(_env_file=None, DATABASE_URL=TEST_DATABASE_URL, DB_MAX_OPEN_CONNS=5)
    )
    await manager.ensure_schema()
    pool = manager.pool

    async with pool.acquire() as conn:
        await conn.execute("TRUNCATE order_items, orders, products RESTART IDENTITY")
        await conn.executemany(
            "INSERT INTO products (id, name, price, vat) VALUES ($1, $2, $3, $4)",
            SEED_PRODUCTS,
        )

    yield pool

    await manager.disconnect()
