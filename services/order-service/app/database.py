"""
Database connection management for Order Service.

The pool is owned by a ``DatabaseManager`` instance created by the
application factory and handed to the repositories; there is no
module-level pool.
"""

from typing import Optional

import asyncpg
import structlog

from .config import Settings

logger = structlog.get_logger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS products (
    id BIGSERIAL PRIMARY KEY,
    name TEXT NOT NULL,
    price NUMERIC(12, 2) NOT NULL,
    vat NUMERIC(12, 2) NOT NULL
);

CREATE TABLE IF NOT EXISTS orders (
    id BIGSERIAL PRIMARY KEY,
    price NUMERIC(14, 2) NOT NULL,
    vat NUMERIC(14, 2) NOT NULL,
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

CREATE TABLE IF NOT EXISTS order_items (
    id BIGSERIAL PRIMARY KEY,
    order_id BIGINT NOT NULL REFERENCES orders (id),
    product_id BIGINT NOT NULL,
    quantity INTEGER NOT NULL,
    price NUMERIC(14, 2) NOT NULL,
    vat NUMERIC(14, 2) NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_order_items_order_id ON order_items (order_id);
"""


class DatabaseManager:
    """Manages the PostgreSQL connection pool."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.pool: Optional[asyncpg.Pool] = None

    async def connect(self) -> asyncpg.Pool:
        """
        Create the connection pool if it does not exist yet.

        Pool sizing follows the DB_MAX_OPEN_CONNS / DB_MAX_IDLE_CONNS /
        DB_CONN_MAX_AGE settings.

        Returns:
            asyncpg.Pool: Database connection pool
        """
        if self.pool is None:
            logger.info(
                "Creating database connection pool",
                max_size=self.settings.DB_MAX_OPEN_CONNS,
                min_size=self.settings.pool_min_size,
            )
            self.pool = await asyncpg.create_pool(
                self.settings.database_url,
                min_size=self.settings.pool_min_size,
                max_size=self.settings.DB_MAX_OPEN_CONNS,
                max_inactive_connection_lifetime=self.settings.DB_CONN_MAX_AGE,
                command_timeout=self.settings.DB_COMMAND_TIMEOUT,
            )
            logger.info("Database connection pool created")
        return self.pool

    async def disconnect(self) -> None:
        """Close the connection pool."""
        if self.pool is not None:
            logger.info("Closing database connection pool")
            await self.pool.close()
            self.pool = None
            logger.info("Database connection pool closed")

    async def ensure_schema(self) -> None:
        """Create the products, orders and order_items tables if missing."""
        pool = await self.connect()
        async with pool.acquire() as conn:
            await conn.execute(SCHEMA_SQL)
        logger.info("Database schema ensured")
