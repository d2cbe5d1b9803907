"""
PostgreSQL implementation of the product and order repositories.

Both repositories receive an asyncpg pool at construction and acquire a
connection per call, releasing it on every exit path.
"""

import asyncio
import json
import time
from dataclasses import replace
from decimal import Decimal
from typing import Any

import asyncpg
import structlog

from ..domain.entities import Order, OrderItem, Product
from ..domain.exceptions import (
    OrderNotFoundException,
    ProductNotFoundException,
    TransientStorageException,
)
from ..metrics import track_db_operation
from .order_repository import IOrderRepository, IProductRepository

logger = structlog.get_logger(__name__)

# Failures of the store itself, as opposed to "no such row".
STORAGE_ERRORS = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    asyncio.TimeoutError,
)

SELECT_PRODUCT = "SELECT id, name, price, vat FROM products WHERE id = $1"

INSERT_ORDER = """
    INSERT INTO orders (price, vat, created_at)
    VALUES ($1, $2, NOW())
    RETURNING id, created_at
"""

INSERT_ORDER_ITEM = """
    INSERT INTO order_items (order_id, product_id, quantity, price, vat)
    VALUES ($1, $2, $3, $4, $5)
"""

SELECT_ORDER = """
    SELECT o.id, o.price, o.vat, o.created_at,
           COALESCE(
               json_agg(
                   json_build_object(
                       'product_id', oi.product_id,
                       'quantity', oi.quantity,
                       'price', oi.price,
                       'vat', oi.vat
                   ) ORDER BY oi.id
               ) FILTER (WHERE oi.id IS NOT NULL),
               '[]'
           ) AS items
    FROM orders o
    LEFT JOIN order_items oi ON o.id = oi.order_id
    WHERE o.id = $1
    GROUP BY o.id
"""


def _as_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class PostgresProductRepository(IProductRepository):
    """Catalog lookups against the ``products`` table."""

    def __init__(self, pool: asyncpg.Pool):
        """
        Initialize repository.

        Args:
            pool: asyncpg connection pool shared with the order repository
        """
        self.pool = pool

    async def get_by_id(self, product_id: int) -> Product:
        """Fetch one product; no caching, every call reads current values."""
        start_time = time.time()
        try:
            async with self.pool.acquire() as conn:
                row = await conn.fetchrow(SELECT_PRODUCT, product_id)
        except STORAGE_ERRORS as e:
            track_db_operation("get_product", False, time.time() - start_time)
            logger.error("Product lookup failed", product_id=product_id, error=str(e))
            raise TransientStorageException("get_product", str(e)) from e

        track_db_operation("get_product", True, time.time() - start_time)

        if row is None:
            raise ProductNotFoundException(product_id)

        return Product(
            id=row["id"],
            name=row["name"],
            price=_as_decimal(row["price"]),
            vat=_as_decimal(row["vat"]),
        )


class PostgresOrderRepository(IOrderRepository):
    """Order persistence in the ``orders`` and ``order_items`` tables."""

    def __init__(self, pool: asyncpg.Pool):
        """
        Initialize repository.

        Args:
            pool: asyncpg connection pool
        """
        self.pool = pool

    async def create(self, order: Order) -> Order:
        """
        Insert the order header and every item in one transaction.

        The transaction commits only after all inserts succeed. Any error,
        including task cancellation, rolls it back and is re-raised.
        """
        start_time = time.time()
        try:
            async with self.pool.acquire() as conn:
                async with conn.transaction():
                    header = await conn.fetchrow(INSERT_ORDER, order.price, order.vat)
                    order_id = header["id"]
                    for item in order.items:
                        await conn.execute(
                            INSERT_ORDER_ITEM,
                            order_id,
                            item.product_id,
                            item.quantity,
                            item.price,
                            item.vat,
                        )
        except Exception as e:
            track_db_operation("create_order", False, time.time() - start_time)
            logger.error(
                "Order insert rolled back",
                item_count=len(order.items),
                error=str(e),
            )
            raise

        track_db_operation("create_order", True, time.time() - start_time)
        logger.info("Order persisted", order_id=order_id, item_count=len(order.items))

        return replace(
            order,
            id=order_id,
            created_at=header["created_at"],
            items=list(order.items),
        )

    async def get_by_id(self, order_id: int) -> Order:
        """Load header and items with a single aggregated query."""
        start_time = time.time()
        try:
            async with self.pool.acquire() as conn:
                row = await conn.fetchrow(SELECT_ORDER, order_id)
        except STORAGE_ERRORS as e:
            track_db_operation("get_order", False, time.time() - start_time)
            logger.error("Order lookup failed", order_id=order_id, error=str(e))
            raise TransientStorageException("get_order", str(e)) from e

        track_db_operation("get_order", True, time.time() - start_time)

        if row is None:
            raise OrderNotFoundException(order_id)

        return Order(
            id=row["id"],
            price=_as_decimal(row["price"]),
            vat=_as_decimal(row["vat"]),
            created_at=row["created_at"],
            items=self._map_items(row["items"]),
        )

    def _map_items(self, raw_items: Any) -> list:
        """Map the json_agg column to order items."""
        if isinstance(raw_items, (str, bytes)):
            raw_items = json.loads(raw_items, parse_float=Decimal)

        return [
            OrderItem(
                product_id=int(entry["product_id"]),
                quantity=int(entry["quantity"]),
                price=_as_decimal(entry["price"]),
                vat=_as_decimal(entry["vat"]),
            )
            for entry in raw_items or []
        ]
