"""
In-memory implementation of the product and order repositories.

Used by tests and by ``STORAGE_BACKEND=memory`` for local runs without a
database. State lives in the repository instance, never at module level.
"""

import asyncio
import copy
import itertools
from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, Iterable, Optional

from ..domain.entities import Order, Product
from ..domain.exceptions import OrderNotFoundException, ProductNotFoundException
from .order_repository import IOrderRepository, IProductRepository

DEMO_CATALOG = (
    Product(id=1, name="Espresso Beans 1kg", price=Decimal("10.00"), vat=Decimal("1.00")),
    Product(id=2, name="Paper Filters x100", price=Decimal("5.00"), vat=Decimal("0.50")),
    Product(id=3, name="Ceramic Mug", price=Decimal("7.90"), vat=Decimal("1.74")),
)


class InMemoryProductRepository(IProductRepository):
    """Dict-backed product catalog."""

    def __init__(self, products: Iterable[Product] = ()):
        self.products: Dict[int, Product] = {p.id: p for p in products}

    def add(self, product: Product) -> None:
        self.products[product.id] = product

    async def get_by_id(self, product_id: int) -> Product:
        product = self.products.get(product_id)
        if product is None:
            raise ProductNotFoundException(product_id)
        return product


class InMemoryOrderRepository(IOrderRepository):
    """
    Dict-backed order store.

    Orders are stored as deep copies so that callers cannot mutate a
    persisted order. ``fail_with`` makes the next ``create`` calls raise
    the given exception without storing anything.
    """

    def __init__(self, fail_with: Optional[Exception] = None):
        self.orders: Dict[int, Order] = {}
        self.fail_with = fail_with
        self.create_calls = 0
        self._ids = itertools.count(1)
        self._lock = asyncio.Lock()

    async def create(self, order: Order) -> Order:
        self.create_calls += 1
        if self.fail_with is not None:
            raise self.fail_with

        async with self._lock:
            stored = copy.deepcopy(order)
            stored.id = next(self._ids)
            stored.created_at = datetime.now(timezone.utc)
            self.orders[stored.id] = stored

        return copy.deepcopy(stored)

    async def get_by_id(self, order_id: int) -> Order:
        stored = self.orders.get(order_id)
        if stored is None:
            raise OrderNotFoundException(order_id)
        return copy.deepcopy(stored)
