"""
Order and product repository interfaces (Abstract Base Classes).

Define the contract for catalog lookups and order persistence
independent of the underlying storage mechanism.
"""

from abc import ABC, abstractmethod

from ..domain.entities import Order, Product


class IProductRepository(ABC):
    """Read-only access to the external product catalog."""

    @abstractmethod
    async def get_by_id(self, product_id: int) -> Product:
        """
        Fetch a product's unit price and VAT.

        Args:
            product_id: Catalog identifier

        Returns:
            Product snapshot at call time

        Raises:
            ProductNotFoundException: If no product has this identifier
            TransientStorageException: If the catalog store fails
        """
        pass


class IOrderRepository(ABC):
    """
    Persistence for priced orders.

    Orders are written once and never updated or deleted.
    """

    @abstractmethod
    async def create(self, order: Order) -> Order:
        """
        Persist an order header and all of its items atomically.

        Args:
            order: Fully priced order without id or timestamp

        Returns:
            The same order with store-assigned ``id`` and ``created_at``

        Raises:
            Exception: Whatever the store raised; nothing is left persisted
        """
        pass

    @abstractmethod
    async def get_by_id(self, order_id: int) -> Order:
        """
        Load an order with its complete item list.

        Args:
            order_id: Order identifier

        Returns:
            Order entity; items may be empty if the header has none

        Raises:
            OrderNotFoundException: If no order has this identifier
        """
        pass
