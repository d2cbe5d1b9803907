"""
Domain layer - Core business entities and rules.

This layer has no dependencies on infrastructure or frameworks.
"""

from .entities import MONEY_QUANTUM, Order, OrderItem, Product, to_money
from .exceptions import (
    InvalidInputException,
    OrderNotFoundException,
    OrderServiceException,
    PersistenceException,
    ProductNotFoundException,
    TransientStorageException,
)

__all__ = [
    "MONEY_QUANTUM",
    "Order",
    "OrderItem",
    "Product",
    "to_money",
    "OrderServiceException",
    "InvalidInputException",
    "ProductNotFoundException",
    "OrderNotFoundException",
    "TransientStorageException",
    "PersistenceException",
]
