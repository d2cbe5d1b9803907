"""
Test configuration and fixtures.
"""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from app.app import create_app
from app.config import Settings
from app.domain.entities import Product
from app.repositories.memory_repository import (
    InMemoryOrderRepository,
    InMemoryProductRepository,
)
from app.services.order_service import OrderService


@pytest.fixture
def products():
    """Catalog used by the pricing scenarios."""
    return [
        Product(id=1, name="Product 1", price=Decimal("10.00"), vat=Decimal("1.00")),
        Product(id=2, name="Product 2", price=Decimal("5.00"), vat=Decimal("0.50")),
    ]


@pytest.fixture
def product_repo(products):
    return InMemoryProductRepository(products)


@pytest.fixture
def order_repo():
    return InMemoryOrderRepository()


@pytest.fixture
def order_service(order_repo, product_repo):
    return OrderService(order_repo=order_repo, product_repo=product_repo)


@pytest.fixture
def test_settings():
    return Settings(ENV="test", STORAGE_BACKEND="memory", LOG_LEVEL="warning")


@pytest.fixture
def client(test_settings, order_service):
    """Test client backed by the in-memory repositories."""
    app = create_app(test_settings, order_service=order_service)
    with TestClient(app) as test_client:
        yield test_client
