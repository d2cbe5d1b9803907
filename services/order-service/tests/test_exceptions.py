"""
Tests for domain exceptions.

Simple tests to ensure exceptions carry their messages and details.
"""

from app.domain.exceptions import (
    InvalidInputException,
    OrderNotFoundException,
    OrderServiceException,
    PersistenceException,
    ProductNotFoundException,
    TransientStorageException,
)


class TestExceptions:
    """Test custom exceptions."""

    def test_invalid_input_exception(self):
        exc = InvalidInputException("order must contain at least one item", field="order.items")
        assert str(exc) == "order must contain at least one item"
        assert exc.details["field"] == "order.items"

    def test_product_not_found_exception(self):
        exc = ProductNotFoundException(42)
        assert str(exc) == "product 42 not found"
        assert exc.product_id == 42

    def test_order_not_found_exception(self):
        exc = OrderNotFoundException(999)
        assert "999" in str(exc)
        assert exc.details == {"order_id": 999}

    def test_transient_storage_exception(self):
        exc = TransientStorageException("get_product", "connection refused")
        assert "get_product" in str(exc)
        assert "connection refused" in str(exc)

    def test_persistence_exception_wraps_cause(self):
        cause = RuntimeError("disk full")
        exc = PersistenceException(cause)
        assert exc.cause is cause
        assert "disk full" in str(exc)
        assert exc.details["cause"] == "RuntimeError"

    def test_all_inherit_from_base(self):
        for exc in (
            InvalidInputException("x"),
            ProductNotFoundException(1),
            OrderNotFoundException(1),
            TransientStorageException("op"),
            PersistenceException(ValueError("x")),
        ):
            assert isinstance(exc, OrderServiceException)
