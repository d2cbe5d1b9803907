"""
Custom exceptions for the order service domain.

These exceptions represent domain-level errors and are independent
of infrastructure concerns (HTTP, database, etc.).
"""

from typing import Optional


class OrderServiceException(Exception):
    """Base exception for all order service errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InvalidInputException(OrderServiceException):
    """Raised when a request cannot be processed as given by the caller."""

    def __init__(self, reason: str, field: Optional[str] = None):
        super().__init__(message=reason, details={"field": field, "reason": reason})


class ProductNotFoundException(OrderServiceException):
    """Raised when no catalog product exists for an identifier."""

    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(
            message=f"product {product_id} not found",
            details={"product_id": product_id},
        )


class OrderNotFoundException(OrderServiceException):
    """Raised when no order exists for an identifier."""

    def __init__(self, order_id: int):
        self.order_id = order_id
        super().__init__(
            message=f"order {order_id} not found", details={"order_id": order_id}
        )


class TransientStorageException(OrderServiceException):
    """Raised when the underlying store fails (connectivity, timeout)."""

    def __init__(self, operation: str, reason: Optional[str] = None):
        message = f"Storage {operation} failed"
        if reason:
            message += f": {reason}"
        super().__init__(
            message=message, details={"operation": operation, "reason": reason}
        )


class PersistenceException(OrderServiceException):
    """Raised when an order cannot be persisted; wraps the cause."""

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(
            message=f"failed to create order: {cause}",
            details={"cause": type(cause).__name__},
        )
