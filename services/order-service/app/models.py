"""Pydantic models for request/response validation."""

from typing import List

from pydantic import BaseModel, Field, StrictInt

# Ranges of the BIGINT id columns and the INTEGER quantity column
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


class OrderItemRequest(BaseModel):
    """Item as supplied by the caller: product and quantity only."""

    product_id: StrictInt = Field(
        ..., ge=INT64_MIN, le=INT64_MAX, description="Catalog product identifier"
    )
    quantity: StrictInt = Field(
        ..., ge=INT32_MIN, le=INT32_MAX, description="Number of units"
    )


class OrderItemsRequest(BaseModel):
    """Wrapper holding the requested items."""

    items: List[OrderItemRequest] = Field(default_factory=list)


class CreateOrderRequest(BaseModel):
    """Request model for creating an order."""

    order: OrderItemsRequest

    model_config = {
        "json_schema_extra": {
            "example": {
                "order": {
                    "items": [
                        {"product_id": 1, "quantity": 2},
                        {"product_id": 2, "quantity": 3},
                    ]
                }
            }
        }
    }


class OrderItemResponse(BaseModel):
    """Priced order item."""

    product_id: int
    quantity: int
    price: float
    vat: float


class OrderResponse(BaseModel):
    """Read-only projection of a persisted order."""

    order_id: int
    order_price: float
    order_vat: float
    items: List[OrderItemResponse]


class ErrorResponse(BaseModel):
    """Error response model."""

    error: str
    message: str
