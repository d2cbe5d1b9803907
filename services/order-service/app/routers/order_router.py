"""
Order API router.

Thin HTTP boundary: request decoding and response encoding only.
Domain exceptions raised by the workflow are mapped to status codes by the
handlers registered in ``app.app``.
"""

import structlog
from fastapi import APIRouter, Depends, Path, status

from ..dependencies import get_order_service
from ..models import (
    INT64_MAX,
    INT64_MIN,
    CreateOrderRequest,
    ErrorResponse,
    OrderResponse,
)
from ..services.order_service import OrderService

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.post(
    "",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Invalid request body or unknown product", "model": ErrorResponse},
        500: {"description": "Order could not be persisted", "model": ErrorResponse},
    },
    summary="Create order",
)
async def create_order(
    request: CreateOrderRequest,
    service: OrderService = Depends(get_order_service),
):
    """Price the requested items against the catalog and persist the order."""
    logger.info("Creating order", item_count=len(request.order.items))
    return await service.create_order(request)


@router.get(
    "/{order_id}",
    response_model=OrderResponse,
    responses={
        400: {"description": "Invalid order ID", "model": ErrorResponse},
        404: {"description": "Order not found", "model": ErrorResponse},
    },
    summary="Get order",
)
async def get_order(
    order_id: int = Path(..., ge=INT64_MIN, le=INT64_MAX),
    service: OrderService = Depends(get_order_service),
):
    """Return a stored order with its priced items."""
    return await service.get_order(order_id)
