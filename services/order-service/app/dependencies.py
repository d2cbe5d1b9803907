"""
Shared dependencies for the application.

Provides dependency injection functions used across routers.
"""

from fastapi import Request

from .services.order_service import OrderService


async def get_order_service(request: Request) -> OrderService:
    """
    Get the order service created during application startup.

    Raises:
        RuntimeError: If the application lifespan has not run
    """
    service = getattr(request.app.state, "order_service", None)
    if service is None:
        raise RuntimeError("Order service not initialized")
    return service
