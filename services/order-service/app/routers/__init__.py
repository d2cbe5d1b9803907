"""
API routers for order service endpoints.
"""

from . import health_router, order_router

__all__ = ["order_router", "health_router"]
