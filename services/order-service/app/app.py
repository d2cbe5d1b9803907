"""
Main FastAPI application.

Wires together all layers:
- Domain: Business entities and rules
- Repositories: Product catalog and order store
- Services: Order workflow
- Routers: HTTP endpoints
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from . import __version__
from .config import Settings, settings
from .database import DatabaseManager
from .domain.exceptions import (
    InvalidInputException,
    OrderNotFoundException,
    OrderServiceException,
    PersistenceException,
    TransientStorageException,
)
from .logging_config import setup_logging
from .metrics import metrics_endpoint, track_request_metrics
from .metrics_middleware import PrometheusMiddleware
from .repositories.memory_repository import (
    DEMO_CATALOG,
    InMemoryOrderRepository,
    InMemoryProductRepository,
)
from .repositories.postgres_repository import (
    PostgresOrderRepository,
    PostgresProductRepository,
)
from .routers import health_router, order_router
from .services.order_service import OrderService

logger = structlog.get_logger(__name__)


async def build_order_service(config: Settings, db: DatabaseManager) -> OrderService:
    """
    Create the order service for the configured storage backend.

    Args:
        config: Application settings
        db: Database manager; only connected for the postgres backend

    Returns:
        Configured OrderService instance
    """
    if config.STORAGE_BACKEND == "memory":
        logger.warning("Using in-memory storage; orders are lost on restart")
        return OrderService(
            order_repo=InMemoryOrderRepository(),
            product_repo=InMemoryProductRepository(DEMO_CATALOG),
        )

    pool = await db.connect()
    if config.DB_AUTO_CREATE_SCHEMA:
        await db.ensure_schema()

    return OrderService(
        order_repo=PostgresOrderRepository(pool),
        product_repo=PostgresProductRepository(pool),
    )


def _error_response(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"error": error, "message": message}
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain exceptions to HTTP responses."""

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        if any(error.get("loc", ("",))[0] == "path" for error in exc.errors()):
            message = "Invalid order ID"
        else:
            message = "Invalid request body"
        logger.info("Rejected request", path=request.url.path, reason=message)
        return _error_response(status.HTTP_400_BAD_REQUEST, "invalid_input", message)

    @app.exception_handler(InvalidInputException)
    async def invalid_input_handler(request: Request, exc: InvalidInputException):
        return _error_response(status.HTTP_400_BAD_REQUEST, "invalid_input", exc.message)

    @app.exception_handler(OrderNotFoundException)
    async def not_found_handler(request: Request, exc: OrderNotFoundException):
        return _error_response(status.HTTP_404_NOT_FOUND, "not_found", exc.message)

    @app.exception_handler(PersistenceException)
    async def persistence_handler(request: Request, exc: PersistenceException):
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "persistence_error", exc.message
        )

    @app.exception_handler(TransientStorageException)
    async def storage_handler(request: Request, exc: TransientStorageException):
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "storage_error", exc.message
        )

    @app.exception_handler(OrderServiceException)
    async def service_exception_handler(request: Request, exc: OrderServiceException):
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_error", exc.message
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=True,
        )
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "internal_server_error",
            "An unexpected error occurred",
        )


def create_app(
    config: Optional[Settings] = None,
    order_service: Optional[OrderService] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Settings to use, defaults to the environment-loaded settings
        order_service: Pre-built service; skips storage setup when given

    Returns:
        Configured FastAPI application
    """
    config = config or settings
    db = DatabaseManager(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info(
            "Starting Order Service",
            service=config.SERVICE_NAME,
            version=__version__,
            env=config.ENV,
            storage=config.STORAGE_BACKEND,
        )
        app.state.order_service = order_service or await build_order_service(config, db)
        logger.info("Order Service started")

        yield

        logger.info("Shutting down Order Service", service=config.SERVICE_NAME)
        await db.disconnect()
        logger.info("Order Service stopped")

    app = FastAPI(
        title=config.SERVICE_NAME,
        description="Create and retrieve priced orders",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if config.is_development else None,
        redoc_url="/redoc" if config.is_development else None,
    )
    app.state.settings = config
    app.state.db = db

    app.add_middleware(PrometheusMiddleware, track_func=track_request_metrics)

    @app.middleware("http")
    async def add_request_id(request: Request, call_next):
        """Bind a request ID to the log context and echo it back."""
        request_id = request.headers.get("X-Request-ID", f"req-{id(request)}")
        structlog.contextvars.bind_contextvars(request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.clear_contextvars()
        response.headers["X-Request-ID"] = request_id
        return response

    register_exception_handlers(app)

    app.include_router(order_router.router)
    app.include_router(health_router.router)

    @app.get("/metrics", include_in_schema=False)
    async def metrics():
        """Prometheus metrics endpoint."""
        return await metrics_endpoint()

    return app


setup_logging(settings.LOG_LEVEL, use_json=not settings.is_development)
app = create_app()
