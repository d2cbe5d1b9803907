"""
Order workflow.

Validates a create request, prices every item against the product
catalog, aggregates totals and hands the priced order to the order store.
Each step fails fast: the first error aborts the remaining steps and
nothing is retried.
"""

import structlog

from ..domain.entities import Order, OrderItem
from ..domain.exceptions import (
    InvalidInputException,
    OrderNotFoundException,
    PersistenceException,
    ProductNotFoundException,
)
from ..metrics import track_order_created, track_order_fetched
from ..models import CreateOrderRequest, OrderItemResponse, OrderResponse
from ..repositories.order_repository import IOrderRepository, IProductRepository

logger = structlog.get_logger(__name__)


class OrderService:
    """Creates and retrieves priced orders."""

    def __init__(
        self,
        order_repo: IOrderRepository,
        product_repo: IProductRepository,
    ):
        """
        Initialize order service.

        Args:
            order_repo: Order store
            product_repo: Product catalog lookup
        """
        self.order_repo = order_repo
        self.product_repo = product_repo

    async def create_order(self, request: CreateOrderRequest) -> OrderResponse:
        """
        Create a new order.

        Steps:
        1. Reject requests without items
        2. Price each item in the order received
        3. Sum line prices and VAT into the order totals
        4. Persist the order with all of its items atomically
        5. Project the stored order into the response shape

        Args:
            request: Caller-supplied product ids and quantities

        Returns:
            Response with the new order id, totals and priced items

        Raises:
            InvalidInputException: If there are no items or a product is unknown
            TransientStorageException: If a product lookup fails
            PersistenceException: If the order store fails
        """
        requested = request.order.items
        if not requested:
            track_order_created("invalid")
            raise InvalidInputException(
                "order must contain at least one item", field="order.items"
            )

        order = Order(
            items=[
                OrderItem(product_id=item.product_id, quantity=item.quantity)
                for item in requested
            ]
        )

        for item in order.items:
            try:
                product = await self.product_repo.get_by_id(item.product_id)
            except ProductNotFoundException as e:
                track_order_created("invalid")
                logger.warning("Unknown product in order", product_id=item.product_id)
                raise InvalidInputException(e.message, field="product_id") from e
            item.price_with(product)

        order.recalculate_totals()

        try:
            created = await self.order_repo.create(order)
        except Exception as e:
            track_order_created("failure")
            logger.error("Failed to persist order", error=str(e), exc_info=True)
            raise PersistenceException(e) from e

        track_order_created("success", len(created.items))
        logger.info(
            "Order created",
            order_id=created.id,
            item_count=len(created.items),
            order_price=str(created.price),
        )
        return self._to_response(created)

    async def get_order(self, order_id: int) -> OrderResponse:
        """
        Retrieve an order by id.

        Items are echoed as stored; nothing is recomputed.

        Raises:
            OrderNotFoundException: If no order has this id
        """
        try:
            order = await self.order_repo.get_by_id(order_id)
        except OrderNotFoundException:
            track_order_fetched("not_found")
            raise
        except Exception:
            track_order_fetched("failure")
            raise

        track_order_fetched("success")
        return self._to_response(order)

    @staticmethod
    def _to_response(order: Order) -> OrderResponse:
        return OrderResponse(
            order_id=order.id,
            order_price=float(order.price),
            order_vat=float(order.vat),
            items=[
                OrderItemResponse(
                    product_id=item.product_id,
                    quantity=item.quantity,
                    price=float(item.price),
                    vat=float(item.vat),
                )
                for item in order.items
            ],
        )
