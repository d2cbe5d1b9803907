"""
Domain entities for orders.

Core business objects representing catalog products, priced order items
and orders. These entities are framework-agnostic and contain only
business logic.

Money is held as ``Decimal``. Line amounts are rounded half-up to cents
when an item is priced; order totals are exact sums of the rounded lines.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Union

MONEY_QUANTUM = Decimal("0.01")


def to_money(value: Union[Decimal, float, int, str]) -> Decimal:
    """
    Convert a numeric value to a cent-rounded Decimal.

    Floats go through ``str`` so that 0.1 becomes Decimal("0.1") and not
    its binary expansion.
    """
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class Product:
    """
    Catalog entry read by the service.

    Owned by an external catalog; immutable snapshot of price and VAT at
    lookup time.
    """

    id: int
    name: str
    price: Decimal
    vat: Decimal


@dataclass
class OrderItem:
    """Product reference with quantity and its computed price/VAT."""

    product_id: int
    quantity: int
    price: Decimal = Decimal("0")
    vat: Decimal = Decimal("0")

    def price_with(self, product: Product) -> None:
        """Compute line price and VAT from the product's unit values."""
        self.price = to_money(product.price * self.quantity)
        self.vat = to_money(product.vat * self.quantity)


@dataclass
class Order:
    """
    Purchase consisting of priced items and aggregate totals.

    ``id`` and ``created_at`` are assigned by the store on creation.
    """

    items: List[OrderItem] = field(default_factory=list)
    price: Decimal = Decimal("0")
    vat: Decimal = Decimal("0")
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def recalculate_totals(self) -> None:
        """Sum item prices and VAT in item order."""
        total_price = Decimal("0")
        total_vat = Decimal("0")
        for item in self.items:
            total_price += item.price
            total_vat += item.vat
        self.price = total_price
        self.vat = total_vat
