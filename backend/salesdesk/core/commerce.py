"""Commerce Records: catalog products and checkout orders.

Invariants:
    - Product.price is a non-negative Decimal; violations rejected at creation/update
    - Order.amount is frozen at creation; later product price changes never touch it
    - OrderDraft has no id or timestamp: the order store assigns both
    - Only pending orders may change status (pending -> completed)
"""

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from salesdesk.core.domain_types import (
    OrderStatus, PaymentMethod, ProductStatus, ProductType,
)
from salesdesk.core.errors import (
    InvalidOrderTransitionError, ProductValidationError,
)


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    price: Decimal
    description: str = ""
    image: str = ""
    product_type: ProductType = ProductType.DIGITAL
    status: ProductStatus = ProductStatus.ACTIVE
    created_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        return self.status is ProductStatus.ACTIVE


@dataclass(frozen=True)
class OrderDraft:
    customer_name: str
    customer_email: str
    product_name: str
    amount: Decimal
    status: OrderStatus = OrderStatus.COMPLETED
    payment_method: PaymentMethod = PaymentMethod.CREDIT_CARD
    page_id: str | None = None
    add_on_accepted: bool = False
    payment_reference: str | None = None
    idempotency_key: str | None = None


@dataclass(frozen=True)
class Order(OrderDraft):
    id: str = ""
    created_at: datetime | None = None


def to_price(value: Any, field: str = "price") -> Decimal:
    """Parse a price, rejecting negatives and non-numbers."""
    try:
        price = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ProductValidationError(f"'{field}' must be a number", field) from None
    if not price.is_finite():
        raise ProductValidationError(f"'{field}' must be a finite number", field)
    if price < 0:
        raise ProductValidationError(f"'{field}' must not be negative", field)
    return price


def validate_product(product: Product) -> Product:
    if not product.name.strip():
        raise ProductValidationError("'name' must not be empty", "name")
    return replace(product, price=to_price(product.price))


_ORDER_TRANSITIONS = frozenset({(OrderStatus.PENDING, OrderStatus.COMPLETED)})


def change_order_status(order: Order, requested: OrderStatus | str) -> Order:
    """pending -> completed only. Completed orders are historical facts."""
    requested = OrderStatus(requested)
    if (order.status, requested) not in _ORDER_TRANSITIONS:
        raise InvalidOrderTransitionError(
            order.id, order.status.value, requested.value,
        )
    return replace(order, status=requested)
