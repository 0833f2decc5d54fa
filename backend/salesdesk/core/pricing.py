"""Pricing Engine: order totals for a product plus the optional order bump.

Invariants:
    - subtotal == product price
    - add_on_total == add-on price when accepted, else 0
    - grand_total == subtotal + add_on_total, in Decimal quantized to cents
    - Total over any non-negative price; no error conditions
    - Display formatting lives in format_money(), never in OrderTotals
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from salesdesk.core.commerce import Product

CENTS = Decimal("0.01")
DEFAULT_ADD_ON_PRICE = Decimal("29.99")


def to_cents(amount: Decimal | int | str) -> Decimal:
    return Decimal(str(amount)).quantize(CENTS, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Decimal
    add_on_total: Decimal
    grand_total: Decimal


def compute_total(
    product: Product,
    add_on_accepted: bool,
    add_on_price: Decimal = DEFAULT_ADD_ON_PRICE,
) -> OrderTotals:
    subtotal = to_cents(product.price)
    add_on_total = to_cents(add_on_price) if add_on_accepted else to_cents(0)
    return OrderTotals(
        subtotal=subtotal,
        add_on_total=add_on_total,
        grand_total=subtotal + add_on_total,
    )


def format_money(amount: Decimal) -> str:
    """'$326.99' with thousands separators."""
    return f"${to_cents(amount):,.2f}"
