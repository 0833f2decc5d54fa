"""Reporting: read-side projections over orders, products and pages.

Invariants:
    - Stateless functions over sequences; nothing here is stored or mutated
    - Customers are keyed by email; the first order seen supplies the display name
    - total_revenue counts completed orders only; average_order_value counts all orders
"""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Sequence

from salesdesk.core.commerce import Order, Product
from salesdesk.core.domain_types import OrderStatus
from salesdesk.core.pricing import to_cents
from salesdesk.core.sales_page import SalesPage

RECENT_ORDER_LIMIT = 5


@dataclass
class CustomerSummary:
    email: str
    name: str
    orders: list[Order] = field(default_factory=list)
    total_spent: Decimal = Decimal("0")
    first_order: datetime | None = None
    last_order: datetime | None = None

    @property
    def order_count(self) -> int:
        return len(self.orders)


@dataclass(frozen=True)
class DashboardSummary:
    total_revenue: Decimal
    total_orders: int
    average_order_value: Decimal
    active_products: int
    sales_pages: int
    published_pages: int
    recent_orders: tuple[Order, ...]


@dataclass(frozen=True)
class ProductRevenue:
    product_name: str
    revenue: Decimal
    share: Decimal  # percent of total, 0-100


def total_revenue(orders: Iterable[Order]) -> Decimal:
    return to_cents(sum(
        (o.amount for o in orders if o.status is OrderStatus.COMPLETED),
        Decimal("0"),
    ))


def average_order_value(orders: Sequence[Order]) -> Decimal:
    if not orders:
        return to_cents(0)
    return to_cents(sum((o.amount for o in orders), Decimal("0")) / len(orders))


def _later(a: datetime | None, b: datetime | None) -> datetime | None:
    if a is None or b is None:
        return a or b
    return max(a, b)


def _earlier(a: datetime | None, b: datetime | None) -> datetime | None:
    if a is None or b is None:
        return a or b
    return min(a, b)


def group_customers(orders: Iterable[Order]) -> list[CustomerSummary]:
    """One summary per distinct email, in order of first appearance."""
    customers: dict[str, CustomerSummary] = {}
    for order in orders:
        summary = customers.get(order.customer_email)
        if summary is None:
            summary = CustomerSummary(email=order.customer_email, name=order.customer_name)
            customers[order.customer_email] = summary
        summary.orders.append(order)
        summary.total_spent += order.amount
        summary.first_order = _earlier(summary.first_order, order.created_at)
        summary.last_order = _later(summary.last_order, order.created_at)
    return list(customers.values())


def search_customers(
    customers: Iterable[CustomerSummary], term: str,
) -> list[CustomerSummary]:
    """Case-insensitive substring match on name or email."""
    needle = term.strip().lower()
    if not needle:
        return list(customers)
    return [
        c for c in customers
        if needle in c.name.lower() or needle in c.email.lower()
    ]


def recent_orders(orders: Iterable[Order], limit: int = RECENT_ORDER_LIMIT) -> list[Order]:
    dated = [o for o in orders if o.created_at is not None]
    return sorted(dated, key=lambda o: o.created_at, reverse=True)[:limit]


def dashboard_summary(
    orders: Sequence[Order],
    products: Iterable[Product],
    pages: Sequence[SalesPage],
) -> DashboardSummary:
    return DashboardSummary(
        total_revenue=total_revenue(orders),
        total_orders=len(orders),
        average_order_value=average_order_value(orders),
        active_products=sum(1 for p in products if p.is_active),
        sales_pages=len(pages),
        published_pages=sum(1 for p in pages if p.is_published),
        recent_orders=tuple(recent_orders(orders)),
    )


def revenue_by_product(orders: Iterable[Order]) -> list[ProductRevenue]:
    """Completed revenue per product name, largest first."""
    totals: dict[str, Decimal] = defaultdict(lambda: Decimal("0"))
    for order in orders:
        if order.status is OrderStatus.COMPLETED:
            totals[order.product_name] += order.amount
    grand = sum(totals.values(), Decimal("0"))
    rows = [
        ProductRevenue(
            product_name=name,
            revenue=to_cents(amount),
            share=to_cents(amount * 100 / grand) if grand else to_cents(0),
        )
        for name, amount in totals.items()
    ]
    return sorted(rows, key=lambda r: r.revenue, reverse=True)
