"""Order Schemas: order history, status updates and report projections.

Invariants:
    - Money fields are Decimal (serialized as strings, two decimal places)
    - OrderStatusUpdate accepts any OrderStatus; the core decides which moves are legal
"""

from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel

from salesdesk.core.commerce import Order
from salesdesk.core.domain_types import OrderStatus, PaymentMethod
from salesdesk.core.pricing import format_money
from salesdesk.core.reporting import CustomerSummary, DashboardSummary, ProductRevenue


class OrderResponse(BaseModel):
    id: str
    customer_name: str
    customer_email: str
    product_name: str
    amount: Decimal
    display_amount: str
    status: OrderStatus
    payment_method: PaymentMethod
    page_id: str | None
    add_on_accepted: bool
    created_at: datetime | None

    @classmethod
    def from_domain(cls, order: Order) -> "OrderResponse":
        return cls(
            id=order.id,
            customer_name=order.customer_name,
            customer_email=order.customer_email,
            product_name=order.product_name,
            amount=order.amount,
            display_amount=format_money(order.amount),
            status=order.status,
            payment_method=order.payment_method,
            page_id=order.page_id,
            add_on_accepted=order.add_on_accepted,
            created_at=order.created_at,
        )


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class CustomerResponse(BaseModel):
    email: str
    name: str
    order_count: int
    total_spent: Decimal
    first_order: datetime | None
    last_order: datetime | None
    orders: list[OrderResponse]

    @classmethod
    def from_domain(cls, customer: CustomerSummary) -> "CustomerResponse":
        return cls(
            email=customer.email,
            name=customer.name,
            order_count=customer.order_count,
            total_spent=customer.total_spent,
            first_order=customer.first_order,
            last_order=customer.last_order,
            orders=[OrderResponse.from_domain(o) for o in customer.orders],
        )


class DashboardResponse(BaseModel):
    total_revenue: Decimal
    total_orders: int
    average_order_value: Decimal
    active_products: int
    sales_pages: int
    published_pages: int
    recent_orders: list[OrderResponse]

    @classmethod
    def from_domain(cls, summary: DashboardSummary) -> "DashboardResponse":
        return cls(
            total_revenue=summary.total_revenue,
            total_orders=summary.total_orders,
            average_order_value=summary.average_order_value,
            active_products=summary.active_products,
            sales_pages=summary.sales_pages,
            published_pages=summary.published_pages,
            recent_orders=[OrderResponse.from_domain(o) for o in summary.recent_orders],
        )


class ProductRevenueResponse(BaseModel):
    product_name: str
    revenue: Decimal
    share: Decimal

    @classmethod
    def from_domain(cls, row: ProductRevenue) -> "ProductRevenueResponse":
        return cls(product_name=row.product_name, revenue=row.revenue, share=row.share)
