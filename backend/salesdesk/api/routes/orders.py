"""Orders & Reports: order history and read-side projections.

Invariants:
    - Orders are never created here (checkout owns creation)
    - Status changes follow the core transition table: pending -> completed,
      anything else 409
    - Report endpoints are stateless projections over the order store
"""

from fastapi import APIRouter, Depends, Query

from salesdesk.api.dependencies import get_order_service
from salesdesk.core.domain_types import OrderStatus
from salesdesk.schemas.order import (
    CustomerResponse, DashboardResponse, OrderResponse, OrderStatusUpdate,
    ProductRevenueResponse,
)
from salesdesk.services.orders import OrderService

router = APIRouter(prefix="/api/v1/orders", tags=["orders"])
reports_router = APIRouter(prefix="/api/v1/reports", tags=["reports"])


@router.get("", response_model=list[OrderResponse])
async def list_orders(
    status_filter: OrderStatus | None = Query(None, alias="status"),
    orders: OrderService = Depends(get_order_service),
):
    return [OrderResponse.from_domain(o) for o in await orders.list_orders(status_filter)]


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: str, orders: OrderService = Depends(get_order_service),
):
    return OrderResponse.from_domain(await orders.get_order(order_id))


@router.patch("/{order_id}", response_model=OrderResponse)
async def update_order_status(
    order_id: str,
    body: OrderStatusUpdate,
    orders: OrderService = Depends(get_order_service),
):
    order = await orders.update_status(order_id, body.status)
    return OrderResponse.from_domain(order)


@reports_router.get("/customers", response_model=list[CustomerResponse])
async def list_customers(
    search: str = Query("", max_length=200),
    orders: OrderService = Depends(get_order_service),
):
    """Customers derived from orders, grouped by email."""
    return [CustomerResponse.from_domain(c) for c in await orders.customers(search)]


@reports_router.get("/summary", response_model=DashboardResponse)
async def dashboard_summary(orders: OrderService = Depends(get_order_service)):
    return DashboardResponse.from_domain(await orders.dashboard())


@reports_router.get("/revenue-by-product", response_model=list[ProductRevenueResponse])
async def revenue_by_product(orders: OrderService = Depends(get_order_service)):
    return [ProductRevenueResponse.from_domain(r) for r in await orders.revenue_by_product()]
