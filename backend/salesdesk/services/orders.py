"""Order Service: order history reads, status updates, and report projections.

Invariants:
    - Reads only, except update_status (pending -> completed)
    - Report figures come from core/reporting.py; nothing is cached or stored
"""

from salesdesk.core import reporting
from salesdesk.core.commerce import Order, change_order_status
from salesdesk.core.domain_types import OrderStatus
from salesdesk.core.errors import ErrorContext, ResourceNotFoundError
from salesdesk.core.repository_protocols import (
    OrderRepository, PageRepository, ProductRepository,
)


class OrderService:
    def __init__(
        self,
        orders: OrderRepository,
        products: ProductRepository,
        pages: PageRepository,
    ):
        self.orders = orders
        self.products = products
        self.pages = pages

    async def list_orders(self, status: OrderStatus | None = None) -> list[Order]:
        return await self.orders.list_all(status)

    async def get_order(self, order_id: str) -> Order:
        order = await self.orders.get(order_id)
        if order is None:
            raise ResourceNotFoundError(
                "Order", order_id, ErrorContext(order_id=order_id),
            )
        return order

    async def update_status(self, order_id: str, status: OrderStatus) -> Order:
        order = await self.get_order(order_id)
        return await self.orders.save(change_order_status(order, status))

    async def customers(self, search: str = "") -> list[reporting.CustomerSummary]:
        customers = reporting.group_customers(await self.orders.list_all())
        return reporting.search_customers(customers, search)

    async def dashboard(self) -> reporting.DashboardSummary:
        return reporting.dashboard_summary(
            await self.orders.list_all(),
            await self.products.list_all(),
            await self.pages.list_all(),
        )

    async def revenue_by_product(self) -> list[reporting.ProductRevenue]:
        return reporting.revenue_by_product(await self.orders.list_all())
