"""Order Service: tests for order reads, status updates and reports.

Tests cover:
    - list_orders filters by status
    - update_status moves pending -> completed; any other move 409
    - customers() groups checkout orders by email, with search
    - dashboard() and revenue_by_product() reflect recorded orders
"""

from decimal import Decimal

import pytest

from salesdesk.core.commerce import OrderDraft
from salesdesk.core.domain_types import OrderStatus
from salesdesk.core.errors import InvalidOrderTransitionError, ResourceNotFoundError


async def _pending(order_store):
    return await order_store.add(OrderDraft(
        customer_name="Lee", customer_email="lee@example.com",
        product_name="Course", amount=Decimal("10.00"), status=OrderStatus.PENDING,
    ))


async def test_list_orders_by_status(order_service, order_store, checkout, published_page, buyer):
    await checkout.submit(published_page.id, buyer)
    pending = await _pending(order_store)

    assert [o.id for o in await order_service.list_orders(OrderStatus.PENDING)] == [pending.id]
    assert len(await order_service.list_orders()) == 2


async def test_complete_pending_order(order_service, order_store):
    pending = await _pending(order_store)
    completed = await order_service.update_status(pending.id, OrderStatus.COMPLETED)
    assert completed.status is OrderStatus.COMPLETED
    assert (await order_store.get(pending.id)).status is OrderStatus.COMPLETED


async def test_reopening_is_rejected(order_service, order_store):
    pending = await _pending(order_store)
    await order_service.update_status(pending.id, OrderStatus.COMPLETED)
    with pytest.raises(InvalidOrderTransitionError):
        await order_service.update_status(pending.id, OrderStatus.PENDING)
    assert (await order_store.get(pending.id)).status is OrderStatus.COMPLETED


async def test_complete_twice_conflicts(order_service, order_store):
    pending = await _pending(order_store)
    await order_service.update_status(pending.id, OrderStatus.COMPLETED)
    with pytest.raises(InvalidOrderTransitionError):
        await order_service.update_status(pending.id, OrderStatus.COMPLETED)


async def test_get_unknown_order(order_service):
    with pytest.raises(ResourceNotFoundError) as exc:
        await order_service.get_order("nope")
    assert exc.value.context.order_id == "nope"


async def test_customers_grouped_and_searchable(order_service, order_store, checkout, published_page, buyer):
    await checkout.submit(published_page.id, buyer)
    await checkout.submit(published_page.id, buyer, add_on_accepted=True)
    await _pending(order_store)

    customers = await order_service.customers()
    assert [c.email for c in customers] == ["jo@example.com", "lee@example.com"]
    assert customers[0].order_count == 2
    assert customers[0].total_spent == Decimal("109.97")

    assert [c.name for c in await order_service.customers("LEE")] == ["Lee"]


async def test_dashboard(order_service, checkout, published_page, buyer):
    await checkout.submit(published_page.id, buyer)
    summary = await order_service.dashboard()
    assert summary.total_orders == 1
    assert summary.total_revenue == Decimal("39.99")
    assert summary.active_products == 2
    assert summary.sales_pages == 1
    assert summary.published_pages == 1


async def test_revenue_by_product(order_service, checkout, published_page, buyer):
    await checkout.submit(published_page.id, buyer)
    rows = await order_service.revenue_by_product()
    assert [(r.product_name, r.share) for r in rows] == [
        ("Habit Tracker Template", Decimal("100.00")),
    ]
