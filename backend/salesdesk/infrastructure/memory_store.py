"""In-Memory Stores: dict-backed implementations of the store protocols.

Invariants:
    - One dict per store, keyed by id; insertion order is list order
    - Instances are constructed explicitly and injected; no module-level state
    - Records are frozen dataclasses, so stored values cannot be mutated by callers
"""

from dataclasses import fields, replace

from salesdesk.core.commerce import Order, OrderDraft, Product
from salesdesk.core.domain_types import OrderStatus, new_id
from salesdesk.core.sales_page import SalesPage, utcnow


class InMemoryProductRepository:
    def __init__(self, products: list[Product] | None = None):
        self._products: dict[str, Product] = {p.id: p for p in products or []}

    async def get(self, product_id: str) -> Product | None:
        return self._products.get(product_id)

    async def list_all(self) -> list[Product]:
        return list(self._products.values())

    async def add(self, product: Product) -> Product:
        stored = replace(
            product,
            id=product.id or new_id(),
            created_at=product.created_at or utcnow(),
        )
        self._products[stored.id] = stored
        return stored

    async def save(self, product: Product) -> Product:
        self._products[product.id] = product
        return product

    async def delete(self, product_id: str) -> bool:
        return self._products.pop(product_id, None) is not None


class InMemoryPageRepository:
    def __init__(self, pages: list[SalesPage] | None = None):
        self._pages: dict[str, SalesPage] = {p.id: p for p in pages or []}

    async def get(self, page_id: str) -> SalesPage | None:
        return self._pages.get(page_id)

    async def save(self, page: SalesPage) -> None:
        self._pages[page.id] = page

    async def delete(self, page_id: str) -> bool:
        return self._pages.pop(page_id, None) is not None

    async def list_all(self) -> list[SalesPage]:
        return list(self._pages.values())


class InMemoryOrderRepository:
    def __init__(self, orders: list[Order] | None = None):
        self._orders: dict[str, Order] = {o.id: o for o in orders or []}

    def __len__(self) -> int:
        return len(self._orders)

    async def add(self, draft: OrderDraft) -> Order:
        order = Order(
            **{f.name: getattr(draft, f.name) for f in fields(OrderDraft)},
            id=new_id(),
            created_at=utcnow(),
        )
        self._orders[order.id] = order
        return order

    async def reserve(self, draft: OrderDraft) -> Order | None:
        if draft.idempotency_key and await self.get_by_idempotency_key(draft.idempotency_key):
            return None
        return await self.add(draft)

    async def discard(self, order_id: str) -> None:
        self._orders.pop(order_id, None)

    async def get(self, order_id: str) -> Order | None:
        return self._orders.get(order_id)

    async def get_by_idempotency_key(self, key: str) -> Order | None:
        return next(
            (o for o in self._orders.values() if o.idempotency_key == key), None,
        )

    async def list_all(self, status: OrderStatus | None = None) -> list[Order]:
        orders = list(self._orders.values())
        if status is not None:
            orders = [o for o in orders if o.status is status]
        return orders

    async def save(self, order: Order) -> Order:
        self._orders[order.id] = order
        return order
