"""Boundary Protocols: contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - All IO (stores, payment) accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - Lookups return None on absence; callers decide whether that is a 404

Design Decisions:
    - Protocol over ABC: structural subtyping, SQL and in-memory stores share no base class
    - Async methods: implementations do IO; the pure functions that consume
      their results are never async themselves
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol

from salesdesk.core.commerce import Order, OrderDraft, Product
from salesdesk.core.domain_types import OrderStatus, PaymentMethod
from salesdesk.core.sales_page import SalesPage


class ProductRepository(Protocol):
    """Catalog lookup and CRUD, keyed by product id."""
    async def get(self, product_id: str) -> Product | None: ...
    async def list_all(self) -> list[Product]: ...
    async def add(self, product: Product) -> Product: ...
    async def save(self, product: Product) -> Product: ...
    async def delete(self, product_id: str) -> bool: ...


class PageRepository(Protocol):
    """Key-addressable page store."""
    async def get(self, page_id: str) -> SalesPage | None: ...
    async def save(self, page: SalesPage) -> None: ...
    async def delete(self, page_id: str) -> bool: ...
    async def list_all(self) -> list[SalesPage]: ...


class OrderRepository(Protocol):
    """Append-mostly order store. add() assigns id and created_at.

    reserve() inserts only if the draft's idempotency key is unbound and
    returns None otherwise; the check and the insert are one atomic step.
    """
    async def add(self, draft: OrderDraft) -> Order: ...
    async def reserve(self, draft: OrderDraft) -> Order | None: ...
    async def discard(self, order_id: str) -> None: ...
    async def get(self, order_id: str) -> Order | None: ...
    async def get_by_idempotency_key(self, key: str) -> Order | None: ...
    async def list_all(self, status: OrderStatus | None = None) -> list[Order]: ...
    async def save(self, order: Order) -> Order: ...


@dataclass(frozen=True)
class CardDetails:
    number: str
    expiry: str
    cvv: str
    holder: str


@dataclass(frozen=True)
class PaymentResult:
    approved: bool
    reference: str | None = None
    reason: str | None = None


class PaymentGateway(Protocol):
    """Authorizes a charge. May suspend; callers bound it with a timeout."""
    async def authorize(
        self, amount: Decimal, method: PaymentMethod, card: CardDetails,
    ) -> PaymentResult: ...
