"""Checkout Service: validate buyer, authorize payment, record the order.

Invariants:
    - Only published pages with a resolvable product can be checked out
    - Blank buyer fields raise CheckoutValidationError before any charge
    - Payment is bounded by payment_timeout; timeout counts as a decline
    - A declined or timed-out payment writes no order
    - Order.amount == compute_total(...).grand_total at submission time
    - An idempotency key is bound to one page and add-on choice; a matching
      resubmit returns the original order uncharged, a mismatched one is 409
    - A keyed submit holds the key with a pending order before authorizing,
      so overlapping submits charge at most once

Design Decisions:
    - Gateway injected: tests and the simulated processor share one seam
    - Totals computed before authorization so the gateway sees the exact charge
"""

import asyncio
import logging
from dataclasses import dataclass, replace
from decimal import Decimal

from salesdesk.core.checkout_rules import (
    BuyerDetails, build_order, missing_buyer_fields,
)
from salesdesk.core.commerce import Order, OrderDraft, Product
from salesdesk.core.domain_types import OrderStatus, PaymentMethod
from salesdesk.core.errors import (
    CheckoutInProgressError, CheckoutValidationError, ErrorContext,
    IdempotencyKeyReusedError, PageNotPublishedError, PaymentFailedError,
    ResourceNotFoundError,
)
from salesdesk.core.pricing import DEFAULT_ADD_ON_PRICE, OrderTotals, compute_total
from salesdesk.core.repository_protocols import (
    CardDetails, OrderRepository, PageRepository, PaymentGateway,
    PaymentResult, ProductRepository,
)
from salesdesk.core.sales_page import SalesPage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckoutQuote:
    page: SalesPage
    product: Product
    totals: OrderTotals
    add_on_price: Decimal


@dataclass(frozen=True)
class CheckoutReceipt:
    order: Order
    replayed: bool = False


class CheckoutService:
    """Checkout submission flow over injected stores and payment gateway."""

    def __init__(
        self,
        pages: PageRepository,
        products: ProductRepository,
        orders: OrderRepository,
        gateway: PaymentGateway,
        *,
        add_on_price: Decimal = DEFAULT_ADD_ON_PRICE,
        payment_timeout: float = 10.0,
    ):
        self.pages = pages
        self.products = products
        self.orders = orders
        self.gateway = gateway
        self.add_on_price = add_on_price
        self.payment_timeout = payment_timeout

    async def _resolve(self, page_id: str) -> tuple[SalesPage, Product]:
        page = await self.pages.get(page_id)
        if page is None:
            raise ResourceNotFoundError("Sales page", page_id)
        if not page.is_published:
            raise PageNotPublishedError(page_id)
        product = await self.products.get(page.product_id) if page.product_id else None
        if product is None:
            raise ResourceNotFoundError(
                "Product", page.product_id or "", ErrorContext(page_id=page_id),
            )
        return page, product

    async def quote(self, page_id: str, add_on_accepted: bool = False) -> CheckoutQuote:
        page, product = await self._resolve(page_id)
        return CheckoutQuote(
            page=page,
            product=product,
            totals=compute_total(product, add_on_accepted, self.add_on_price),
            add_on_price=self.add_on_price,
        )

    async def _authorize(
        self, page_id: str, amount: Decimal, method: PaymentMethod, buyer: BuyerDetails,
    ) -> PaymentResult:
        card = CardDetails(
            number=buyer.card_number,
            expiry=buyer.expiry_date,
            cvv=buyer.cvv,
            holder=buyer.name_on_card,
        )
        try:
            result = await asyncio.wait_for(
                self.gateway.authorize(amount, method, card),
                timeout=self.payment_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(
                f"Payment timed out after {self.payment_timeout}s",
                extra={"page_id": page_id, "amount": amount},
            )
            raise PaymentFailedError("timeout", ErrorContext(page_id=page_id))
        if not result.approved:
            logger.warning(
                f"Payment declined: {result.reason}",
                extra={"page_id": page_id, "amount": amount},
            )
            raise PaymentFailedError(
                result.reason or "declined", ErrorContext(page_id=page_id),
            )
        return result

    def _replay(
        self, existing: Order, page_id: str, add_on_accepted: bool,
    ) -> CheckoutReceipt:
        key = existing.idempotency_key or ""
        context = ErrorContext(page_id=page_id, order_id=existing.id)
        if existing.page_id != page_id or existing.add_on_accepted != add_on_accepted:
            raise IdempotencyKeyReusedError(key, context)
        if existing.status is OrderStatus.PENDING:
            raise CheckoutInProgressError(key, context)
        logger.info(
            "Checkout replayed for idempotency key",
            extra={"page_id": page_id, "order_id": existing.id},
        )
        return CheckoutReceipt(order=existing, replayed=True)

    async def _charge_reserved(
        self, page_id: str, draft: OrderDraft, buyer: BuyerDetails,
    ) -> Order | None:
        """Hold the key with a pending order, authorize, then complete it.

        Returns None when another submit already holds the key.
        """
        reserved = await self.orders.reserve(replace(draft, status=OrderStatus.PENDING))
        if reserved is None:
            return None
        try:
            payment = await self._authorize(
                page_id, reserved.amount, reserved.payment_method, buyer,
            )
        except BaseException:
            await self.orders.discard(reserved.id)
            raise
        return await self.orders.save(replace(
            reserved, status=OrderStatus.COMPLETED, payment_reference=payment.reference,
        ))

    async def submit(
        self,
        page_id: str,
        buyer: BuyerDetails,
        add_on_accepted: bool = False,
        *,
        payment_method: PaymentMethod = PaymentMethod.CREDIT_CARD,
        idempotency_key: str | None = None,
    ) -> CheckoutReceipt:
        page, product = await self._resolve(page_id)

        missing = missing_buyer_fields(buyer)
        if missing:
            raise CheckoutValidationError(missing, ErrorContext(page_id=page_id))

        if idempotency_key:
            existing = await self.orders.get_by_idempotency_key(idempotency_key)
            if existing is not None:
                return self._replay(existing, page_id, add_on_accepted)

        totals = compute_total(product, add_on_accepted, self.add_on_price)
        draft = build_order(
            page, product, buyer, totals, add_on_accepted,
            payment_method=payment_method,
            idempotency_key=idempotency_key,
        )
        if idempotency_key:
            order = await self._charge_reserved(page_id, draft, buyer)
            if order is None:
                existing = await self.orders.get_by_idempotency_key(idempotency_key)
                if existing is None:
                    # holder released the key between reserve and lookup
                    raise CheckoutInProgressError(
                        idempotency_key, ErrorContext(page_id=page_id),
                    )
                return self._replay(existing, page_id, add_on_accepted)
        else:
            payment = await self._authorize(
                page_id, totals.grand_total, payment_method, buyer,
            )
            order = await self.orders.add(replace(draft, payment_reference=payment.reference))
        logger.info(
            f"Order completed for {order.product_name}",
            extra={"page_id": page_id, "order_id": order.id, "amount": order.amount},
        )
        return CheckoutReceipt(order=order)
