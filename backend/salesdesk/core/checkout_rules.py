"""Checkout Rules: buyer form presence checks and order construction.

Invariants:
    - Validation is presence-only: no Luhn check, no address verification
    - A field is missing when blank after stripping whitespace
    - build_order() freezes the grand total as the order amount
    - Pure functions: no IO, no payment, no store access
"""

from dataclasses import dataclass, fields

from salesdesk.core.commerce import OrderDraft, Product
from salesdesk.core.domain_types import OrderStatus, PaymentMethod
from salesdesk.core.pricing import OrderTotals
from salesdesk.core.sales_page import SalesPage


@dataclass(frozen=True)
class BuyerDetails:
    """Contact, billing and card fields from the checkout form."""
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: str = "US"
    card_number: str = ""
    expiry_date: str = ""
    cvv: str = ""
    name_on_card: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name.strip()} {self.last_name.strip()}".strip()


REQUIRED_BUYER_FIELDS: tuple[str, ...] = tuple(f.name for f in fields(BuyerDetails))


def missing_buyer_fields(buyer: BuyerDetails) -> list[str]:
    """Names of required fields that are blank, in form order."""
    return [
        name for name in REQUIRED_BUYER_FIELDS
        if not (getattr(buyer, name) or "").strip()
    ]


def build_order(
    page: SalesPage,
    product: Product,
    buyer: BuyerDetails,
    totals: OrderTotals,
    add_on_accepted: bool,
    *,
    payment_method: PaymentMethod = PaymentMethod.CREDIT_CARD,
    payment_reference: str | None = None,
    idempotency_key: str | None = None,
) -> OrderDraft:
    return OrderDraft(
        customer_name=buyer.full_name,
        customer_email=buyer.email.strip(),
        product_name=product.name,
        amount=totals.grand_total,
        status=OrderStatus.COMPLETED,
        payment_method=payment_method,
        page_id=page.id,
        add_on_accepted=add_on_accepted,
        payment_reference=payment_reference,
        idempotency_key=idempotency_key,
    )
