"""Checkout Schemas: buyer form submission, quote and receipt responses.

Invariants:
    - Buyer fields default to "" so blank fields reach the checkout rules,
      which report every missing field at once
    - No card-number format checks here (presence-only validation)
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from salesdesk.core.checkout_rules import BuyerDetails
from salesdesk.core.domain_types import PaymentMethod
from salesdesk.core.pricing import format_money
from salesdesk.schemas.order import OrderResponse
from salesdesk.schemas.product import ProductResponse
from salesdesk.services.checkout import CheckoutQuote, CheckoutReceipt


class CheckoutSubmit(BaseModel):
    email: str = Field("", max_length=320)
    first_name: str = Field("", max_length=100)
    last_name: str = Field("", max_length=100)
    address: str = Field("", max_length=300)
    city: str = Field("", max_length=100)
    state: str = Field("", max_length=100)
    zip_code: str = Field("", max_length=20)
    country: str = Field("US", max_length=2)
    card_number: str = Field("", max_length=25)
    expiry_date: str = Field("", max_length=7)
    cvv: str = Field("", max_length=4)
    name_on_card: str = Field("", max_length=200)
    add_on_accepted: bool = False
    payment_method: PaymentMethod = PaymentMethod.CREDIT_CARD

    def to_buyer(self) -> BuyerDetails:
        return BuyerDetails(
            email=self.email,
            first_name=self.first_name,
            last_name=self.last_name,
            address=self.address,
            city=self.city,
            state=self.state,
            zip_code=self.zip_code,
            country=self.country,
            card_number=self.card_number,
            expiry_date=self.expiry_date,
            cvv=self.cvv,
            name_on_card=self.name_on_card,
        )


class CheckoutQuoteResponse(BaseModel):
    page_id: str
    page_title: str
    product: ProductResponse
    add_on_name: str
    add_on_price: Decimal
    add_on_accepted: bool
    subtotal: Decimal
    add_on_total: Decimal
    grand_total: Decimal
    display_total: str

    @classmethod
    def from_domain(
        cls, quote: CheckoutQuote, add_on_name: str, add_on_accepted: bool,
    ) -> "CheckoutQuoteResponse":
        return cls(
            page_id=quote.page.id,
            page_title=quote.page.title,
            product=ProductResponse.from_domain(quote.product),
            add_on_name=add_on_name,
            add_on_price=quote.add_on_price,
            add_on_accepted=add_on_accepted,
            subtotal=quote.totals.subtotal,
            add_on_total=quote.totals.add_on_total,
            grand_total=quote.totals.grand_total,
            display_total=format_money(quote.totals.grand_total),
        )


class CheckoutReceiptResponse(BaseModel):
    order: OrderResponse
    replayed: bool
    message: str

    @classmethod
    def from_domain(cls, receipt: CheckoutReceipt) -> "CheckoutReceiptResponse":
        return cls(
            order=OrderResponse.from_domain(receipt.order),
            replayed=receipt.replayed,
            message="Order completed successfully!",
        )
