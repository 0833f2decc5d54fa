"""Checkout: buyer-facing quote and submission for a published page.

Invariants:
    - GET returns the totals the buyer will be charged (with or without the bump)
    - POST 201 on success; 400 lists missing fields; 402 on payment failure
    - A payment failure writes no order; the client keeps its form data and retries
    - Idempotency-Key header makes resubmits return the original order (200)
"""

from fastapi import APIRouter, Depends, Header, Query, Response, status

from salesdesk.api.dependencies import get_checkout
from salesdesk.config import Settings, get_settings
from salesdesk.schemas.checkout import (
    CheckoutQuoteResponse, CheckoutReceiptResponse, CheckoutSubmit,
)
from salesdesk.services.checkout import CheckoutService

router = APIRouter(prefix="/api/v1/checkout", tags=["checkout"])


@router.get("/{page_id}", response_model=CheckoutQuoteResponse)
async def get_checkout_quote(
    page_id: str,
    add_on: bool = Query(False),
    checkout: CheckoutService = Depends(get_checkout),
    settings: Settings = Depends(get_settings),
):
    quote = await checkout.quote(page_id, add_on)
    return CheckoutQuoteResponse.from_domain(quote, settings.order_bump_name, add_on)


@router.post(
    "/{page_id}",
    response_model=CheckoutReceiptResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_checkout(
    page_id: str,
    body: CheckoutSubmit,
    response: Response,
    idempotency_key: str | None = Header(None, max_length=100),
    checkout: CheckoutService = Depends(get_checkout),
):
    receipt = await checkout.submit(
        page_id,
        body.to_buyer(),
        body.add_on_accepted,
        payment_method=body.payment_method,
        idempotency_key=idempotency_key,
    )
    if receipt.replayed:
        response.status_code = status.HTTP_200_OK
    return CheckoutReceiptResponse.from_domain(receipt)
