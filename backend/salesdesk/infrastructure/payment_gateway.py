"""Simulated Payment Gateway: stands in for a card network round-trip.

Invariants:
    - authorize() suspends for delay_seconds, then approves or declines
    - Never raises for a decline; declines are PaymentResult(approved=False)
    - Approved results carry a unique reference

Design Decisions:
    - No real network: card data is never validated or transmitted
"""

import asyncio
import logging
from decimal import Decimal

from salesdesk.core.domain_types import PaymentMethod, new_id
from salesdesk.core.repository_protocols import CardDetails, PaymentResult

logger = logging.getLogger(__name__)


class SimulatedPaymentGateway:
    """Always-on fake processor with a fixed delay."""

    def __init__(self, delay_seconds: float = 2.0, approve: bool = True):
        self.delay_seconds = delay_seconds
        self.approve = approve

    async def authorize(
        self, amount: Decimal, method: PaymentMethod, card: CardDetails,
    ) -> PaymentResult:
        await asyncio.sleep(self.delay_seconds)
        if not self.approve:
            logger.info(f"Simulated payment declined for {amount}")
            return PaymentResult(approved=False, reason="card_declined")
        reference = f"sim_{new_id()}"
        logger.info(f"Simulated payment approved for {amount} ({method.value})")
        return PaymentResult(approved=True, reference=reference)
