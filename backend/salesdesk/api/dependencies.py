"""Route Dependencies: per-request stores and services built on the DB session.

Invariants:
    - Stores are constructed per request around that request's AsyncSession
    - Services receive stores explicitly; nothing here is a process-wide store
    - The payment gateway is a dependency so tests can override it
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from salesdesk.config import Settings, get_settings
from salesdesk.core.repository_protocols import PaymentGateway
from salesdesk.infrastructure.database import get_db
from salesdesk.infrastructure.payment_gateway import SimulatedPaymentGateway
from salesdesk.infrastructure.sql_store import (
    SqlOrderRepository, SqlPageRepository, SqlProductRepository,
)
from salesdesk.services.catalog import CatalogService
from salesdesk.services.checkout import CheckoutService
from salesdesk.services.orders import OrderService
from salesdesk.services.page_builder import PageBuilderService


def get_payment_gateway(
    settings: Settings = Depends(get_settings),
) -> PaymentGateway:
    return SimulatedPaymentGateway(
        delay_seconds=settings.payment_delay_seconds,
        approve=settings.payment_approve,
    )


def get_page_builder(db: AsyncSession = Depends(get_db)) -> PageBuilderService:
    return PageBuilderService(SqlPageRepository(db), SqlProductRepository(db))


def get_catalog(db: AsyncSession = Depends(get_db)) -> CatalogService:
    return CatalogService(SqlProductRepository(db))


def get_order_service(db: AsyncSession = Depends(get_db)) -> OrderService:
    return OrderService(
        SqlOrderRepository(db), SqlProductRepository(db), SqlPageRepository(db),
    )


def get_checkout(
    db: AsyncSession = Depends(get_db),
    gateway: PaymentGateway = Depends(get_payment_gateway),
    settings: Settings = Depends(get_settings),
) -> CheckoutService:
    return CheckoutService(
        SqlPageRepository(db),
        SqlProductRepository(db),
        SqlOrderRepository(db),
        gateway,
        add_on_price=settings.order_bump_price,
        payment_timeout=settings.payment_timeout_seconds,
    )
