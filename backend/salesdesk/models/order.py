"""Order ORM: completed (or pending) purchases.

Invariants:
    - amount is Numeric(10, 2), frozen at insert
    - idempotency_key is unique when present; resubmits resolve to the same row
    - page_id and product_name are denormalized history, not foreign keys
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import String, Numeric, DateTime, Boolean
from sqlalchemy.orm import Mapped, mapped_column

from salesdesk.db.base import Base


class OrderRecord(Base):
    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4()),
    )
    customer_name: Mapped[str] = mapped_column(String(200), nullable=False)
    customer_email: Mapped[str] = mapped_column(
        String(320), nullable=False, index=True,
    )
    product_name: Mapped[str] = mapped_column(String(200), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="completed",
    )
    payment_method: Mapped[str] = mapped_column(
        String(20), nullable=False, default="credit_card",
    )
    page_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    add_on_accepted: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    payment_reference: Mapped[str | None] = mapped_column(
        String(100), nullable=True,
    )
    idempotency_key: Mapped[str | None] = mapped_column(
        String(100), nullable=True, unique=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
