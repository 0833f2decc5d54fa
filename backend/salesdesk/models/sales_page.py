"""Sales Page ORM: one row per page, elements stored inline.

Invariants:
    - elements is a JSON array of {id, kind, content} in display order
    - slug is written once at creation
    - product_id is a reference, not ownership: no FK cascade onto products

Design Decisions:
    - JSON column for elements: the page exclusively owns its blocks and
      is always loaded and saved as a whole
"""

from datetime import datetime, timezone

from sqlalchemy import String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from salesdesk.db.base import Base


class SalesPageRecord(Base):
    __tablename__ = "sales_pages"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(220), nullable=False, index=True)
    template: Mapped[str] = mapped_column(
        String(20), nullable=False, default="modern",
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="draft",
    )
    product_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    elements: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
