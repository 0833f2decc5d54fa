"""Initial schema: products, sales_pages, orders.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "products",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("product_type", sa.String(20), nullable=False, server_default="digital"),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        sa.Column("image", sa.Text, nullable=False, server_default=""),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
    )

    op.create_table(
        "sales_pages",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("slug", sa.String(220), nullable=False),
        sa.Column("template", sa.String(20), nullable=False, server_default="modern"),
        sa.Column("status", sa.String(20), nullable=False, server_default="draft"),
        sa.Column("product_id", sa.String(36), nullable=True),
        sa.Column("elements", sa.JSON, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_sales_pages_slug", "sales_pages", ["slug"])

    op.create_table(
        "orders",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("customer_name", sa.String(200), nullable=False),
        sa.Column("customer_email", sa.String(320), nullable=False),
        sa.Column("product_name", sa.String(200), nullable=False),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="completed"),
        sa.Column("payment_method", sa.String(20), nullable=False, server_default="credit_card"),
        sa.Column("page_id", sa.String(36), nullable=True),
        sa.Column("add_on_accepted", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("payment_reference", sa.String(100), nullable=True),
        sa.Column("idempotency_key", sa.String(100), nullable=True, unique=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_orders_customer_email", "orders", ["customer_email"])


def downgrade() -> None:
    op.drop_index("ix_orders_customer_email", table_name="orders")
    op.drop_table("orders")
    op.drop_index("ix_sales_pages_slug", table_name="sales_pages")
    op.drop_table("sales_pages")
    op.drop_table("products")
