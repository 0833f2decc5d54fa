"""SQL Stores: SQLAlchemy-backed implementations of the store protocols.

Invariants:
    - ORM records are mapped to frozen core dataclasses at this boundary
    - Each write commits; a failed commit rolls back via DatabaseSessionManager
    - Datetimes read back from the DB are always timezone-aware (UTC)
    - Page elements round-trip through the content registry, so stored JSON
      that lost a required field fails loudly on load
    - Order reservation is atomic through the unique idempotency_key column
"""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from salesdesk.core.commerce import Order, OrderDraft, Product
from salesdesk.core.content_blocks import content_from_dict, content_to_dict
from salesdesk.core.domain_types import (
    BlockKind, OrderStatus, PageStatus, PageTemplate, PaymentMethod,
    ProductStatus, ProductType, new_id,
)
from salesdesk.core.sales_page import ContentBlock, SalesPage
from salesdesk.models.order import OrderRecord
from salesdesk.models.product import ProductRecord
from salesdesk.models.sales_page import SalesPageRecord


def _aware(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# ─── Products ────────────────────────────────────────────────────

def _to_product(row: ProductRecord) -> Product:
    return Product(
        id=row.id,
        name=row.name,
        price=Decimal(row.price),
        description=row.description,
        image=row.image,
        product_type=ProductType(row.product_type),
        status=ProductStatus(row.status),
        created_at=_aware(row.created_at),
    )


class SqlProductRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, product_id: str) -> Product | None:
        row = await self.db.get(ProductRecord, product_id)
        return _to_product(row) if row else None

    async def list_all(self) -> list[Product]:
        result = await self.db.execute(
            select(ProductRecord).order_by(ProductRecord.created_at),
        )
        return [_to_product(row) for row in result.scalars().all()]

    async def add(self, product: Product) -> Product:
        row = ProductRecord(
            id=product.id or new_id(),
            name=product.name,
            product_type=product.product_type.value,
            price=product.price,
            description=product.description,
            image=product.image,
            status=product.status.value,
        )
        if product.created_at is not None:
            row.created_at = product.created_at
        self.db.add(row)
        await self.db.commit()
        await self.db.refresh(row)
        return _to_product(row)

    async def save(self, product: Product) -> Product:
        row = await self.db.get(ProductRecord, product.id)
        if row is None:
            return await self.add(product)
        row.name = product.name
        row.product_type = product.product_type.value
        row.price = product.price
        row.description = product.description
        row.image = product.image
        row.status = product.status.value
        await self.db.commit()
        await self.db.refresh(row)
        return _to_product(row)

    async def delete(self, product_id: str) -> bool:
        row = await self.db.get(ProductRecord, product_id)
        if row is None:
            return False
        await self.db.delete(row)
        await self.db.commit()
        return True


# ─── Sales Pages ─────────────────────────────────────────────────

def _elements_to_json(page: SalesPage) -> list[dict]:
    return [
        {"id": el.id, "kind": el.kind.value, "content": content_to_dict(el.content)}
        for el in page.elements
    ]


def _to_page(row: SalesPageRecord) -> SalesPage:
    elements = tuple(
        ContentBlock(
            id=item["id"],
            kind=BlockKind(item["kind"]),
            content=content_from_dict(item["kind"], item["content"]),
        )
        for item in row.elements or []
    )
    return SalesPage(
        id=row.id,
        title=row.title,
        slug=row.slug,
        template=PageTemplate(row.template),
        status=PageStatus(row.status),
        product_id=row.product_id,
        created_at=_aware(row.created_at),
        updated_at=_aware(row.updated_at),
        elements=elements,
    )


class SqlPageRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, page_id: str) -> SalesPage | None:
        row = await self.db.get(SalesPageRecord, page_id)
        return _to_page(row) if row else None

    async def save(self, page: SalesPage) -> None:
        row = await self.db.get(SalesPageRecord, page.id)
        if row is None:
            row = SalesPageRecord(
                id=page.id, slug=page.slug, created_at=page.created_at,
            )
            self.db.add(row)
        row.title = page.title
        row.template = page.template.value
        row.status = page.status.value
        row.product_id = page.product_id
        row.elements = _elements_to_json(page)
        row.updated_at = page.updated_at
        await self.db.commit()

    async def delete(self, page_id: str) -> bool:
        row = await self.db.get(SalesPageRecord, page_id)
        if row is None:
            return False
        await self.db.delete(row)
        await self.db.commit()
        return True

    async def list_all(self) -> list[SalesPage]:
        result = await self.db.execute(
            select(SalesPageRecord).order_by(SalesPageRecord.created_at),
        )
        return [_to_page(row) for row in result.scalars().all()]


# ─── Orders ──────────────────────────────────────────────────────

def _to_order(row: OrderRecord) -> Order:
    return Order(
        id=row.id,
        customer_name=row.customer_name,
        customer_email=row.customer_email,
        product_name=row.product_name,
        amount=Decimal(row.amount),
        status=OrderStatus(row.status),
        payment_method=PaymentMethod(row.payment_method),
        page_id=row.page_id,
        add_on_accepted=row.add_on_accepted,
        payment_reference=row.payment_reference,
        idempotency_key=row.idempotency_key,
        created_at=_aware(row.created_at),
    )


class SqlOrderRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    def _record(self, draft: OrderDraft) -> OrderRecord:
        return OrderRecord(
            id=new_id(),
            customer_name=draft.customer_name,
            customer_email=draft.customer_email,
            product_name=draft.product_name,
            amount=draft.amount,
            status=draft.status.value,
            payment_method=draft.payment_method.value,
            page_id=draft.page_id,
            add_on_accepted=draft.add_on_accepted,
            payment_reference=draft.payment_reference,
            idempotency_key=draft.idempotency_key,
            created_at=datetime.now(timezone.utc),
        )

    async def add(self, draft: OrderDraft) -> Order:
        row = self._record(draft)
        self.db.add(row)
        await self.db.commit()
        await self.db.refresh(row)
        return _to_order(row)

    async def reserve(self, draft: OrderDraft) -> Order | None:
        row = self._record(draft)
        self.db.add(row)
        try:
            await self.db.commit()
        except IntegrityError:
            # unique idempotency_key: another submit holds the key
            await self.db.rollback()
            return None
        await self.db.refresh(row)
        return _to_order(row)

    async def discard(self, order_id: str) -> None:
        row = await self.db.get(OrderRecord, order_id)
        if row is not None:
            await self.db.delete(row)
            await self.db.commit()

    async def get(self, order_id: str) -> Order | None:
        row = await self.db.get(OrderRecord, order_id)
        return _to_order(row) if row else None

    async def get_by_idempotency_key(self, key: str) -> Order | None:
        result = await self.db.execute(
            select(OrderRecord).where(OrderRecord.idempotency_key == key),
        )
        row = result.scalar_one_or_none()
        return _to_order(row) if row else None

    async def list_all(self, status: OrderStatus | None = None) -> list[Order]:
        query = select(OrderRecord).order_by(OrderRecord.created_at)
        if status is not None:
            query = query.where(OrderRecord.status == status.value)
        result = await self.db.execute(query)
        return [_to_order(row) for row in result.scalars().all()]

    async def save(self, order: Order) -> Order:
        row = await self.db.get(OrderRecord, order.id)
        if row is None:
            return await self.add(order)
        # amount and line details are historical; status and payment reference move
        row.status = order.status.value
        row.payment_reference = order.payment_reference
        await self.db.commit()
        await self.db.refresh(row)
        return _to_order(row)
