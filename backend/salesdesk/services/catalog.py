"""Catalog Service: product CRUD with price validation.

Invariants:
    - Negative or non-numeric prices rejected before reaching the store
    - Updates are partial: omitted fields keep their stored values
    - Price edits never touch existing orders (amounts are frozen there)
"""

import logging
from dataclasses import replace
from typing import Any

from salesdesk.core.commerce import Product, to_price, validate_product
from salesdesk.core.domain_types import ProductStatus, ProductType
from salesdesk.core.errors import ResourceNotFoundError
from salesdesk.core.repository_protocols import ProductRepository

logger = logging.getLogger(__name__)


class CatalogService:
    def __init__(self, products: ProductRepository):
        self.products = products

    async def get_product(self, product_id: str) -> Product:
        product = await self.products.get(product_id)
        if product is None:
            raise ResourceNotFoundError("Product", product_id)
        return product

    async def list_products(self) -> list[Product]:
        return await self.products.list_all()

    async def create_product(
        self,
        name: str,
        price: Any,
        description: str = "",
        image: str = "",
        product_type: ProductType = ProductType.DIGITAL,
        status: ProductStatus = ProductStatus.ACTIVE,
    ) -> Product:
        product = validate_product(Product(
            id="",
            name=name,
            price=to_price(price),
            description=description,
            image=image,
            product_type=product_type,
            status=status,
        ))
        stored = await self.products.add(product)
        logger.info(f"Product created: {stored.name}", extra={"product_id": stored.id})
        return stored

    async def update_product(self, product_id: str, **changes: Any) -> Product:
        product = await self.get_product(product_id)
        changes = {k: v for k, v in changes.items() if v is not None}
        if "price" in changes:
            changes["price"] = to_price(changes["price"])
        updated = validate_product(replace(product, **changes))
        return await self.products.save(updated)

    async def delete_product(self, product_id: str) -> None:
        if not await self.products.delete(product_id):
            raise ResourceNotFoundError("Product", product_id)
