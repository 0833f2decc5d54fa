"""Product Schemas: catalog request bodies and responses.

Invariants:
    - price >= 0 at the boundary; core re-checks on every write
    - name: 1-200 chars, stripped
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from salesdesk.core.commerce import Product
from salesdesk.core.domain_types import ProductStatus, ProductType


class ProductCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    description: str = ""
    image: str = ""
    product_type: ProductType = ProductType.DIGITAL
    status: ProductStatus = ProductStatus.ACTIVE

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class ProductUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    price: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    description: str | None = None
    image: str | None = None
    product_type: ProductType | None = None
    status: ProductStatus | None = None


class ProductResponse(BaseModel):
    id: str
    name: str
    price: Decimal
    description: str
    image: str
    product_type: ProductType
    status: ProductStatus
    created_at: datetime | None

    @classmethod
    def from_domain(cls, product: Product) -> "ProductResponse":
        return cls(
            id=product.id,
            name=product.name,
            price=product.price,
            description=product.description,
            image=product.image,
            product_type=product.product_type,
            status=product.status,
            created_at=product.created_at,
        )
