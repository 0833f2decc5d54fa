"""Sales Page Schemas: builder request bodies and page responses.

Invariants:
    - PageCreate.title: 1-200 chars, stripped, non-empty
    - Element content is passed through as a JSON object; the content
      registry (core) decides which fields and types are valid per kind
    - Responses carry content in its wire shape (camelCase keys)
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from salesdesk.core.content_blocks import BlockSpec, content_to_dict
from salesdesk.core.domain_types import BlockKind, PageStatus, PageTemplate
from salesdesk.core.sales_page import ContentBlock, SalesPage


def _strip_title(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("title cannot be empty or whitespace")
    return v


class PageCreate(BaseModel):
    """New page, optionally linked to a product (create-from-template)."""
    title: str = Field("Untitled Page", min_length=1, max_length=200)
    product_id: str | None = None
    template: PageTemplate = PageTemplate.MODERN

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        return _strip_title(v)


class PageSettingsUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=200)
    template: PageTemplate | None = None
    product_id: str | None = None

    @property
    def unlinks_product(self) -> bool:
        """True when the body carries an explicit "product_id": null."""
        return "product_id" in self.model_fields_set and self.product_id is None

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str | None) -> str | None:
        return _strip_title(v)


class ElementCreate(BaseModel):
    kind: BlockKind


class ElementUpdate(BaseModel):
    """Partial content: only the listed fields are overwritten."""
    content: dict[str, Any]


class ElementResponse(BaseModel):
    id: str
    kind: BlockKind
    content: dict[str, Any]

    @classmethod
    def from_domain(cls, block: ContentBlock) -> "ElementResponse":
        return cls(id=block.id, kind=block.kind, content=content_to_dict(block.content))


class PageResponse(BaseModel):
    id: str
    title: str
    slug: str
    template: PageTemplate
    status: PageStatus
    product_id: str | None
    elements: list[ElementResponse]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, page: SalesPage) -> "PageResponse":
        return cls(
            id=page.id,
            title=page.title,
            slug=page.slug,
            template=page.template,
            status=page.status,
            product_id=page.product_id,
            elements=[ElementResponse.from_domain(el) for el in page.elements],
            created_at=page.created_at,
            updated_at=page.updated_at,
        )


class PageSummary(BaseModel):
    """List item: page metadata without element content."""
    id: str
    title: str
    slug: str
    template: PageTemplate
    status: PageStatus
    product_id: str | None
    element_count: int
    updated_at: datetime

    @classmethod
    def from_domain(cls, page: SalesPage) -> "PageSummary":
        return cls(
            id=page.id,
            title=page.title,
            slug=page.slug,
            template=page.template,
            status=page.status,
            product_id=page.product_id,
            element_count=len(page.elements),
            updated_at=page.updated_at,
        )


class BlockKindResponse(BaseModel):
    kind: BlockKind
    name: str
    description: str

    @classmethod
    def from_domain(cls, spec: BlockSpec) -> "BlockKindResponse":
        return cls(kind=spec.kind, name=spec.name, description=spec.description)


class ShareUrlResponse(BaseModel):
    page_id: str
    url: str
