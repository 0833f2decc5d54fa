"""Sales Page Aggregate: a page as an ordered sequence of content blocks.

Invariants:
    - SalesPage and ContentBlock are frozen; every operation returns a new page
    - elements order == append order; there is no reorder operation
    - slug is derived once at creation and never recomputed on title edits
    - updated_at strictly increases on every operation that changes the page
    - Missing element ids are silent no-ops: the same page object is returned
    - status has two states and one bidirectional transition with no guards

Design Decisions:
    - Clock passed in as `now`: operations stay deterministic under test
    - Element id allocation injectable for the same reason
"""

import re
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from typing import Any

from salesdesk.core.content_blocks import (
    BlockContent, coerce_kind, default_content, merge_content,
)
from salesdesk.core.domain_types import (
    BlockKind, PageStatus, PageTemplate, new_id,
)

_WHITESPACE_RUN = re.compile(r"\s+")
_TICK = timedelta(microseconds=1)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def slugify(title: str) -> str:
    """Lower-case the title and collapse each whitespace run into one hyphen."""
    return _WHITESPACE_RUN.sub("-", title.lower())


@dataclass(frozen=True)
class ContentBlock:
    id: str
    kind: BlockKind
    content: BlockContent


@dataclass(frozen=True)
class SalesPage:
    id: str
    title: str
    slug: str
    template: PageTemplate
    status: PageStatus
    product_id: str | None
    created_at: datetime
    updated_at: datetime
    elements: tuple[ContentBlock, ...] = field(default=())

    @property
    def is_published(self) -> bool:
        return self.status is PageStatus.PUBLISHED


def _touch(page: SalesPage, now: datetime | None, **changes: Any) -> SalesPage:
    """Apply changes and move updated_at strictly forward."""
    stamp = now or utcnow()
    if stamp <= page.updated_at:
        stamp = page.updated_at + _TICK
    return replace(page, updated_at=stamp, **changes)


# ─── Creation ────────────────────────────────────────────────────

def create_page(
    title: str,
    product_id: str | None = None,
    template: PageTemplate = PageTemplate.MODERN,
    *,
    now: datetime | None = None,
    page_id: str | None = None,
) -> SalesPage:
    """New draft page with no elements."""
    stamp = now or utcnow()
    return SalesPage(
        id=page_id or new_id(),
        title=title,
        slug=slugify(title),
        template=PageTemplate(template),
        status=PageStatus.DRAFT,
        product_id=product_id,
        created_at=stamp,
        updated_at=stamp,
    )


# ─── Element Operations ──────────────────────────────────────────

def find_element(page: SalesPage, element_id: str) -> ContentBlock | None:
    return next((el for el in page.elements if el.id == element_id), None)


def append_element(
    page: SalesPage,
    kind: BlockKind | str,
    *,
    now: datetime | None = None,
    element_id: str | None = None,
) -> SalesPage:
    kind = coerce_kind(kind)
    block = ContentBlock(
        id=element_id or new_id(), kind=kind, content=default_content(kind),
    )
    return _touch(page, now, elements=page.elements + (block,))


def update_element_content(
    page: SalesPage,
    element_id: str,
    partial: dict[str, Any],
    *,
    now: datetime | None = None,
) -> SalesPage:
    """Merge partial content into the matching block; other blocks untouched."""
    target = find_element(page, element_id)
    if target is None:
        return page
    updated = replace(target, content=merge_content(target.content, partial))
    elements = tuple(
        updated if el.id == element_id else el for el in page.elements
    )
    return _touch(page, now, elements=elements)


def remove_element(
    page: SalesPage, element_id: str, *, now: datetime | None = None,
) -> SalesPage:
    if find_element(page, element_id) is None:
        return page
    elements = tuple(el for el in page.elements if el.id != element_id)
    return _touch(page, now, elements=elements)


# ─── Page-Level Operations ───────────────────────────────────────

def set_status(
    page: SalesPage, status: PageStatus | str, *, now: datetime | None = None,
) -> SalesPage:
    return _touch(page, now, status=PageStatus(status))


def update_settings(
    page: SalesPage,
    *,
    title: str | None = None,
    template: PageTemplate | str | None = None,
    product_id: str | None = None,
    unlink_product: bool = False,
    now: datetime | None = None,
) -> SalesPage:
    """Edit page settings. The slug is kept as created.

    product_id=None keeps the current link; unlink_product=True clears it.
    """
    changes: dict[str, Any] = {}
    if title is not None:
        changes["title"] = title
    if template is not None:
        changes["template"] = PageTemplate(template)
    if product_id is not None:
        changes["product_id"] = product_id
    elif unlink_product and page.product_id is not None:
        changes["product_id"] = None
    if not changes:
        return page
    return _touch(page, now, **changes)


def checkout_url(origin: str, page_id: str) -> str:
    """Shareable checkout link for a page."""
    return f"{origin.rstrip('/')}/checkout/{page_id}"
