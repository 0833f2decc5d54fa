"""Page Builder Service: loads a page, applies one builder operation, saves it.

Invariants:
    - Only this service writes to the page store
    - Every mutation is a pure core operation between one load and one save
    - Unchanged pages (element-level no-ops) are not written back
    - Unknown page ids raise ResourceNotFoundError; unknown element ids do not
"""

import logging
from datetime import datetime
from typing import Any, Callable

from salesdesk.core import sales_page as ops
from salesdesk.core.domain_types import BlockKind, PageStatus, PageTemplate
from salesdesk.core.errors import ResourceNotFoundError
from salesdesk.core.repository_protocols import PageRepository, ProductRepository
from salesdesk.core.sales_page import ContentBlock, SalesPage

logger = logging.getLogger(__name__)


class PageBuilderService:
    """Builder operations over an injected page store."""

    def __init__(
        self,
        pages: PageRepository,
        products: ProductRepository,
        clock: Callable[[], datetime] = ops.utcnow,
    ):
        self.pages = pages
        self.products = products
        self.clock = clock

    async def get_page(self, page_id: str) -> SalesPage:
        page = await self.pages.get(page_id)
        if page is None:
            raise ResourceNotFoundError("Sales page", page_id)
        return page

    async def list_pages(self) -> list[SalesPage]:
        return await self.pages.list_all()

    async def _require_product(self, product_id: str | None) -> None:
        if product_id and await self.products.get(product_id) is None:
            raise ResourceNotFoundError("Product", product_id)

    async def _commit(self, before: SalesPage, after: SalesPage) -> SalesPage:
        if after is not before:
            await self.pages.save(after)
        return after

    async def create_page(
        self,
        title: str,
        product_id: str | None = None,
        template: PageTemplate = PageTemplate.MODERN,
    ) -> SalesPage:
        await self._require_product(product_id)
        page = ops.create_page(title, product_id, template, now=self.clock())
        await self.pages.save(page)
        logger.info(
            f"Sales page created: {page.slug}",
            extra={"page_id": page.id, "product_id": product_id},
        )
        return page

    async def add_element(
        self, page_id: str, kind: BlockKind,
    ) -> tuple[SalesPage, ContentBlock]:
        page = await self.get_page(page_id)
        updated = ops.append_element(page, kind, now=self.clock())
        await self.pages.save(updated)
        return updated, updated.elements[-1]

    async def update_element(
        self, page_id: str, element_id: str, partial: dict[str, Any],
    ) -> SalesPage:
        page = await self.get_page(page_id)
        updated = ops.update_element_content(
            page, element_id, partial, now=self.clock(),
        )
        if updated is page:
            logger.info(
                "Element update ignored: element not on page",
                extra={"page_id": page_id, "element_id": element_id},
            )
        return await self._commit(page, updated)

    async def remove_element(self, page_id: str, element_id: str) -> SalesPage:
        page = await self.get_page(page_id)
        updated = ops.remove_element(page, element_id, now=self.clock())
        return await self._commit(page, updated)

    async def set_status(self, page_id: str, status: PageStatus) -> SalesPage:
        page = await self.get_page(page_id)
        updated = ops.set_status(page, status, now=self.clock())
        await self.pages.save(updated)
        logger.info(
            f"Sales page status -> {updated.status.value}",
            extra={"page_id": page_id},
        )
        return updated

    async def publish(self, page_id: str) -> SalesPage:
        return await self.set_status(page_id, PageStatus.PUBLISHED)

    async def unpublish(self, page_id: str) -> SalesPage:
        return await self.set_status(page_id, PageStatus.DRAFT)

    async def update_settings(
        self,
        page_id: str,
        *,
        title: str | None = None,
        template: PageTemplate | None = None,
        product_id: str | None = None,
        unlink_product: bool = False,
    ) -> SalesPage:
        page = await self.get_page(page_id)
        await self._require_product(product_id)
        updated = ops.update_settings(
            page, title=title, template=template, product_id=product_id,
            unlink_product=unlink_product,
            now=self.clock(),
        )
        return await self._commit(page, updated)

    async def delete_page(self, page_id: str) -> None:
        if not await self.pages.delete(page_id):
            raise ResourceNotFoundError("Sales page", page_id)
        logger.info("Sales page deleted", extra={"page_id": page_id})

    async def share_url(self, page_id: str, origin: str) -> str:
        page = await self.get_page(page_id)
        return ops.checkout_url(origin, page.id)
