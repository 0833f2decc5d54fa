"""Sales Pages: builder endpoints for pages and their content blocks.

Invariants:
    - Every mutation goes through PageBuilderService (one load, one save)
    - Unknown page ids return 404; unknown element ids are a silent no-op (200, page unchanged)
    - Invalid content fields return 400 with the offending field name
    - /block-kinds is registered before /{page_id} so it is not captured as an id
"""

import logging

from fastapi import APIRouter, Depends, status

from salesdesk.api.dependencies import get_page_builder
from salesdesk.config import Settings, get_settings
from salesdesk.core.content_blocks import BLOCK_CATALOG
from salesdesk.schemas.sales_page import (
    BlockKindResponse, ElementCreate, ElementUpdate, PageCreate, PageResponse,
    PageSettingsUpdate, PageSummary, ShareUrlResponse,
)
from salesdesk.services.page_builder import PageBuilderService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/pages", tags=["pages"])


@router.get("/block-kinds", response_model=list[BlockKindResponse])
async def list_block_kinds():
    """Palette of content blocks the builder can append."""
    return [BlockKindResponse.from_domain(spec) for spec in BLOCK_CATALOG]


@router.post(
    "", response_model=PageResponse, status_code=status.HTTP_201_CREATED,
)
async def create_page(
    body: PageCreate, builder: PageBuilderService = Depends(get_page_builder),
):
    """Create a draft page, optionally linked to a product."""
    page = await builder.create_page(body.title, body.product_id, body.template)
    return PageResponse.from_domain(page)


@router.get("", response_model=list[PageSummary])
async def list_pages(builder: PageBuilderService = Depends(get_page_builder)):
    return [PageSummary.from_domain(p) for p in await builder.list_pages()]


@router.get("/{page_id}", response_model=PageResponse)
async def get_page(
    page_id: str, builder: PageBuilderService = Depends(get_page_builder),
):
    return PageResponse.from_domain(await builder.get_page(page_id))


@router.patch("/{page_id}", response_model=PageResponse)
async def update_page_settings(
    page_id: str,
    body: PageSettingsUpdate,
    builder: PageBuilderService = Depends(get_page_builder),
):
    """Edit title, template or linked product. The slug never changes.

    An explicit "product_id": null unlinks the product; omitting it keeps the link.
    """
    page = await builder.update_settings(
        page_id,
        title=body.title,
        template=body.template,
        product_id=body.product_id,
        unlink_product=body.unlinks_product,
    )
    return PageResponse.from_domain(page)


@router.delete("/{page_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_page(
    page_id: str, builder: PageBuilderService = Depends(get_page_builder),
):
    await builder.delete_page(page_id)


@router.post(
    "/{page_id}/elements",
    response_model=PageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_element(
    page_id: str,
    body: ElementCreate,
    builder: PageBuilderService = Depends(get_page_builder),
):
    """Append a block of the given kind with its default content."""
    page, _ = await builder.add_element(page_id, body.kind)
    return PageResponse.from_domain(page)


@router.patch("/{page_id}/elements/{element_id}", response_model=PageResponse)
async def update_element(
    page_id: str,
    element_id: str,
    body: ElementUpdate,
    builder: PageBuilderService = Depends(get_page_builder),
):
    page = await builder.update_element(page_id, element_id, body.content)
    return PageResponse.from_domain(page)


@router.delete("/{page_id}/elements/{element_id}", response_model=PageResponse)
async def remove_element(
    page_id: str,
    element_id: str,
    builder: PageBuilderService = Depends(get_page_builder),
):
    page = await builder.remove_element(page_id, element_id)
    return PageResponse.from_domain(page)


@router.post("/{page_id}/publish", response_model=PageResponse)
async def publish_page(
    page_id: str, builder: PageBuilderService = Depends(get_page_builder),
):
    return PageResponse.from_domain(await builder.publish(page_id))


@router.post("/{page_id}/unpublish", response_model=PageResponse)
async def unpublish_page(
    page_id: str, builder: PageBuilderService = Depends(get_page_builder),
):
    return PageResponse.from_domain(await builder.unpublish(page_id))


@router.get("/{page_id}/share-url", response_model=ShareUrlResponse)
async def share_url(
    page_id: str,
    builder: PageBuilderService = Depends(get_page_builder),
    settings: Settings = Depends(get_settings),
):
    """Checkout link for sharing: {origin}/checkout/{page_id}."""
    url = await builder.share_url(page_id, settings.public_origin)
    return ShareUrlResponse(page_id=page_id, url=url)
