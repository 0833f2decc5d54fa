"""Page Builder Service: tests for load-apply-save over the page store.

Tests cover:
    - create_page persists a draft and rejects unknown products
    - add_element appends defaults and returns the new block
    - update_element changes one field; missing element ids are ignored
    - remove_element twice leaves the page as after the first removal
    - publish/unpublish, settings edits keeping the slug, delete, share URL
"""

import pytest

from salesdesk.core.domain_types import BlockKind, PageStatus, PageTemplate
from salesdesk.core.errors import ContentValidationError, ResourceNotFoundError


# ─── create / get / list ─────────────────────────────────────────

async def test_create_page_persists_draft(builder, page_store):
    page = await builder.create_page("My Great Page", "prod-1")
    stored = await page_store.get(page.id)
    assert stored == page
    assert stored.status is PageStatus.DRAFT
    assert stored.slug == "my-great-page"


async def test_create_page_rejects_unknown_product(builder):
    with pytest.raises(ResourceNotFoundError):
        await builder.create_page("Page", "no-such-product")


async def test_get_unknown_page_raises_not_found(builder):
    with pytest.raises(ResourceNotFoundError) as exc:
        await builder.get_page("missing")
    assert exc.value.http_status == 404


async def test_list_pages(builder):
    await builder.create_page("One")
    await builder.create_page("Two")
    assert [p.title for p in await builder.list_pages()] == ["One", "Two"]


# ─── elements ────────────────────────────────────────────────────

async def test_add_element_returns_new_block(builder, page_store):
    page = await builder.create_page("Launch")
    updated, block = await builder.add_element(page.id, BlockKind.PRICING)
    assert updated.elements == (block,)
    assert block.content.price == "$97"
    assert (await page_store.get(page.id)).elements == (block,)


async def test_add_every_kind_preserves_order(builder):
    page = await builder.create_page("Launch")
    for kind in BlockKind:
        page, _ = await builder.add_element(page.id, kind)
    assert [el.kind for el in page.elements] == list(BlockKind)


async def test_update_element_changes_one_field(builder):
    page = await builder.create_page("Launch")
    page, hero = await builder.add_element(page.id, BlockKind.HERO)

    updated = await builder.update_element(page.id, hero.id, {"ctaText": "Buy today"})

    content = updated.elements[0].content
    assert content.cta_text == "Buy today"
    assert content.headline == hero.content.headline
    assert updated.updated_at > page.updated_at


async def test_update_missing_element_leaves_page_unchanged(builder, page_store):
    page = await builder.create_page("Launch")
    page, _ = await builder.add_element(page.id, BlockKind.HERO)

    result = await builder.update_element(page.id, "ghost", {"headline": "X"})

    assert result == page
    assert (await page_store.get(page.id)).updated_at == page.updated_at


async def test_update_element_rejects_invalid_content(builder):
    page = await builder.create_page("Launch")
    page, video = await builder.add_element(page.id, BlockKind.VIDEO)
    with pytest.raises(ContentValidationError):
        await builder.update_element(page.id, video.id, {"title": ["not", "text"]})


async def test_remove_element_twice(builder):
    page = await builder.create_page("Launch")
    page, hero = await builder.add_element(page.id, BlockKind.HERO)
    page, features = await builder.add_element(page.id, BlockKind.FEATURES)

    once = await builder.remove_element(page.id, hero.id)
    twice = await builder.remove_element(page.id, hero.id)

    assert [el.id for el in once.elements] == [features.id]
    assert twice == once


# ─── status / settings / delete ──────────────────────────────────

async def test_publish_and_unpublish(builder):
    page = await builder.create_page("Launch")
    assert (await builder.publish(page.id)).status is PageStatus.PUBLISHED
    assert (await builder.unpublish(page.id)).status is PageStatus.DRAFT


async def test_update_settings_keeps_slug(builder):
    page = await builder.create_page("My Great Page")
    updated = await builder.update_settings(
        page.id, title="Renamed", template=PageTemplate.MINIMAL, product_id="prod-1",
    )
    assert updated.title == "Renamed"
    assert updated.template is PageTemplate.MINIMAL
    assert updated.product_id == "prod-1"
    assert updated.slug == "my-great-page"


async def test_update_settings_unlinks_product(builder, page_store):
    page = await builder.create_page("Launch", "prod-1")
    updated = await builder.update_settings(page.id, unlink_product=True)
    assert updated.product_id is None
    assert (await page_store.get(page.id)).product_id is None


async def test_update_settings_rejects_unknown_product(builder):
    page = await builder.create_page("Launch")
    with pytest.raises(ResourceNotFoundError):
        await builder.update_settings(page.id, product_id="nope")


async def test_delete_page(builder, page_store):
    page = await builder.create_page("Launch")
    await builder.delete_page(page.id)
    assert await page_store.get(page.id) is None
    with pytest.raises(ResourceNotFoundError):
        await builder.delete_page(page.id)


async def test_share_url(builder):
    page = await builder.create_page("Launch")
    url = await builder.share_url(page.id, "https://shop.example")
    assert url == f"https://shop.example/checkout/{page.id}"
