"""Sales Page Aggregate: tests for pure builder operations.

Tests cover:
    - create_page defaults (draft, no elements, equal timestamps) and slug derivation
    - append_element is append-only and preserves prior ids and order
    - update_element_content touches only the targeted field and block
    - remove_element and missing-id operations are silent no-ops
    - set_status is bidirectional; updated_at strictly increases
    - update_settings never recomputes the slug; product links can be cleared
"""

from datetime import datetime, timedelta, timezone

import pytest

from salesdesk.core import sales_page as ops
from salesdesk.core.domain_types import BlockKind, PageStatus, PageTemplate

T0 = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


def _page(**kwargs):
    return ops.create_page("My Great Page", now=T0, **kwargs)


# ─── create_page / slugify ───────────────────────────────────────

def test_create_page_is_empty_draft():
    page = _page(product_id="p1")
    assert page.status is PageStatus.DRAFT
    assert page.elements == ()
    assert page.product_id == "p1"
    assert page.template is PageTemplate.MODERN
    assert page.created_at == page.updated_at == T0


def test_create_page_derives_slug():
    assert _page().slug == "my-great-page"


def test_slug_collapses_whitespace_runs():
    assert ops.slugify("  Big \t Launch  Day") == "-big-launch-day"
    assert ops.slugify("Digital Marketing Masterclass") == "digital-marketing-masterclass"


def test_create_page_allocates_distinct_ids():
    assert _page().id != _page().id


def test_create_page_accepts_template_value():
    assert ops.create_page("X", template="bold", now=T0).template is PageTemplate.BOLD


def test_page_is_frozen():
    page = _page()
    with pytest.raises(AttributeError):
        page.title = "changed"


# ─── append_element ──────────────────────────────────────────────

def test_append_grows_by_exactly_one_each_call():
    page = _page()
    ids = []
    for i, kind in enumerate(BlockKind, start=1):
        page = ops.append_element(page, kind, now=T0)
        assert len(page.elements) == i
        ids.append(page.elements[-1].id)
    assert [el.id for el in page.elements] == ids
    assert [el.kind for el in page.elements] == list(BlockKind)


def test_append_installs_default_content():
    page = ops.append_element(_page(), BlockKind.VIDEO, now=T0)
    assert page.elements[0].content.video_url.startswith("https://")


def test_append_does_not_modify_input_page():
    page = _page()
    ops.append_element(page, BlockKind.HERO, now=T0)
    assert page.elements == ()


def test_append_refreshes_updated_at():
    later = T0 + timedelta(minutes=5)
    page = ops.append_element(_page(), BlockKind.HERO, now=later)
    assert page.updated_at == later
    assert page.created_at == T0


# ─── update_element_content ──────────────────────────────────────

def test_update_changes_only_the_target_field():
    page = ops.append_element(_page(), BlockKind.HERO, now=T0, element_id="a")
    page = ops.append_element(page, BlockKind.FEATURES, now=T0, element_id="b")
    before = page

    after = ops.update_element_content(page, "a", {"headline": "Launch"}, now=T0)

    hero_before, features_before = before.elements
    hero_after, features_after = after.elements
    assert hero_after.content.headline == "Launch"
    assert hero_after.content.subheadline == hero_before.content.subheadline
    assert hero_after.content.cta_text == hero_before.content.cta_text
    assert hero_after.id == hero_before.id
    assert features_after == features_before


def test_update_strictly_increases_updated_at_even_with_frozen_clock():
    page = ops.append_element(_page(), BlockKind.HERO, now=T0, element_id="a")
    after = ops.update_element_content(page, "a", {"headline": "X"}, now=T0)
    assert after.updated_at > page.updated_at


def test_update_missing_element_is_silent_noop():
    page = ops.append_element(_page(), BlockKind.HERO, now=T0)
    assert ops.update_element_content(page, "missing", {"headline": "X"}) is page


# ─── remove_element ──────────────────────────────────────────────

def test_remove_filters_block_out():
    page = ops.append_element(_page(), BlockKind.HERO, now=T0, element_id="a")
    page = ops.append_element(page, BlockKind.VIDEO, now=T0, element_id="b")
    page = ops.remove_element(page, "a", now=T0)
    assert [el.id for el in page.elements] == ["b"]


def test_remove_twice_is_idempotent():
    page = ops.append_element(_page(), BlockKind.HERO, now=T0, element_id="a")
    once = ops.remove_element(page, "a", now=T0)
    twice = ops.remove_element(once, "a", now=T0)
    assert twice is once


# ─── set_status / update_settings ────────────────────────────────

def test_status_transitions_both_directions():
    page = ops.set_status(_page(), PageStatus.PUBLISHED, now=T0)
    assert page.is_published
    page = ops.set_status(page, "draft", now=T0)
    assert page.status is PageStatus.DRAFT


def test_title_edit_keeps_slug():
    page = ops.update_settings(_page(), title="Completely Different", now=T0)
    assert page.title == "Completely Different"
    assert page.slug == "my-great-page"


def test_update_settings_without_changes_returns_same_page():
    page = _page()
    assert ops.update_settings(page, now=T0) is page


def test_find_element_returns_none_when_absent():
    assert ops.find_element(_page(), "nope") is None


def test_checkout_url_template():
    assert ops.checkout_url("https://shop.example/", "abc") == "https://shop.example/checkout/abc"


def test_unlink_product_clears_link():
    page = _page(product_id="p1")
    unlinked = ops.update_settings(page, unlink_product=True, now=T0)
    assert unlinked.product_id is None
    assert unlinked.updated_at > page.updated_at


def test_none_product_id_keeps_link():
    page = _page(product_id="p1")
    assert ops.update_settings(page, product_id=None, now=T0) is page


def test_unlink_on_unlinked_page_is_noop():
    page = _page()
    assert ops.update_settings(page, unlink_product=True, now=T0) is page
