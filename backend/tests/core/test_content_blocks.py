"""Content Block Registry: tests for defaults, parsing and partial merges.

Tests cover:
    - default_content returns every required field for all five kinds
    - Successive calls return equal but independent records
    - Unknown kinds fail loudly with UnknownBlockKindError
    - content_from_dict rejects missing, unknown and wrongly typed fields
    - merge_content overwrites only the given fields
"""

import pytest

from salesdesk.core import content_blocks as cb
from salesdesk.core.domain_types import BlockKind
from salesdesk.core.errors import ContentValidationError, UnknownBlockKindError

REQUIRED_WIRE_FIELDS = {
    BlockKind.HERO: {"headline", "subheadline", "ctaText", "backgroundImage"},
    BlockKind.FEATURES: {"title", "features"},
    BlockKind.TESTIMONIALS: {"title", "testimonials"},
    BlockKind.VIDEO: {"title", "videoUrl"},
    BlockKind.PRICING: {"title", "price", "features", "ctaText"},
}


# ─── default_content ─────────────────────────────────────────────

@pytest.mark.parametrize("kind", list(BlockKind))
def test_default_content_has_every_required_field(kind):
    content = cb.default_content(kind)
    assert set(cb.content_to_dict(content)) == REQUIRED_WIRE_FIELDS[kind]


@pytest.mark.parametrize("kind", list(BlockKind))
def test_default_content_returns_independent_copies(kind):
    first = cb.default_content(kind)
    second = cb.default_content(kind)
    assert first == second
    assert first is not second


def test_default_content_accepts_kind_value_string():
    assert cb.default_content("video") == cb.default_content(BlockKind.VIDEO)


def test_default_content_rejects_unknown_kind():
    with pytest.raises(UnknownBlockKindError):
        cb.default_content("carousel")


def test_unknown_kind_is_not_a_recoverable_domain_error():
    from salesdesk.core.errors import SalesDeskError
    assert not issubclass(UnknownBlockKindError, SalesDeskError)


def test_default_testimonials_carry_name_text_avatar():
    data = cb.content_to_dict(cb.default_content(BlockKind.TESTIMONIALS))
    assert data["testimonials"][0].keys() == {"name", "text", "avatar"}


def test_default_pricing_price_is_display_string():
    content = cb.default_content(BlockKind.PRICING)
    assert content.price == "$97"


def test_block_catalog_covers_every_kind_once():
    assert [spec.kind for spec in cb.BLOCK_CATALOG] == list(BlockKind)


# ─── content_from_dict ───────────────────────────────────────────

def test_from_dict_parses_complete_hero():
    content = cb.content_from_dict("hero", {
        "headline": "H", "subheadline": "S", "ctaText": "Buy", "backgroundImage": "u",
    })
    assert content.cta_text == "Buy"
    assert content.background_image == "u"


def test_from_dict_rejects_missing_field():
    with pytest.raises(ContentValidationError) as exc:
        cb.content_from_dict(BlockKind.VIDEO, {"title": "Demo"})
    assert exc.value.field == "videoUrl"


def test_from_dict_rejects_field_of_another_kind():
    data = cb.content_to_dict(cb.default_content(BlockKind.VIDEO))
    data["headline"] = "not a video field"
    with pytest.raises(ContentValidationError) as exc:
        cb.content_from_dict(BlockKind.VIDEO, data)
    assert exc.value.field == "headline"


def test_from_dict_rejects_non_string_text():
    data = cb.content_to_dict(cb.default_content(BlockKind.VIDEO))
    data["title"] = 42
    with pytest.raises(ContentValidationError):
        cb.content_from_dict(BlockKind.VIDEO, data)


def test_from_dict_rejects_non_list_features():
    with pytest.raises(ContentValidationError):
        cb.content_from_dict(BlockKind.FEATURES, {"title": "T", "features": "one"})


def test_from_dict_rejects_testimonial_without_avatar():
    with pytest.raises(ContentValidationError) as exc:
        cb.content_from_dict(BlockKind.TESTIMONIALS, {
            "title": "T", "testimonials": [{"name": "A", "text": "B"}],
        })
    assert exc.value.field == "testimonials[0]"


# ─── merge_content ───────────────────────────────────────────────

def test_merge_overwrites_only_given_field():
    original = cb.default_content(BlockKind.HERO)
    merged = cb.merge_content(original, {"headline": "New headline"})
    assert merged.headline == "New headline"
    assert merged.subheadline == original.subheadline
    assert merged.cta_text == original.cta_text
    assert merged.background_image == original.background_image


def test_merge_leaves_original_untouched():
    original = cb.default_content(BlockKind.FEATURES)
    cb.merge_content(original, {"features": ["Only one"]})
    assert original.features == ("Feature 1", "Feature 2", "Feature 3", "Feature 4")


def test_merge_replaces_sequence_wholesale():
    merged = cb.merge_content(
        cb.default_content(BlockKind.FEATURES), {"features": ["A", "B"]},
    )
    assert merged.features == ("A", "B")


def test_merge_with_empty_partial_is_structurally_equal():
    original = cb.default_content(BlockKind.PRICING)
    assert cb.merge_content(original, {}) == original


def test_merge_rejects_unknown_field():
    with pytest.raises(ContentValidationError):
        cb.merge_content(cb.default_content(BlockKind.HERO), {"videoUrl": "x"})


def test_merge_rejects_wrong_type():
    with pytest.raises(ContentValidationError):
        cb.merge_content(cb.default_content(BlockKind.PRICING), {"price": 97})


def test_wire_name_camel_cases_snake_fields():
    assert cb.wire_name("background_image") == "backgroundImage"
    assert cb.wire_name("title") == "title"
