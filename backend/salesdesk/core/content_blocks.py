"""Content Block Registry: the closed set of block kinds and their typed content.

Invariants:
    - Each BlockKind maps to exactly one frozen content record (tagged union)
    - default_content() is total over BlockKind; anything else raises UnknownBlockKindError
    - Every content record always carries all required fields for its kind
    - merge_content() overwrites present fields only and never drops a field
    - Wire (JSON) names are camelCase: cta_text <-> ctaText

Design Decisions:
    - Frozen dataclasses with tuple sequences: a block's content cannot be aliased
      and edited from outside the builder operations
    - Field shapes declared per record: the same table drives defaults, parsing and merging
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Callable, ClassVar, Union

from salesdesk.core.domain_types import BlockKind
from salesdesk.core.errors import ContentValidationError, UnknownBlockKindError


class FieldShape(str, Enum):
    TEXT = "text"
    TEXT_LIST = "text_list"
    TESTIMONIAL_LIST = "testimonial_list"


# ─── Content Records ─────────────────────────────────────────────

@dataclass(frozen=True)
class Testimonial:
    name: str
    text: str
    avatar: str


@dataclass(frozen=True)
class HeroContent:
    kind: ClassVar[BlockKind] = BlockKind.HERO
    shapes: ClassVar[dict[str, FieldShape]] = {
        "headline": FieldShape.TEXT,
        "subheadline": FieldShape.TEXT,
        "cta_text": FieldShape.TEXT,
        "background_image": FieldShape.TEXT,
    }

    headline: str
    subheadline: str
    cta_text: str
    background_image: str


@dataclass(frozen=True)
class FeaturesContent:
    kind: ClassVar[BlockKind] = BlockKind.FEATURES
    shapes: ClassVar[dict[str, FieldShape]] = {
        "title": FieldShape.TEXT,
        "features": FieldShape.TEXT_LIST,
    }

    title: str
    features: tuple[str, ...]


@dataclass(frozen=True)
class TestimonialsContent:
    kind: ClassVar[BlockKind] = BlockKind.TESTIMONIALS
    shapes: ClassVar[dict[str, FieldShape]] = {
        "title": FieldShape.TEXT,
        "testimonials": FieldShape.TESTIMONIAL_LIST,
    }

    title: str
    testimonials: tuple[Testimonial, ...]


@dataclass(frozen=True)
class VideoContent:
    kind: ClassVar[BlockKind] = BlockKind.VIDEO
    shapes: ClassVar[dict[str, FieldShape]] = {
        "title": FieldShape.TEXT,
        "video_url": FieldShape.TEXT,
    }

    title: str
    video_url: str


@dataclass(frozen=True)
class PricingContent:
    kind: ClassVar[BlockKind] = BlockKind.PRICING
    shapes: ClassVar[dict[str, FieldShape]] = {
        "title": FieldShape.TEXT,
        "price": FieldShape.TEXT,
        "features": FieldShape.TEXT_LIST,
        "cta_text": FieldShape.TEXT,
    }

    title: str
    price: str  # display-formatted, e.g. "$97"
    features: tuple[str, ...]
    cta_text: str


BlockContent = Union[
    HeroContent, FeaturesContent, TestimonialsContent, VideoContent, PricingContent,
]

CONTENT_TYPES: dict[BlockKind, type] = {
    BlockKind.HERO: HeroContent,
    BlockKind.FEATURES: FeaturesContent,
    BlockKind.TESTIMONIALS: TestimonialsContent,
    BlockKind.VIDEO: VideoContent,
    BlockKind.PRICING: PricingContent,
}


# ─── Palette Metadata ────────────────────────────────────────────

@dataclass(frozen=True)
class BlockSpec:
    kind: BlockKind
    name: str
    description: str


BLOCK_CATALOG: tuple[BlockSpec, ...] = (
    BlockSpec(BlockKind.HERO, "Hero Section", "Main banner with headline and CTA"),
    BlockSpec(BlockKind.FEATURES, "Features", "Product features list"),
    BlockSpec(BlockKind.TESTIMONIALS, "Testimonials", "Customer testimonials"),
    BlockSpec(BlockKind.VIDEO, "Video", "Embedded video content"),
    BlockSpec(BlockKind.PRICING, "Pricing", "Pricing table"),
)


# ─── Defaults ────────────────────────────────────────────────────

def _default_hero() -> HeroContent:
    return HeroContent(
        headline="Your Amazing Product",
        subheadline="Transform your life with our revolutionary solution",
        cta_text="Get Started Now",
        background_image=(
            "https://images.unsplash.com/photo-1460925895917-afdab827c52f"
            "?w=1200&h=600&fit=crop"
        ),
    )


def _default_features() -> FeaturesContent:
    return FeaturesContent(
        title="Amazing Features",
        features=("Feature 1", "Feature 2", "Feature 3", "Feature 4"),
    )


def _default_testimonials() -> TestimonialsContent:
    return TestimonialsContent(
        title="What Our Customers Say",
        testimonials=(
            Testimonial(
                name="John Doe",
                text="This product changed my life!",
                avatar=(
                    "https://images.unsplash.com/photo-1472099645785-5658abf4ff4e"
                    "?w=64&h=64&fit=crop&crop=face"
                ),
            ),
        ),
    )


def _default_video() -> VideoContent:
    return VideoContent(
        title="Watch Our Demo",
        video_url="https://www.youtube.com/embed/dQw4w9WgXcQ",
    )


def _default_pricing() -> PricingContent:
    return PricingContent(
        title="Choose Your Plan",
        price="$97",
        features=("Feature 1", "Feature 2", "Feature 3"),
        cta_text="Buy Now",
    )


_DEFAULTS: dict[BlockKind, Callable[[], BlockContent]] = {
    BlockKind.HERO: _default_hero,
    BlockKind.FEATURES: _default_features,
    BlockKind.TESTIMONIALS: _default_testimonials,
    BlockKind.VIDEO: _default_video,
    BlockKind.PRICING: _default_pricing,
}


def coerce_kind(kind: BlockKind | str) -> BlockKind:
    """Resolve a kind value, failing loudly outside the closed set."""
    if isinstance(kind, BlockKind):
        return kind
    try:
        return BlockKind(kind)
    except ValueError:
        raise UnknownBlockKindError(kind) from None


def default_content(kind: BlockKind | str) -> BlockContent:
    """Fresh default content for a kind. Each call builds a new record."""
    return _DEFAULTS[coerce_kind(kind)]()


# ─── Wire Conversion ─────────────────────────────────────────────

def wire_name(field_name: str) -> str:
    head, *rest = field_name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def content_to_dict(content: BlockContent) -> dict[str, Any]:
    """Serialize a content record to its JSON shape (camelCase keys, lists)."""
    out: dict[str, Any] = {}
    for f in fields(content):
        value = getattr(content, f.name)
        shape = content.shapes[f.name]
        if shape is FieldShape.TEXT_LIST:
            value = list(value)
        elif shape is FieldShape.TESTIMONIAL_LIST:
            value = [
                {"name": t.name, "text": t.text, "avatar": t.avatar}
                for t in value
            ]
        out[wire_name(f.name)] = value
    return out


def _parse_text(value: Any, key: str) -> str:
    if not isinstance(value, str):
        raise ContentValidationError(f"'{key}' must be a string", key)
    return value


def _parse_text_list(value: Any, key: str) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        raise ContentValidationError(f"'{key}' must be a list of strings", key)
    return tuple(_parse_text(item, f"{key}[{i}]") for i, item in enumerate(value))


def _parse_testimonials(value: Any, key: str) -> tuple[Testimonial, ...]:
    if not isinstance(value, (list, tuple)):
        raise ContentValidationError(f"'{key}' must be a list of testimonials", key)
    parsed = []
    for i, item in enumerate(value):
        item_key = f"{key}[{i}]"
        if isinstance(item, Testimonial):
            parsed.append(item)
            continue
        if not isinstance(item, dict):
            raise ContentValidationError(f"'{item_key}' must be an object", item_key)
        missing = [k for k in ("name", "text", "avatar") if k not in item]
        if missing:
            raise ContentValidationError(
                f"'{item_key}' is missing {', '.join(missing)}", item_key,
            )
        parsed.append(Testimonial(
            name=_parse_text(item["name"], f"{item_key}.name"),
            text=_parse_text(item["text"], f"{item_key}.text"),
            avatar=_parse_text(item["avatar"], f"{item_key}.avatar"),
        ))
    return tuple(parsed)


_PARSERS: dict[FieldShape, Callable[[Any, str], Any]] = {
    FieldShape.TEXT: _parse_text,
    FieldShape.TEXT_LIST: _parse_text_list,
    FieldShape.TESTIMONIAL_LIST: _parse_testimonials,
}


def _check_unknown_keys(content_type: type, data: dict[str, Any]) -> None:
    allowed = {wire_name(name) for name in content_type.shapes}
    unknown = sorted(set(data) - allowed)
    if unknown:
        raise ContentValidationError(
            f"Unknown {content_type.kind.value} field(s): {', '.join(unknown)}",
            unknown[0],
        )


def content_from_dict(kind: BlockKind | str, data: dict[str, Any]) -> BlockContent:
    """Parse a complete JSON content object for a kind.

    Every required field must be present with the right type; unknown
    fields are rejected so a block never holds another kind's content.
    """
    content_type = CONTENT_TYPES[coerce_kind(kind)]
    _check_unknown_keys(content_type, data)
    values = {}
    for name, shape in content_type.shapes.items():
        key = wire_name(name)
        if key not in data:
            raise ContentValidationError(f"Missing required field '{key}'", key)
        values[name] = _PARSERS[shape](data[key], key)
    return content_type(**values)


def merge_content(content: BlockContent, partial: dict[str, Any]) -> BlockContent:
    """Shallow field-by-field overwrite; fields absent from partial are kept."""
    _check_unknown_keys(type(content), partial)
    merged = content_to_dict(content)
    merged.update(partial)
    return content_from_dict(content.kind, merged)
