"""Domain Types: identifiers and closed enumerations shared across the codebase.

Invariants:
    - PageId, ElementId, ProductId, OrderId wrap opaque strings (uuid4 hex form)
    - Every closed set of values is a str Enum, never raw string matching

Design Decisions:
    - NewType over wrapper classes: ids stay plain strings on the wire and in the DB
    - str Enums serialize to JSON without custom encoders
"""

import uuid
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

PageId = NewType("PageId", str)
ElementId = NewType("ElementId", str)
ProductId = NewType("ProductId", str)
OrderId = NewType("OrderId", str)


def new_id() -> str:
    """Allocate a fresh opaque identifier. Identifiers are never reused."""
    return str(uuid.uuid4())


# ─── Enums ───────────────────────────────────────────────────────

class BlockKind(str, Enum):
    """The closed set of content block kinds a sales page can hold."""
    HERO = "hero"
    FEATURES = "features"
    TESTIMONIALS = "testimonials"
    VIDEO = "video"
    PRICING = "pricing"


class PageStatus(str, Enum):
    """Sales page lifecycle. Both transitions are always legal."""
    DRAFT = "draft"
    PUBLISHED = "published"


class PageTemplate(str, Enum):
    MODERN = "modern"
    BOLD = "bold"
    MINIMAL = "minimal"


class ProductType(str, Enum):
    DIGITAL = "digital"
    PHYSICAL = "physical"


class ProductStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class OrderStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"


class PaymentMethod(str, Enum):
    CREDIT_CARD = "credit_card"
    PAYPAL = "paypal"
