"""ORM Models: SQLAlchemy declarative models for persisted records.

Invariants:
    - All models inherit from Base (db/base.py)
    - ORM rows never leave infrastructure/; stores map them to core dataclasses

Design Decisions:
    - One file per entity
    - All models imported here so Base.metadata is complete before create_all
"""

from salesdesk.models.product import ProductRecord  # noqa: F401
from salesdesk.models.sales_page import SalesPageRecord  # noqa: F401
from salesdesk.models.order import OrderRecord  # noqa: F401
