"""ORM Models — SQLAlchemy declarative models for catalog and intake entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Uniqueness of category name/code and product code is enforced by the schema

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from storefront.models.category import Category  # noqa: F401
from storefront.models.product import Product  # noqa: F401
from storefront.models.contact_message import ContactMessage  # noqa: F401
