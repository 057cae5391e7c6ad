"""Category Schemas — creation body and response envelopes.

Invariants:
    - CategoryCreate fields are all optional at parse time: the handler's ordered
      validation decides which message the client sees
    - CategoryOut.image_url is the store's canonical URL
"""

from datetime import datetime
from uuid import UUID

from storefront.schemas.common import CamelModel


class CategoryCreate(CamelModel):
    name: str | None = None
    code: str | None = None
    image_url: str | None = None


class CategoryOut(CamelModel):
    id: UUID
    name: str
    code: str
    image_url: str
    created_at: datetime


class CategoryCreated(CamelModel):
    message: str
    category: CategoryOut
