"""Product Schemas — read-only views for search results and the details page."""

from uuid import UUID

from storefront.schemas.common import CamelModel


class ProductOut(CamelModel):
    id: UUID
    name: str
    code: str
    price: float
    images: list[str]
    category_id: UUID | None = None
