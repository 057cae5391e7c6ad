"""Product Handlers — read-only search and details lookup.

Invariants:
    - A blank term returns [] without querying
    - Search matches name OR code, case-insensitive substring, ordered by name
    - Result count capped by the configured limit
"""

import logging

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core import language_strings as strings
from storefront.core.errors import ResourceNotFoundError
from storefront.core.search_terms import LIKE_ESCAPE, like_pattern, normalize_term
from storefront.models.product import Product

logger = logging.getLogger(__name__)


class ProductHandlers:
    """Public catalog lookups."""

    def __init__(self, db: AsyncSession, result_limit: int = 10):
        self.db = db
        self.result_limit = result_limit

    async def search(self, term: str | None) -> list[Product]:
        term = normalize_term(term)
        if not term:
            return []
        pattern = like_pattern(term)
        result = await self.db.execute(
            select(Product)
            .where(or_(
                Product.name.ilike(pattern, escape=LIKE_ESCAPE),
                Product.code.ilike(pattern, escape=LIKE_ESCAPE),
            ))
            .order_by(Product.name)
            .limit(self.result_limit)
        )
        products = list(result.scalars().all())
        logger.debug(f"Search {term!r} matched {len(products)} product(s)")
        return products

    async def get_by_code(self, code: str) -> Product:
        result = await self.db.execute(
            select(Product).where(Product.code == code),
        )
        product = result.scalar_one_or_none()
        if product is None:
            raise ResourceNotFoundError(strings.PRODUCT_NOT_FOUND, "Product", code)
        return product
