"""Public Products — search-as-you-type lookup and product details.

Invariants:
    - Read-only: no route here writes to the store
    - Search with a blank or missing query returns [] (200)

Design Decisions:
    - /search declared before /{code} so the literal path wins
"""

import logging

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.responses import failure_response
from storefront.config import get_settings
from storefront.core import language_strings as strings
from storefront.infrastructure.database import get_db
from storefront.schemas.common import ErrorResponse
from storefront.schemas.product import ProductOut
from storefront.services.handle_products import ProductHandlers

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/public/products", tags=["products"])


@router.get(
    "/search", response_model=list[ProductOut],
    responses={500: {"model": ErrorResponse}},
)
async def search_products(
    request: Request,
    query: str | None = Query(None, max_length=200),
    db: AsyncSession = Depends(get_db),
):
    """Products whose name or code contains the query."""
    handlers = ProductHandlers(db, get_settings().search_result_limit)
    try:
        products = await handlers.search(query)
    except Exception as e:
        return failure_response(e, strings.PRODUCT_SEARCH_FAILED, request, logger)
    return [ProductOut.model_validate(p) for p in products]


@router.get(
    "/{code}", response_model=ProductOut,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def get_product(
    code: str, request: Request, db: AsyncSession = Depends(get_db),
):
    """Product details by its unique code."""
    try:
        product = await ProductHandlers(db).get_by_code(code)
    except Exception as e:
        return failure_response(e, strings.PRODUCT_FETCH_FAILED, request, logger)
    return ProductOut.model_validate(product)
