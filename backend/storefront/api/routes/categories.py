"""Dashboard Categories — list and create categories.

Invariants:
    - GET returns the bare list (200) or {"error"} (500)
    - POST returns {"message", "category"} (201) or {"error"} (400/500)
    - Every exception raised in a route body is converted here, never re-raised

Design Decisions:
    - Image store injected as a provider dependency: it is only built after the
      body passed validation, and tests swap in a recording fake
"""

import logging
from typing import Callable

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.responses import failure_response
from storefront.config import get_settings
from storefront.core import language_strings as strings
from storefront.core.repository_protocols import ImageStore
from storefront.infrastructure.database import get_db
from storefront.infrastructure.image_store import get_image_store_provider
from storefront.schemas.category import CategoryCreate, CategoryCreated, CategoryOut
from storefront.schemas.common import ErrorResponse
from storefront.services.handle_categories import CategoryHandlers

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/dashboard/categories", tags=["categories"])


@router.get(
    "", response_model=list[CategoryOut],
    responses={500: {"model": ErrorResponse}},
)
async def list_categories(
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    """All categories in insertion order."""
    handlers = CategoryHandlers(db)
    try:
        categories = await handlers.list_categories()
    except Exception as e:
        return failure_response(e, strings.CATEGORY_LIST_FAILED, request, logger)
    return [CategoryOut.model_validate(c) for c in categories]


@router.post(
    "", response_model=CategoryCreated,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def create_category(
    body: CategoryCreate,
    request: Request,
    db: AsyncSession = Depends(get_db),
    image_store_provider: Callable[[], ImageStore] = Depends(get_image_store_provider),
):
    """Create a category after validation, uniqueness checks and image upload."""
    handlers = CategoryHandlers(
        db, image_store_provider, get_settings().category_image_folder,
    )
    try:
        category = await handlers.create_category(body)
    except Exception as e:
        return failure_response(e, strings.GENERIC_SERVER_ERROR, request, logger)
    return CategoryCreated(
        message=strings.CATEGORY_CREATED,
        category=CategoryOut.model_validate(category),
    )
