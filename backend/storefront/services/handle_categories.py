"""Category Handlers — list and create categories with image upload.

Invariants:
    - Strict order per create: validate fields -> lookup name -> lookup code
      -> upload image -> insert. First failure wins, nothing runs after it
    - No upload happens unless every pre-check passed
    - The persisted image_url is the store's canonical URL, never client input
    - The unique constraints are authoritative: an IntegrityError on insert is
      reported as the same duplicate error the pre-check would have produced
    - Any failure after a successful upload deletes the uploaded image
    - The image store is resolved from its provider only after every pre-check
      passed; a handler built without one rejects creation with ImageUploadError

Design Decisions:
    - Pre-checks exist for the friendlier field-specific message, not for
      correctness (two concurrent requests can both pass them)
    - Compensating delete is best-effort: its own failure is logged, the
      original error is what the caller sees
"""

import logging
from typing import Callable

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.enforce_category import validate_category_fields, duplicate_error
from storefront.core.errors import (
    DuplicateFieldError, FieldValidationError, ImageUploadError, ErrorContext,
)
from storefront.core.repository_protocols import ImageStore
from storefront.models.category import Category
from storefront.schemas.category import CategoryCreate

logger = logging.getLogger(__name__)


class CategoryHandlers:
    """Dashboard category operations."""

    def __init__(
        self,
        db: AsyncSession,
        image_store_provider: Callable[[], ImageStore] | None = None,
        image_folder: str = "",
    ):
        self.db = db
        self.image_store_provider = image_store_provider
        self.image_folder = image_folder

    async def list_categories(self) -> list[Category]:
        """All categories in insertion order."""
        result = await self.db.execute(
            select(Category).order_by(Category.created_at, Category.name),
        )
        return list(result.scalars().all())

    async def create_category(self, body: CategoryCreate) -> Category:
        """Validate, check uniqueness, upload, insert."""
        # ── PURE: field validation ──
        error = validate_category_fields(body.name, body.code, body.image_url)
        if error:
            raise FieldValidationError(
                error["message"], error["field"], ErrorContext(entity="category"),
            )
        name, code = body.name.strip(), body.code.strip()

        # ── IO: uniqueness pre-checks, one lookup at a time ──
        values = {"name": name, "code": code}
        for field in Category.UNIQUE_FIELDS:
            if await self._find_by(field, values[field]) is not None:
                raise self._duplicate(field)

        image_store = self._resolve_image_store()
        image_url = await image_store.upload(
            body.image_url.strip(), self.image_folder,
        )

        category = Category(name=name, code=code, image_url=image_url)
        try:
            self.db.add(category)
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            await self._discard_upload(image_store, image_url)
            field = await self._colliding_field(values)
            logger.warning(
                f"Category insert lost a uniqueness race on {field}",
                extra={"entity": "category", "field_name": field},
            )
            raise self._duplicate(field)
        except Exception:
            await self.db.rollback()
            await self._discard_upload(image_store, image_url)
            raise

        logger.info(
            f"Category {category.code} created", extra={"entity": "category"},
        )
        return category

    async def _find_by(self, field: str, value: str) -> Category | None:
        column = getattr(Category, field)
        result = await self.db.execute(select(Category).where(column == value))
        return result.scalar_one_or_none()

    async def _colliding_field(self, values: dict[str, str]) -> str:
        """Which unique field the committed row collides with; 'name' if unknown."""
        for field in Category.UNIQUE_FIELDS:
            if await self._find_by(field, values[field]) is not None:
                return field
        return "name"

    def _resolve_image_store(self) -> ImageStore:
        if self.image_store_provider is None:
            raise ImageUploadError(
                "no image store configured", "configure",
                ErrorContext(entity="category"),
            )
        return self.image_store_provider()

    async def _discard_upload(self, image_store: ImageStore, image_url: str) -> None:
        try:
            await image_store.delete(image_url)
        except Exception as e:
            logger.error(
                f"Could not delete orphaned image {image_url}: {e}",
                extra={"entity": "category"},
            )

    @staticmethod
    def _duplicate(field: str) -> DuplicateFieldError:
        error = duplicate_error(field)
        return DuplicateFieldError(
            error["message"], field, ErrorContext(entity="category"),
        )
