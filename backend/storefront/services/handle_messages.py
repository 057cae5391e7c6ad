"""Message Handlers — contact form intake and the dashboard inbox.

Invariants:
    - Fields are stripped before validation and before persisting
    - Validation fails fast (presence -> e-mail -> lengths) before any DB call
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.enforce_message import (
    normalize_message_fields, validate_message_fields,
)
from storefront.core.errors import FieldValidationError, ErrorContext
from storefront.models.contact_message import ContactMessage
from storefront.schemas.contact_message import ContactMessageCreate

logger = logging.getLogger(__name__)


class MessageHandlers:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_message(self, body: ContactMessageCreate) -> ContactMessage:
        fields = normalize_message_fields(body.model_dump())
        error = validate_message_fields(fields)
        if error:
            raise FieldValidationError(
                error["message"], error["field"],
                ErrorContext(entity="contact_message"),
            )

        message = ContactMessage(**fields)
        try:
            self.db.add(message)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        logger.info(
            f"Contact message {message.id} received",
            extra={"entity": "contact_message"},
        )
        return message

    async def list_messages(self) -> list[ContactMessage]:
        """Newest first."""
        result = await self.db.execute(
            select(ContactMessage).order_by(ContactMessage.created_at.desc()),
        )
        return list(result.scalars().all())
