"""Contact Message Schemas — public form body and dashboard views."""

from datetime import datetime
from uuid import UUID

from storefront.schemas.common import CamelModel


class ContactMessageCreate(CamelModel):
    name: str | None = None
    email: str | None = None
    title: str | None = None
    content: str | None = None


class ContactMessageOut(CamelModel):
    id: UUID
    name: str
    email: str
    title: str
    content: str
    is_read: bool
    created_at: datetime


class ContactMessageCreated(CamelModel):
    message: str
    contact_message: ContactMessageOut
