"""Contact Messages — public form intake and dashboard inbox listing.

Invariants:
    - POST returns {"message", "contactMessage"} (201) or {"error"} (400/500)
    - GET lists newest first
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.responses import failure_response
from storefront.core import language_strings as strings
from storefront.infrastructure.database import get_db
from storefront.schemas.common import ErrorResponse
from storefront.schemas.contact_message import (
    ContactMessageCreate, ContactMessageCreated, ContactMessageOut,
)
from storefront.services.handle_messages import MessageHandlers

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/dashboard/messages", tags=["messages"])


@router.post(
    "", response_model=ContactMessageCreated,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def create_message(
    body: ContactMessageCreate,
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    """Accept a message from the public contact form."""
    try:
        message = await MessageHandlers(db).create_message(body)
    except Exception as e:
        return failure_response(e, strings.MESSAGE_SEND_FAILED, request, logger)
    return ContactMessageCreated(
        message=strings.MESSAGE_SENT,
        contact_message=ContactMessageOut.model_validate(message),
    )


@router.get(
    "", response_model=list[ContactMessageOut],
    responses={500: {"model": ErrorResponse}},
)
async def list_messages(request: Request, db: AsyncSession = Depends(get_db)):
    try:
        messages = await MessageHandlers(db).list_messages()
    except Exception as e:
        return failure_response(e, strings.MESSAGE_LIST_FAILED, request, logger)
    return [ContactMessageOut.model_validate(m) for m in messages]
