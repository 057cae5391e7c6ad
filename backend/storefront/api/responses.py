"""Response Envelope Helpers — convert handler failures into {"error": ...} responses.

Invariants:
    - Client-caused errors (StorefrontError with 4xx status) keep their specific message
    - Everything else becomes a 500 with the caller's generic message
    - Server-side failures are logged with the traceback; clients never see internals
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from storefront.core.errors import StorefrontError


def failure_response(
    exc: Exception,
    generic_message: str,
    request: Request,
    logger: logging.Logger,
) -> JSONResponse:
    """Map an exception raised inside a route body to the error envelope."""
    extra = {"path": request.url.path, "method": request.method}
    if isinstance(exc, StorefrontError) and exc.http_status < 500:
        logger.info(
            f"Rejected {request.method} {request.url.path}: {exc.message}",
            extra={**extra, **exc.log_extra()},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )

    if isinstance(exc, StorefrontError):
        extra.update(exc.log_extra())
    logger.error(
        f"Failed {request.method} {request.url.path}: {exc}",
        exc_info=exc,
        extra=extra,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": generic_message},
    )
