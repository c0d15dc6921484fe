"""Exception handler turning BlogException into structured JSON responses."""

import logging
from fastapi import Request
from fastapi.responses import JSONResponse
from ..exceptions import BlogException

logger = logging.getLogger(__name__)


async def blog_exception_handler(request: Request, exc: BlogException) -> JSONResponse:
    """
    Convert a BlogException into ``{"error", "message", "details"}``.

    Client errors are logged at WARNING, server errors at ERROR. A
    ``retry_after`` detail is also sent as the ``Retry-After`` header.
    """
    level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
    logger.log(
        level,
        "%s on %s %s", exc.error_code.value, request.method, request.url.path,
        extra={
            "error_code": exc.error_code.value,
            "path": request.url.path,
            "method": request.method,
            "details": exc.details,
            "status_code": exc.status_code,
        },
    )

    headers = None
    retry_after = exc.details.get("retry_after")
    if retry_after is not None:
        headers = {"Retry-After": str(retry_after)}

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=headers,
    )
