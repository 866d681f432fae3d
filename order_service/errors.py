"""Translation of order service failures into HTTP error responses."""

import logging
from datetime import datetime, timezone
from typing import Tuple

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .exceptions import NotFound, OrderServiceError
from .schemas import ErrorResponse

logger = logging.getLogger(__name__)

GENERIC_MESSAGE = "An unexpected error occurred. Please try again later."


def describe_failure(exc: BaseException) -> Tuple[int, str, str]:
    """Map a failure to ``(status_code, error category, message)``."""
    if isinstance(exc, NotFound):
        return 404, "Resource Not Found", str(exc)
    return 500, type(exc).__name__, GENERIC_MESSAGE


def error_response(request: Request, exc: BaseException) -> JSONResponse:
    status_code, category, message = describe_failure(exc)
    if status_code == 404:
        logger.warning(f"Resource not found: {exc}")
    else:
        logger.error("An unexpected error occurred", exc_info=exc)

    body = ErrorResponse(
        status=status_code,
        message=message,
        error=category,
        timestamp=datetime.now(timezone.utc),
        path=request.url.path,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def order_service_error_handler(request: Request, exc: OrderServiceError):
    return error_response(request, exc)


async def unhandled_error_handler(request: Request, exc: Exception):
    return error_response(request, exc)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(OrderServiceError, order_service_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
