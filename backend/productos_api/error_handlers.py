"""
Productos API: Error Translator
================================

What:  Converts any failure raised while handling a request into exactly
       one JSON error response.
How:   translate_exception() walks ERROR_TABLE in order and uses the
       first row whose exception type matches. register_exception_handlers()
       installs that one function for every row, so FastAPI's own
       dispatch and the table always agree.
Who:   FastAPI's exception handlers for application, validation and
       routing errors; RequestIDMiddleware for anything else that
       escapes the app (the 500 row).
When:  After a handler or a request validation step raised.

Dispatch table (priority order):
    ProductNotFoundError     → 404 ErrorResponse
    InsufficientStockError   → 400 ErrorResponse
    UnknownCategoryError     → 400 ErrorResponse
    RequestValidationError   → 400 ValidationErrorResponse (errors per field)
    HTTPException            → exc.status_code ErrorResponse (routing 404/405)
    Exception                → 500 ErrorResponse

Error body:
    {"timestamp": "...", "status": 404, "message": "...", "path": "/api/productos/7"}

Validation body:
    {"timestamp": "...", "status": 400, "path": "...", "errors": {"name": "Field required"}}
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Type

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from productos_api.exceptions import (
    InsufficientStockError,
    ProductNotFoundError,
    UnknownCategoryError,
)
from productos_api.middleware.request_id import request_id_var
from productos_api.schemas.product import ErrorResponse, ValidationErrorResponse

logger = logging.getLogger(__name__)

# Location prefixes FastAPI puts in front of the field name
_LOCATION_PREFIXES = {"body", "path", "query", "header", "cookie"}


class ErrorRule(NamedTuple):
    exc_type: Type[BaseException]
    status_code: Optional[int]  # None: take it from the exception
    build: Callable[[Request, BaseException, int], Dict[str, Any]]


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _message(exc: BaseException) -> str:
    return getattr(exc, "message", None) or str(exc)


def error_body(request: Request, exc: BaseException, status_code: int) -> Dict[str, Any]:
    """Build the standard {timestamp, status, message, path} body."""
    if isinstance(exc, StarletteHTTPException):
        message = str(exc.detail)
    else:
        message = _message(exc)
    return ErrorResponse(
        timestamp=_now(),
        status=status_code,
        message=message,
        path=request.url.path,
    ).model_dump(mode="json")


def field_name(error: Dict[str, Any]) -> str:
    """
    Field key for one pydantic error entry.

    ("body", "name") → "name", ("path", "product_id") → "product_id",
    ("body", "items", 0, "sku") → "items.0.sku". A body that is not
    valid JSON, or is missing, maps to "body".
    """
    loc = list(error.get("loc", ()))
    if loc and loc[0] in _LOCATION_PREFIXES:
        prefix, loc = loc[0], loc[1:]
    else:
        prefix = "body"
    if not loc or error.get("type") == "json_invalid":
        return str(prefix)
    return ".".join(str(part) for part in loc)


def field_errors(errors: List[Dict[str, Any]]) -> Dict[str, str]:
    """Collapse pydantic errors to {field: message}; the last message for a field wins."""
    collected: Dict[str, str] = {}
    for error in errors:
        collected[field_name(error)] = error.get("msg", "Invalid value")
    return collected


def validation_body(request: Request, exc: BaseException, status_code: int) -> Dict[str, Any]:
    """Build the {timestamp, status, path, errors} body for request validation failures."""
    return ValidationErrorResponse(
        timestamp=_now(),
        status=status_code,
        path=request.url.path,
        errors=field_errors(exc.errors()),
    ).model_dump(mode="json")


ERROR_TABLE: List[ErrorRule] = [
    ErrorRule(ProductNotFoundError, 404, error_body),
    ErrorRule(InsufficientStockError, 400, error_body),
    ErrorRule(UnknownCategoryError, 400, error_body),
    ErrorRule(RequestValidationError, 400, validation_body),
    ErrorRule(StarletteHTTPException, None, error_body),
    ErrorRule(Exception, 500, error_body),
]


def match_rule(exc: BaseException) -> ErrorRule:
    for rule in ERROR_TABLE:
        if isinstance(exc, rule.exc_type):
            return rule
    # ERROR_TABLE ends with Exception; only BaseException subclasses land here
    return ERROR_TABLE[-1]


def translate_exception(request: Request, exc: BaseException) -> JSONResponse:
    """
    Map a failure to its HTTP response using the first matching ERROR_TABLE row.

    4xx failures are logged at WARNING, 5xx at ERROR with traceback.
    """
    rule = match_rule(exc)
    status_code = rule.status_code
    if status_code is None:
        status_code = getattr(exc, "status_code", 500)

    rid = request_id_var.get("")
    if status_code >= 500:
        logger.error(
            "[%s] %s %s failed: %s",
            rid, request.method, request.url.path, str(exc),
            exc_info=(type(exc), exc, exc.__traceback__),
        )
    else:
        logger.warning(
            "[%s] %s %s -> %d %s: %s",
            rid, request.method, request.url.path, status_code,
            type(exc).__name__, _message(exc),
        )

    headers = getattr(exc, "headers", None) if isinstance(exc, StarletteHTTPException) else None
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(rule.build(request, exc, status_code)),
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install translate_exception for every failure type in ERROR_TABLE."""

    async def handle(request: Request, exc: Exception) -> JSONResponse:
        return translate_exception(request, exc)

    for rule in ERROR_TABLE:
        app.add_exception_handler(rule.exc_type, handle)
