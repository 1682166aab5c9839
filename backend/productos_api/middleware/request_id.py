"""
Productos API: Request ID Middleware
=====================================

What:  Assigns a correlation ID to each request and echoes it back in the
       X-Request-ID response header.
How:   Reuses the client's X-Request-ID when present, otherwise generates
       a short UUID; stores it in a ContextVar for loggers and in
       request.state for handlers.
When:  Outermost application middleware, so every response carries the
       header, including 500s.

Exceptions that escape the app are translated here, while the ContextVar
is still set, so the error log line and the response share the same ID.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one thread each see their own value
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Sets request_id_var for the duration of the request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # error_handlers imports request_id_var from this module
        from productos_api.error_handlers import translate_exception

        rid = request.headers.get(REQUEST_ID_HEADER) or new_request_id()
        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            try:
                response = await call_next(request)
            except Exception as exc:
                response = translate_exception(request, exc)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
