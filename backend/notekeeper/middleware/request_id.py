"""
Notekeeper Backend — Request ID Middleware
============================================

What:  Gives every request a correlation ID that appears in the
       X-Request-ID response header, in 500 error bodies, and in every log
       line written while the request is being handled.
How:   RequestIDMiddleware stores the ID in a ContextVar; RequestIDLogFilter
       copies it onto each LogRecord so the log format can use %(request_id)s.

A client-supplied X-Request-ID is reused only when it is a short token of
letters, digits, dots, dashes and underscores. Anything else is replaced so
it cannot inject text into log lines or response headers.
"""

import logging
import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

_VALID_REQUEST_ID = re.compile(r"[A-Za-z0-9._-]{1,64}")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def resolve_request_id(header_value) -> str:
    """Returns the client's ID when it is an acceptable token, else a fresh 8-char ID."""
    if header_value and _VALID_REQUEST_ID.fullmatch(header_value):
        return header_value
    return uuid.uuid4().hex[:8]


class RequestIDLogFilter(logging.Filter):
    """Adds `request_id` to every record ("-" outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "request_id", None):
            record.request_id = request_id_var.get() or "-"
        return True


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request_id_var.set(rid)

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
