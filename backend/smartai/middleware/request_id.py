"""
SmartAI Backend - Request ID Middleware
=======================================

What:  Gives every request a short correlation ID, returned in the
       X-Request-ID response header and stamped on every log record.
How:   A ContextVar holds the ID for the current request; RequestIDLogFilter
       copies it onto log records so the log format can print it.

An incoming X-Request-ID is reused only when it looks like an ID (letters,
digits, dashes, underscores, at most 64 chars). Anything else is replaced,
so clients cannot inject arbitrary text into the logs.
"""

import logging
import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9_-]{1,64}$")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:12]


class RequestIDLogFilter(logging.Filter):
    """Adds `request_id` to every record ("-" outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("") or "-"
        return True


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        incoming = request.headers.get(REQUEST_ID_HEADER, "")
        rid = incoming if _VALID_REQUEST_ID.match(incoming) else new_request_id()

        # Not reset afterwards: the catch-all error handler runs outside this
        # middleware and still needs the ID.
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
