"""
SmartAI Backend - Request Body Size Limit
=========================================

Rejects request bodies larger than settings.max_body_size (5 MB by default)
with 413. A declared Content-Length over the limit is refused before any of
the body is read; a malformed Content-Length is a 400.

Bodies without a usable length (chunked transfer encoding) are counted as
they arrive. The body is buffered up to the limit and only handed to the
app once it is complete, so an oversized stream never reaches a route.
"""

import logging
from typing import List

from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from smartai.exceptions import PayloadTooLargeError, SmartAIError, ValidationError
from smartai.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)


class BodySizeLimitMiddleware:
    def __init__(self, app: ASGIApp, max_body_size: int) -> None:
        self.app = app
        self.max_body_size = max_body_size

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        declared = Headers(scope=scope).get("content-length")
        if declared is not None:
            try:
                length = int(declared)
            except ValueError:
                exc = ValidationError(message="Invalid Content-Length header", field="content-length")
                await self._reject(exc)(scope, receive, send)
                return

            if length > self.max_body_size:
                self._log_rejection(scope, length)
                await self._reject(PayloadTooLargeError(limit=self.max_body_size))(scope, receive, send)
                return

        buffered: List[Message] = []
        received = 0
        while True:
            message = await receive()
            buffered.append(message)
            if message["type"] != "http.request":
                break
            received += len(message.get("body", b""))
            if received > self.max_body_size:
                self._log_rejection(scope, received)
                await self._reject(PayloadTooLargeError(limit=self.max_body_size))(scope, receive, send)
                return
            if not message.get("more_body", False):
                break

        async def replay() -> Message:
            if buffered:
                return buffered.pop(0)
            return await receive()

        await self.app(scope, replay, send)

    def _log_rejection(self, scope: Scope, size: int) -> None:
        logger.warning(
            "Rejected %s %s: body of %d bytes exceeds %d",
            scope["method"],
            scope["path"],
            size,
            self.max_body_size,
        )

    @staticmethod
    def _reject(exc: SmartAIError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.error_code,
                "message": exc.message,
                "details": exc.context,
                "request_id": request_id_var.get(""),
            },
        )
