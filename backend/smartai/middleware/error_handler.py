"""
SmartAI Backend - Error Handlers
================================

What:  The end of the request pipeline: maps exceptions to JSON responses.
How:   FastAPI exception handlers, registered once by create_app().

Handler hierarchy:
    DatabaseError            → 500, generic message (details logged only)
    SmartAIError subclasses  → exc.status_code with exc.message
    HTTPException (Starlette)→ 404 "Not Found - <path>" for unknown routes,
                               the original status/detail otherwise
    RequestValidationError   → 400 with the offending fields
    Exception (fallback)     → 500, stack trace logged server-side only

Every body has the same shape:
    {"error": "...", "message": "...", "details": {...}?, "request_id": "..."}
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from smartai.exceptions import DatabaseError, SmartAIError
from smartai.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)


def error_response(
    status_code: int,
    error: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    content: Dict[str, Any] = {"error": error, "message": message}
    if details:
        content["details"] = details
    content["request_id"] = request_id_var.get("")
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers for consistent error responses."""

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error("Database error: %s | Context: %s", exc.message, exc.context)
        return error_response(
            status_code=500,
            error="server_error",
            message="An internal error occurred. Please try again later.",
        )

    @app.exception_handler(SmartAIError)
    async def handle_app_error(request: Request, exc: SmartAIError):
        if exc.status_code >= 500:
            logger.error("%s: %s | Context: %s", type(exc).__name__, exc.message, exc.context)
        else:
            logger.info("%s: %s", type(exc).__name__, exc.message)
        headers = None
        if exc.status_code == 401:
            headers = {"WWW-Authenticate": "Bearer"}
        return error_response(
            status_code=exc.status_code,
            error=exc.error_code,
            message=exc.message,
            details=exc.context if exc.status_code < 500 else None,
            headers=headers,
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404 and exc.detail == "Not Found":
            # Unknown route
            return error_response(
                status_code=404,
                error="not_found",
                message=f"Not Found - {request.url.path}",
            )
        return error_response(
            status_code=exc.status_code,
            error="http_error",
            message=str(exc.detail),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        fields = [
            {
                "location": ".".join(str(part) for part in err.get("loc", ())),
                "message": err.get("msg", ""),
            }
            for err in exc.errors()
        ]
        return error_response(
            status_code=400,
            error="validation_error",
            message="Request validation failed",
            details={"fields": fields},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: never leak a stack trace to the client."""
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
        return error_response(
            status_code=500,
            error="internal_server_error",
            message="An unexpected error occurred. Please try again or contact support.",
        )
