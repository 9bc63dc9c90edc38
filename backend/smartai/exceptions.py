"""
SmartAI Backend - Custom Exception Hierarchy
============================================

What:  Application-specific exceptions, one per HTTP failure class.
How:   Each exception carries a user-facing message and a context dict.
       Global handlers (registered in main.py) turn them into JSON error
       responses with the status code declared on the class.
Who:   Raised by services, dependencies and middleware.

Exception Hierarchy:
    SmartAIError (base)               → 500
    ├── ValidationError               → 400 Bad Request
    ├── AuthenticationError           → 401 Unauthorized
    ├── CORSRejectedError             → 403 Forbidden
    ├── NotFoundError                 → 404 Not Found
    ├── ConflictError                 → 409 Conflict
    ├── PayloadTooLargeError          → 413 Payload Too Large
    ├── DatabaseError                 → 500 (generic message to the client)
    └── EmailServiceError             → 500
"""

from typing import Any, Dict, Optional


class SmartAIError(Exception):
    """
    Base exception for all SmartAI application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info, returned as `details` only by
                  handlers that opt in
    """

    status_code = 500
    error_code = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(SmartAIError):
    """Client input failed validation (bad id, empty update, bad reference)."""

    status_code = 400
    error_code = "validation_error"

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class AuthenticationError(SmartAIError):
    """Missing, malformed or expired access token."""

    status_code = 401
    error_code = "authentication_error"

    def __init__(
        self,
        message: str = "Authentication required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class CORSRejectedError(SmartAIError):
    """Request came from an origin outside the CORS allow-list."""

    status_code = 403
    error_code = "cors_rejected"

    def __init__(self, origin: str, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["origin"] = origin
        super().__init__(message="Not allowed by CORS", context=ctx)
        self.origin = origin


class NotFoundError(SmartAIError):
    """
    Raised when a requested resource does not exist.

    Also used for documents that exist but belong to another owner, so the
    API never reveals which ids are taken.
    """

    status_code = 404
    error_code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class ConflictError(SmartAIError):
    """A unique index rejected the write (duplicate folder name, bookmark...)."""

    status_code = 409
    error_code = "conflict"

    def __init__(
        self,
        message: str = "The resource already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class PayloadTooLargeError(SmartAIError):
    status_code = 413
    error_code = "payload_too_large"

    def __init__(self, limit: int, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["limit_bytes"] = limit
        super().__init__(
            message=f"Request body exceeds the {limit} byte limit",
            context=ctx,
        )
        self.limit = limit


class DatabaseError(SmartAIError):
    """
    Raised when database operations fail unexpectedly.

    The client always receives a generic message; the context (driver error
    type, collection) is logged server-side only.
    """

    status_code = 500
    error_code = "server_error"

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class EmailServiceError(SmartAIError):
    """SMTP connection or login failed while verifying the email transport."""

    status_code = 500
    error_code = "email_service_error"

    def __init__(
        self,
        message: str = "Email service verification failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
