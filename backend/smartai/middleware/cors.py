"""
SmartAI Backend - CORS Allow-List
=================================

What:  Decides which browser origins may call the API and applies that
       decision to every request.
Why:   The frontend is deployed to several hosts (local dev servers, the
       production Vercel domains, optional Vercel preview deployments), and
       the deployment environment only knows some of them as bare host names.

Allow-list construction:
    1. Hardcoded fallback origins (local dev + production frontends)
    2. CLIENT_URL, FRONTEND_URL, VERCEL_URL from the environment
    3. Every entry normalized: trimmed, trailing slashes removed, and
       "https://" prepended when no scheme is given (VERCEL_URL is usually a
       bare host like frontend-xyz.vercel.app)
    4. Empty entries dropped, duplicates removed (first occurrence wins)

Decision for an incoming Origin header:
    absent                               → allowed (curl, server-to-server)
    exact match in the allow-list        → allowed, origin echoed back
    https://<host>.vercel.app + previews → allowed (logged)
    anything else                        → 403, no CORS headers

Starlette's CORSMiddleware does the header work (preflight answers, echoing
the origin, Vary, credentials); this module only replaces its origin check
and turns a blocked origin into an explicit rejection instead of a silently
header-less response.
"""

import logging
import re
from typing import Iterable, List, Optional, Sequence

from starlette.datastructures import Headers
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from smartai.config import Settings
from smartai.exceptions import CORSRejectedError
from smartai.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)

DEFAULT_ALLOWED_ORIGINS = (
    "http://localhost:5173",
    "http://localhost:8080",
    "http://127.0.0.1:5173",
    "http://127.0.0.1:8080",
    "https://frontend-smartai-hydx.vercel.app",
    "https://smartai-ten.vercel.app",
)

ALLOWED_METHODS = ["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE", "OPTIONS"]
ALLOWED_HEADERS = ["Content-Type", "Authorization", "X-Requested-With", "Accept", "X-Request-ID"]
EXPOSED_HEADERS = ["X-Request-ID", "X-Total-Count"]

_SCHEME = re.compile(r"^https?://", re.IGNORECASE)
VERCEL_PREVIEW_ORIGIN = re.compile(r"^https://[^/\s]+\.vercel\.app$", re.IGNORECASE)


def normalize_origin_entry(entry: Optional[str]) -> Optional[str]:
    """
    Normalize one allow-list entry so it compares equal to a browser Origin.

    >>> normalize_origin_entry("frontend-xyz.vercel.app/")
    'https://frontend-xyz.vercel.app'
    >>> normalize_origin_entry("http://localhost:5173")
    'http://localhost:5173'
    """
    if not entry:
        return None
    entry = str(entry).strip().rstrip("/")
    if not entry:
        return None
    if _SCHEME.match(entry):
        return entry
    return f"https://{entry}"


def build_allowed_origins(
    extra_entries: Iterable[Optional[str]] = (),
    defaults: Sequence[str] = DEFAULT_ALLOWED_ORIGINS,
) -> List[str]:
    normalized = (normalize_origin_entry(e) for e in [*defaults, *extra_entries])
    return list(dict.fromkeys(origin for origin in normalized if origin))


class OriginPolicy:
    """The allow-list plus the optional Vercel preview wildcard."""

    def __init__(self, allowed_origins: Iterable[str], allow_vercel_previews: bool = False):
        self.allowed_origins: List[str] = list(allowed_origins)
        self.allow_vercel_previews = allow_vercel_previews
        self._allowed = set(self.allowed_origins)

    @classmethod
    def from_settings(cls, settings: Settings) -> "OriginPolicy":
        origins = build_allowed_origins(
            [settings.client_url, settings.frontend_url, settings.vercel_url]
        )
        return cls(origins, allow_vercel_previews=settings.allow_vercel_previews)

    def is_listed(self, origin: str) -> bool:
        return origin in self._allowed

    def is_preview(self, origin: str) -> bool:
        return self.allow_vercel_previews and bool(VERCEL_PREVIEW_ORIGIN.match(origin))

    def is_allowed(self, origin: Optional[str]) -> bool:
        if not origin:
            return True
        return self.is_listed(origin) or self.is_preview(origin)


class CORSAllowListMiddleware(CORSMiddleware):
    """
    CORSMiddleware driven by an OriginPolicy.

    Blocked origins get a 403 JSON error for preflight and actual requests
    alike, in the same body format as the exception handlers.
    """

    def __init__(self, app: ASGIApp, policy: OriginPolicy) -> None:
        super().__init__(
            app,
            allow_origins=policy.allowed_origins,
            allow_methods=ALLOWED_METHODS,
            allow_headers=ALLOWED_HEADERS,
            allow_credentials=True,
            expose_headers=EXPOSED_HEADERS,
        )
        self.policy = policy

    def is_allowed_origin(self, origin: str) -> bool:
        return self.policy.is_allowed(origin)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            origin = Headers(scope=scope).get("origin")
            if origin and not self.policy.is_listed(origin):
                if not self.policy.is_preview(origin):
                    await self._reject(origin, scope, receive, send)
                    return
                logger.info("Allowing vercel preview origin: %s", origin)
        await super().__call__(scope, receive, send)

    @staticmethod
    async def _reject(origin: str, scope: Scope, receive: Receive, send: Send) -> None:
        logger.warning("Blocked CORS request from origin: %s", origin)
        exc = CORSRejectedError(origin)
        response = JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.error_code,
                "message": exc.message,
                "request_id": request_id_var.get(""),
            },
        )
        await response(scope, receive, send)
