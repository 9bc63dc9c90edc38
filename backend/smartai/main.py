"""
SmartAI Backend - FastAPI Application Factory
=============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() assembles middleware, exception handlers and routers.
Who:   uvicorn (`smartai.main:app`, or the `smartai-server` script) and the
       serverless entry point `api/index.py`.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware Chain:                                       │
    │  RequestID → Logging → GZip → CORS allow-list → BodyLimit│
    │                                                          │
    │  Routes:                                                 │
    │  /  /api/health  /api/auth  /api/quiz  /api/folders      │
    │  /api/bookmarks  /api/students  /api/student-quiz        │
    │  /api/debug                                              │
    │                                                          │
    │  Exception Handlers:                                     │
    │  SmartAIError→status │ 404→not_found │ Exception→500     │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    MongoDB is NOT connected at startup. The first request that depends on
    get_database() opens the connection (see database.py), which is the only
    option on serverless platforms that never run a startup hook. Shutdown
    closes the client when the process does get one.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.gzip import GZipMiddleware

from smartai import __version__
from smartai.config import settings
from smartai.database import close_database
from smartai.middleware.body_limit import BodySizeLimitMiddleware
from smartai.middleware.cors import CORSAllowListMiddleware, OriginPolicy
from smartai.middleware.error_handler import register_exception_handlers
from smartai.middleware.logging import RequestLoggingMiddleware
from smartai.middleware.request_id import RequestIDLogFilter, RequestIDMiddleware
from smartai.routes import (
    auth,
    bookmarks,
    debug,
    folders,
    health,
    quiz,
    root,
    student_quiz,
    students,
)
from smartai.services.email_service import build_email_service

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the whole application.

    Adds one stdout handler carrying the request-ID filter to the root
    logger. When the host (uvicorn --log-config, pytest) already installed
    handlers, those are left alone and only the level is applied.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.log_level, logging.INFO))

    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
        handler.addFilter(RequestIDLogFilter())
        root_logger.addHandler(handler)

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    logger.info("SmartAI Backend starting up...")
    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving: health checks and the banner still work
        logger.error("Configuration error: %s", str(e))

    logger.info("Server ready at http://%s:%d", settings.host, settings.port)

    yield

    logger.info("SmartAI Backend shutting down...")
    await close_database()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Safe to call more than once (tests build a fresh app per client); the
    MongoDB connector is process-wide and shared between instances.
    """
    setup_logging()

    app = FastAPI(
        title="SmartAI API",
        description="Quizzes, folders, bookmarks, students and quiz attempts for SmartAI.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    policy = OriginPolicy.from_settings(settings)
    logger.info("CORS allowed origins: %s", policy.allowed_origins)
    logger.info("ALLOW_VERCEL_PREVIEWS: %s", policy.allow_vercel_previews)

    app.state.email_service = build_email_service(settings)

    # ── Register Middleware ───────────────────────────────────────────────
    # Execution order is the reverse of addition:
    # RequestID → Logging → GZip → CORS → BodyLimit → routes
    app.add_middleware(BodySizeLimitMiddleware, max_body_size=settings.max_body_size)
    app.add_middleware(CORSAllowListMiddleware, policy=policy)
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(root.router)
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(quiz.router)
    app.include_router(folders.router)
    app.include_router(bookmarks.router)
    app.include_router(students.router)
    app.include_router(student_quiz.router)
    app.include_router(debug.router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn on HOST:PORT."""
    uvicorn.run(
        "smartai.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
