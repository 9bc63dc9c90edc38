"""
SmartAI Backend - Debug Routes

GET /api/debug/test-nodemailer verifies the SMTP settings of the running
deployment; nothing is sent.
"""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from smartai.exceptions import EmailServiceError
from smartai.schemas.common import EmailCheckResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/debug", tags=["Debug"])


@router.get(
    "/test-nodemailer",
    response_model=EmailCheckResponse,
    responses={500: {"model": EmailCheckResponse}},
    summary="Verify the SMTP connection",
)
async def test_nodemailer(request: Request):
    email_service = getattr(request.app.state, "email_service", None)
    if email_service is None:
        return JSONResponse(
            status_code=500,
            content={"ok": False, "error": "Email service not configured"},
        )

    try:
        await email_service.verify_connection()
    except EmailServiceError as e:
        return JSONResponse(status_code=500, content={"ok": False, "error": e.message})

    return EmailCheckResponse(ok=True)
