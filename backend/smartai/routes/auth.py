"""
SmartAI Backend - Session Routes
================================

    GET  /api/auth/me      identity carried by the access token
    POST /api/auth/logout  clear the auth cookie

Tokens are minted by the identity service; registration and login are not
served here.
"""

from fastapi import APIRouter, Depends, Response

from smartai.config import settings
from smartai.middleware.auth import CurrentUser, get_current_user
from smartai.schemas.auth import LogoutResponse, MeResponse
from smartai.schemas.common import ErrorResponse

router = APIRouter(
    prefix="/api/auth",
    tags=["Auth"],
    responses={401: {"model": ErrorResponse}},
)


@router.get("/me", response_model=MeResponse, summary="Current user")
async def me(user: CurrentUser = Depends(get_current_user)) -> MeResponse:
    return MeResponse(**user.model_dump())


@router.post("/logout", response_model=LogoutResponse, summary="Log out")
async def logout(response: Response) -> LogoutResponse:
    """
    Expire the auth cookie. Works without a valid token so a browser holding
    an expired cookie can always get rid of it.
    """
    response.delete_cookie(
        key=settings.auth_cookie_name,
        path="/",
        secure=True,
        httponly=True,
        samesite="none",
    )
    return LogoutResponse()
