"""
SmartAI Backend - Access Token Verification
===========================================

What:  FastAPI dependencies that turn the caller's access token into a
       CurrentUser.
Who:   Every resource router depends on `get_current_user`; the auth routes
       use it to report and end the session.

Tokens are issued elsewhere (the identity service shares JWT_SECRET with
this backend). This module only verifies them:
    1. Read `Authorization: Bearer <token>`; fall back to the auth cookie
       (browsers send the cookie automatically with credentials: include)
    2. Decode with python-jose, checking signature and `exp`; nothing is
       accepted while JWT_SECRET still holds the public default
    3. Require a `sub` claim, which becomes the owner id of every document
"""

import logging
from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import BaseModel

from smartai.config import DEFAULT_JWT_SECRET, settings
from smartai.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

# auto_error=False: the cookie is an equally valid source of the token
bearer_scheme = HTTPBearer(auto_error=False)


class CurrentUser(BaseModel):
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    role: Optional[str] = None


def extract_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials],
) -> Optional[str]:
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.auth_cookie_name) or None


def decode_token(token: str) -> CurrentUser:
    """
    Verify a token and build the user it identifies.

    Raises:
        AuthenticationError: bad signature, expired, no `sub` claim, or
            JWT_SECRET left at its default (→ 401)
    """
    secret = settings.jwt_secret.get_secret_value()
    if secret == DEFAULT_JWT_SECRET:
        logger.error("JWT_SECRET is not set; refusing to verify access tokens")
        raise AuthenticationError(message="Token verification is not configured")

    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as e:
        logger.info("Token rejected: %s", e)
        raise AuthenticationError(message="Invalid or expired token")

    subject = payload.get("sub")
    if not subject:
        raise AuthenticationError(message="Token has no subject")

    return CurrentUser(
        id=str(subject),
        email=payload.get("email"),
        name=payload.get("name"),
        role=payload.get("role"),
    )


async def get_current_user(
    request: Request,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
) -> CurrentUser:
    token = extract_token(request, credentials)
    if not token:
        raise AuthenticationError(message="Authentication required")
    user = decode_token(token)
    request.state.user = user
    return user
