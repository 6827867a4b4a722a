"""Shared-password login endpoints."""

import hmac

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from kbchat.core.access_gate import AUTH_COOKIE_MAX_AGE, AUTH_COOKIE_VALUE, get_app_settings
from kbchat.core.config import Settings
from kbchat.core.logging import get_logger
from kbchat.core.schemas_auth import LoginRequest, LoginResponse

logger = get_logger(__name__)

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest | None = None,
    settings: Settings = Depends(get_app_settings),
) -> JSONResponse:
    """
    Check the shared password and set the session cookie.

    Returns 401 without a cookie unless the password is a string equal to
    APP_PASSWORD. An unset APP_PASSWORD rejects every login.
    """
    correct = settings.APP_PASSWORD
    password = request.password if request else None
    if (
        not correct
        or not isinstance(password, str)
        or not hmac.compare_digest(password.encode(), correct.encode())
    ):
        logger.info("Login rejected")
        return JSONResponse(
            content=LoginResponse(ok=False).model_dump(),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    response = JSONResponse(content=LoginResponse(ok=True).model_dump())
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=AUTH_COOKIE_VALUE,
        httponly=True,
        secure=True,
        samesite="lax",
        path="/",
        max_age=AUTH_COOKIE_MAX_AGE,
    )
    logger.info("Login accepted")
    return response


@router.post("/logout", response_model=LoginResponse)
async def logout(settings: Settings = Depends(get_app_settings)) -> JSONResponse:
    """Clear the session cookie."""
    response = JSONResponse(content=LoginResponse(ok=True).model_dump())
    response.delete_cookie(key=settings.AUTH_COOKIE_NAME, path="/", secure=True, httponly=True)
    return response
