"""Cookie session gate and public-mode route blocking."""

from urllib.parse import urlencode

from fastapi import Request
from fastapi.responses import RedirectResponse

from kbchat.core.config import Settings
from kbchat.core.logging import get_logger

logger = get_logger(__name__)

AUTH_COOKIE_VALUE = "1"
AUTH_COOKIE_MAX_AGE = 60 * 60 * 24 * 7  # 7 days

# Reachable without a session
OPEN_PREFIXES = ("/login", "/api", "/static")
OPEN_PATHS = {"/favicon.ico", "/health"}


def get_app_settings(request: Request) -> Settings:
    """FastAPI dependency returning the Settings the app was built with."""
    return request.app.state.settings


def is_authed(request: Request, settings: Settings) -> bool:
    return request.cookies.get(settings.AUTH_COOKIE_NAME) == AUTH_COOKIE_VALUE


def is_open_path(path: str) -> bool:
    return path in OPEN_PATHS or path.startswith(OPEN_PREFIXES)


def gate_request(request: Request, settings: Settings) -> RedirectResponse | None:
    """
    Decide whether a request may proceed.

    Args:
        request: Incoming request
        settings: Application settings

    Returns:
        A redirect to send instead, or None to let the request through
    """
    path = request.url.path

    if settings.public_mode and path.startswith("/admin"):
        logger.debug(f"Public mode: blocked {path}")
        return RedirectResponse(url="/chat", status_code=307)

    if is_open_path(path):
        return None

    if not is_authed(request, settings):
        return RedirectResponse(url=f"/login?{urlencode({'next': path})}", status_code=307)

    return None
