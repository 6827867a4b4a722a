"""FastAPI application entry point.

Run with: uvicorn kbchat.main:create_app --factory
"""

import logging
import uuid
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from kbchat.api import pages
from kbchat.api import router as api_router
from kbchat.core.access_gate import gate_request
from kbchat.core.config import Settings, get_settings
from kbchat.core.logging import configure_logging, get_logger, log_with_context

logger = get_logger(__name__)

STATIC_DIR = Path(__file__).parent / "static"


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application around one explicitly constructed Settings object.

    Args:
        settings: Settings to serve with (defaults to the environment)

    Returns:
        Configured FastAPI app
    """
    settings = settings or get_settings()
    configure_logging(settings)

    if settings.public_mode != settings.public_mode_client:
        logger.warning(
            f"KB_PUBLIC_MODE={settings.KB_PUBLIC_MODE} and "
            f"KB_PUBLIC_MODE_CLIENT={settings.KB_PUBLIC_MODE_CLIENT} disagree"
        )

    app = FastAPI(
        title="Knowledge Card Chat",
        description="Password-gated chat grounded in curated knowledge cards",
        version="0.1.0",
    )
    app.state.settings = settings

    @app.middleware("http")
    async def access_gate(request: Request, call_next):
        """Redirect unauthenticated page requests and admin pages in public mode."""
        redirect = gate_request(request, request.app.state.settings)
        if redirect is not None:
            return redirect
        return await call_next(request)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all HTTP requests."""
        request_id = uuid.uuid4().hex[:12]
        response = await call_next(request)
        log_with_context(
            logger,
            logging.DEBUG,
            f"{request.method} {request.url.path} -> {response.status_code}",
            request_id=request_id,
        )
        return response

    @app.get("/health")
    async def health_check() -> JSONResponse:
        """Health check endpoint."""
        return JSONResponse(content={"status": "ok"}, status_code=200)

    app.include_router(api_router, prefix="/api")
    app.include_router(pages.router)
    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    return app

