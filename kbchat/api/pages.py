"""Browser pages: login, chat and the admin new-card form."""

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, RedirectResponse

from kbchat.core.access_gate import get_app_settings
from kbchat.core.config import Settings
from kbchat.web.pages import render_page

router = APIRouter(include_in_schema=False)


@router.get("/")
async def root() -> RedirectResponse:
    return RedirectResponse(url="/chat", status_code=307)


@router.get("/login", response_class=HTMLResponse)
async def login_page() -> HTMLResponse:
    return HTMLResponse(render_page("login"))


@router.get("/chat", response_class=HTMLResponse)
async def chat_page(settings: Settings = Depends(get_app_settings)) -> HTMLResponse:
    return HTMLResponse(render_page("chat", public_mode_client=settings.public_mode_client))


@router.get("/admin/new-card", response_class=HTMLResponse)
async def new_card_page() -> HTMLResponse:
    """Reachable only outside public mode (see access_gate)."""
    return HTMLResponse(render_page("new_card"))
