"""API router for /api endpoints."""

from fastapi import APIRouter

from kbchat.api import auth, cards, chat

router = APIRouter()

# Shared-password login
router.include_router(auth.router, tags=["auth"])

# Grounded chat
router.include_router(chat.router, tags=["chat"])

# Knowledge card ingestion
router.include_router(cards.router, tags=["cards"])
