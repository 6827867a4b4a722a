"""Chain that validates, embeds and stores a new knowledge card."""

from datetime import datetime, timezone
from typing import Any

from kbchat.core.config import Settings
from kbchat.core.embeddings import embed_text
from kbchat.core.logging import get_logger
from kbchat.core.schemas_cards import DEFAULT_CARD_CONFIDENCE, CreateCardRequest
from kbchat.core.upstream import call_upstream
from kbchat.db.knowledge_cards import insert_knowledge_card

logger = get_logger(__name__)

ADDED_VIA = "admin_ui"


class CardValidationError(ValueError):
    """A required card field is missing or blank."""


def _normalize_confidence(value: Any) -> float:
    # bool is an int subclass but never a meaningful confidence
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return DEFAULT_CARD_CONFIDENCE


def _normalize_topics(topics: list[str] | None) -> list[str]:
    return [t.strip() for t in (topics or []) if t and t.strip()]


def validate_card(request: CreateCardRequest) -> tuple[str, str]:
    """Return (title, answer) or raise CardValidationError."""
    title = (request.title or "").strip()
    answer = (request.answer or "").strip()
    if not title or not answer:
        raise CardValidationError("Title and answer are required.")
    return title, answer


async def create_card(request: CreateCardRequest, settings: Settings) -> str:
    """
    Create a knowledge card from the admin form.

    Args:
        request: Card fields as submitted
        settings: Application settings

    Returns:
        The new card's id

    Raises:
        CardValidationError: If title or answer is missing (nothing is written)
        UpstreamError: If embedding or insertion fails
    """
    title, answer = validate_card(request)

    embedding = await embed_text(answer, settings)

    row = {
        "title": title,
        "topics": _normalize_topics(request.topics),
        "answer": answer,
        "confidence": _normalize_confidence(request.confidence),
        "source": {
            "added_via": ADDED_VIA,
            "added_at": datetime.now(timezone.utc).isoformat(),
        },
        "embedding": embedding,
    }

    # Inserts are not idempotent: no retries, and no abandoning the worker
    # thread on timeout (the client HTTP timeout bounds it instead).
    card_id = await call_upstream(
        "insert",
        lambda: insert_knowledge_card(row, settings),
        settings,
        retries=0,
        bounded=False,
    )

    logger.info(f"Created knowledge card {card_id}: {title}", extra={"card_id": card_id})
    return card_id
