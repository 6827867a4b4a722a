"""Database operations for knowledge cards: insert and vector search."""

from typing import Any

from kbchat.core.config import Settings
from kbchat.core.logging import get_logger
from kbchat.core.schemas_chat import CardMatch
from kbchat.db.supabase_client import get_supabase

logger = get_logger(__name__)

TABLE = "knowledge_cards"
MATCH_RPC = "match_knowledge_cards"


def _to_match(row: dict[str, Any]) -> CardMatch:
    """Build a CardMatch from an RPC row, clamping float noise on similarity."""
    similarity = min(max(float(row.get("similarity") or 0.0), 0.0), 1.0)
    return CardMatch(
        id=str(row["id"]),
        title=row.get("title") or "",
        topics=row.get("topics") or [],
        answer=row.get("answer") or "",
        confidence=row.get("confidence"),
        source=row.get("source") or {},
        similarity=similarity,
    )


def insert_knowledge_card(card: dict[str, Any], settings: Settings) -> str:
    """
    Insert a new knowledge card.

    Args:
        card: Row with title, topics, answer, confidence, source, embedding
        settings: Application settings

    Returns:
        The id assigned by the database

    Raises:
        ValueError: If no row comes back from the insert
        Exception: If database operation fails
    """
    supabase = get_supabase(settings)

    try:
        response = supabase.table(TABLE).insert(card).execute()

        if not response.data:
            raise ValueError("No data returned from insert_knowledge_card")

        card_id = str(response.data[0]["id"])
        logger.info(f"Inserted knowledge card {card_id}", extra={"card_id": card_id})
        return card_id

    except Exception as e:
        logger.error(f"Failed to insert knowledge card: {e}")
        raise


def match_knowledge_cards(
    query_embedding: list[float],
    match_threshold: float,
    match_count: int,
    settings: Settings,
) -> list[CardMatch]:
    """
    Search for cards similar to a query embedding.

    Args:
        query_embedding: Query embedding vector
        match_threshold: Minimum similarity for a card to be returned
        match_count: Maximum number of cards to return
        settings: Application settings

    Returns:
        Matches ordered by descending similarity

    Raises:
        Exception: If the RPC call fails
    """
    supabase = get_supabase(settings)

    try:
        response = supabase.rpc(
            MATCH_RPC,
            {
                "query_embedding": query_embedding,
                "match_threshold": match_threshold,
                "match_count": match_count,
            },
        ).execute()

    except Exception as e:
        logger.error(f"Failed to search knowledge cards: {e}")
        raise

    rows = response.data or []
    matches = [_to_match(row) for row in rows]
    # The RPC orders by distance already; keep the invariant explicit.
    matches.sort(key=lambda m: m.similarity, reverse=True)

    logger.info(
        f"Found {len(matches)} matching cards",
        extra={"match_count": match_count, "match_threshold": match_threshold},
    )
    return matches
