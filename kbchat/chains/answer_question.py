"""Chain that answers a customer question from the knowledge cards.

Flow for one question:
    embed -> match_knowledge_cards -> decide -> (fallback | grounded completion) -> shape

The completion model is only called when the best match clears
SOFT_MIN_SIMILARITY. Any upstream failure becomes a fixed apology with
status 500 so the chat keeps a conversational tone.
"""

import json
from dataclasses import dataclass

from kbchat.core.config import Settings
from kbchat.core.embeddings import embed_text
from kbchat.core.llm import complete_chat_async
from kbchat.core.logging import get_logger
from kbchat.core.retrieval_policy import Confidence, classify_confidence, fallback_message
from kbchat.core.schemas_chat import (
    CardMatch,
    ChatResponse,
    DebugCard,
    DebugChatResponse,
    DebugInfo,
    PublicChatResponse,
)
from kbchat.core.upstream import UpstreamError, call_upstream
from kbchat.db.knowledge_cards import match_knowledge_cards

logger = get_logger(__name__)

ERROR_MESSAGE = "I'm so sorry, something went wrong on my side while looking that up."
EMPTY_ANSWER_MESSAGE = "I'm so sorry, I'm not able to answer that right now."

# ruff: noqa: E501
SYSTEM_PROMPT = """
You are a customer-service assistant replying to customers in a calm, warm, empathetic tone. No emojis.

CRITICAL GROUNDING:
- Use ONLY facts found in the Knowledge Base context provided.
- Do not invent policies or fill gaps.
- If info is missing or conditional (e.g., depends on country or whether the order was placed on our website or a marketplace), ask ONE short clarifying question instead of guessing.
- If the Knowledge Base does not cover it, say so clearly.

FORMAT:
- 1 short reassuring opener.
- 3-8 short sentences, plain English.
- End with a gentle next-step question if needed.
""".strip()


@dataclass
class ChatOutcome:
    """Shaped response plus the HTTP status and the path the chain took."""

    response: ChatResponse
    status_code: int = 200
    path: str = "grounded"


def shape_response(
    answer: str,
    confidence: Confidence,
    matches: list[CardMatch],
    public_mode: bool,
) -> ChatResponse:
    """Pick the public or debug response variant."""
    if public_mode:
        return PublicChatResponse(answer=answer)
    return DebugChatResponse(
        answer=answer,
        confidence=confidence,
        debug=DebugInfo(
            cards=[DebugCard(id=m.id, title=m.title, similarity=m.similarity) for m in matches]
        ),
    )


def build_kb_context(matches: list[CardMatch]) -> str:
    """Render matches in retrieved order as the knowledge base context block."""
    blocks = []
    for i, card in enumerate(matches, start=1):
        blocks.append(
            f"Card {i}\n"
            f"id: {card.id}\n"
            f"title: {card.title}\n"
            f"topics: {json.dumps(card.topics)}\n"
            f"card_confidence: {card.confidence}\n"
            f"similarity: {card.similarity}\n"
            f"answer: {card.answer}\n"
        )
    return "\n".join(blocks)


def build_messages(question: str, matches: list[CardMatch]) -> list[dict[str, str]]:
    """System instructions, then KB context, then the customer question."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "system", "content": f"KNOWLEDGE BASE CONTEXT:\n{build_kb_context(matches)}"},
        {"role": "user", "content": f"Customer question:\n{question}"},
    ]


def _error_outcome(settings: Settings) -> ChatOutcome:
    return ChatOutcome(
        response=shape_response(ERROR_MESSAGE, "low", [], settings.public_mode),
        status_code=500,
        path="error",
    )


async def answer_question(question: str, settings: Settings) -> ChatOutcome:
    """
    Answer a question grounded in the knowledge cards.

    Args:
        question: Raw customer question
        settings: Application settings (thresholds, models, public mode)

    Returns:
        ChatOutcome with the response variant for the current deployment mode
    """
    try:
        query_embedding = await embed_text(question, settings)
    except UpstreamError as e:
        logger.error(f"Chat aborted, question could not be embedded: {e.message}")
        return _error_outcome(settings)

    try:
        matches = await call_upstream(
            "search",
            lambda: match_knowledge_cards(
                query_embedding,
                match_threshold=settings.HARD_MIN_SIMILARITY,
                match_count=settings.MATCH_COUNT,
                settings=settings,
            ),
            settings,
        )
    except UpstreamError as e:
        logger.error(f"Chat aborted, card search failed: {e.message}")
        return _error_outcome(settings)

    top_similarity = matches[0].similarity if matches else 0.0
    confidence = classify_confidence(top_similarity, settings.SOFT_MIN_SIMILARITY)

    if not matches or top_similarity < settings.SOFT_MIN_SIMILARITY:
        logger.info(
            f"Retrieval too weak ({len(matches)} matches, top={top_similarity:.3f}), using fallback"
        )
        return ChatOutcome(
            response=shape_response(fallback_message(question), "low", [], settings.public_mode),
            path="fallback",
        )

    try:
        raw_answer = await complete_chat_async(build_messages(question, matches), settings)
    except UpstreamError as e:
        logger.error(f"Chat aborted, grounded completion failed: {e.message}")
        return _error_outcome(settings)

    answer = raw_answer.strip() or EMPTY_ANSWER_MESSAGE

    logger.info(
        f"Grounded answer from {len(matches)} cards, top={top_similarity:.3f}, confidence={confidence}",
        extra={"card_ids": [m.id for m in matches]},
    )
    return ChatOutcome(response=shape_response(answer, confidence, matches, settings.public_mode))
