"""Retrieval confidence tiers and the canned clarifying replies used when
retrieval is too weak to ground an answer."""

import re
from typing import Literal

Confidence = Literal["high", "medium", "low"]

HIGH_CONFIDENCE_SIMILARITY = 0.30
DEFAULT_SOFT_MIN_SIMILARITY = 0.25

RETURNS_REPLY = (
    "I'd love to help with that, I just need a couple of details. "
    "Which country are you in, and did you order via our website or a marketplace like Etsy?"
)
SHIPPING_REPLY = (
    "I'd be happy to look into that for you. "
    "Which country are you in, and do you have an order number?"
)
GENERIC_REPLY = (
    "I don't have that in my knowledge base yet, but I'd like to. "
    "Could you tell me a little more about what you're trying to find out?"
)

# Ordered: a question mentioning both a refund and delivery gets the returns reply.
_FALLBACK_RULES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"\b(returns?|returning|refund|exchange)\b"), RETURNS_REPLY),
    (re.compile(r"\b(shipping|ship|ships|shipped|delivery|dispatch|tracking)\b"), SHIPPING_REPLY),
]


def classify_confidence(
    top_similarity: float,
    soft_min_similarity: float = DEFAULT_SOFT_MIN_SIMILARITY,
) -> Confidence:
    """
    Map the best match's similarity to a confidence tier.

    Args:
        top_similarity: Similarity of the first match, or 0 when nothing matched
        soft_min_similarity: Lower bound of the "medium" tier

    Returns:
        "high", "medium" or "low"
    """
    if top_similarity >= HIGH_CONFIDENCE_SIMILARITY:
        return "high"
    if top_similarity >= soft_min_similarity:
        return "medium"
    return "low"


def fallback_message(question: str) -> str:
    """Pick a clarifying reply by keyword, first matching rule wins."""
    q = question.lower()
    for pattern, reply in _FALLBACK_RULES:
        if pattern.search(q):
            return reply
    return GENERIC_REPLY
