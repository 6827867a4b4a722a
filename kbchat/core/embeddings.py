"""OpenAI embeddings generation with validation."""

from openai import OpenAI

from kbchat.core.config import Settings
from kbchat.core.logging import get_logger
from kbchat.core.upstream import call_upstream

logger = get_logger(__name__)


def _get_client(settings: Settings) -> OpenAI:
    """Get OpenAI client instance (retries are handled by call_upstream)."""
    return OpenAI(
        api_key=settings.OPENAI_API_KEY,
        timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
        max_retries=0,
    )


def embed_texts(texts: list[str], settings: Settings) -> list[list[float]]:
    """
    Generate embeddings for a list of texts using OpenAI.

    Args:
        texts: List of text strings to embed
        settings: Application settings

    Returns:
        List of embedding vectors (each vector is list of floats)

    Raises:
        ValueError: If embedding dimension doesn't match expected EMBEDDING_DIM
        Exception: If OpenAI API call fails
    """
    if not texts:
        return []

    client = _get_client(settings)

    response = client.embeddings.create(
        model=settings.EMBEDDING_MODEL,
        input=texts,
    )

    embeddings = []
    for i, embedding_obj in enumerate(response.data):
        embedding = embedding_obj.embedding

        if len(embedding) != settings.EMBEDDING_DIM:
            raise ValueError(
                f"Embedding dimension mismatch for text {i}: "
                f"expected {settings.EMBEDDING_DIM}, got {len(embedding)}"
            )

        embeddings.append(embedding)

    logger.debug(
        f"Generated {len(embeddings)} embeddings using {settings.EMBEDDING_MODEL}",
        extra={"model": settings.EMBEDDING_MODEL, "count": len(embeddings)},
    )

    return embeddings


async def embed_text(text: str, settings: Settings) -> list[float]:
    """Embed a single text with timeout and retries.

    Raises:
        UpstreamError: If the embedding call keeps failing
    """
    vectors = await call_upstream("embedding", lambda: embed_texts([text], settings), settings)
    return vectors[0]
