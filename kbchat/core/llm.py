"""OpenAI chat completion client for grounded answers."""

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


def complete_chat(messages: list[dict[str, str]], settings: Settings) -> str:
    """
    Run one chat completion and return the raw text of the first choice.

    Args:
        messages: Ordered role/content messages
        settings: Application settings (CHAT_MODEL, CHAT_TEMPERATURE)

    Returns:
        Completion text, or "" if the model returned no content
    """
    client = _get_client(settings)

    response = client.chat.completions.create(
        model=settings.CHAT_MODEL,
        temperature=settings.CHAT_TEMPERATURE,
        messages=messages,
    )

    if not response.choices:
        return ""

    content = response.choices[0].message.content or ""
    logger.debug(
        f"Completion returned {len(content)} chars using {settings.CHAT_MODEL}",
        extra={"model": settings.CHAT_MODEL},
    )
    return content


async def complete_chat_async(messages: list[dict[str, str]], settings: Settings) -> str:
    """complete_chat with timeout and retries.

    Raises:
        UpstreamError: If the completion call keeps failing
    """
    return await call_upstream("completion", lambda: complete_chat(messages, settings), settings)
