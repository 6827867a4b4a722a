"""Timeout + bounded retry wrapper for calls to OpenAI and Supabase.

The OpenAI and Supabase clients are synchronous, so each attempt runs in a
worker thread. Reads are bounded with ``asyncio.wait_for``; writes run to
completion under the client's own HTTP timeout, since an abandoned worker
thread would still commit the row. Only transient failures are retried,
with exponential backoff. Everything else, and the last transient error once
the retries are used up, is raised as ``UpstreamError``.
"""

import asyncio
from collections.abc import Callable
from typing import TypeVar

import httpx
from openai import APIConnectionError, APITimeoutError, InternalServerError, RateLimitError

from kbchat.core.config import Settings
from kbchat.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

RETRYABLE_ERRORS: tuple[type[BaseException], ...] = (
    APIConnectionError,
    APITimeoutError,
    InternalServerError,
    RateLimitError,
    httpx.TransportError,  # supabase/postgrest connection and read failures
    ConnectionError,
    TimeoutError,
)


class UpstreamError(RuntimeError):
    """An external service (embedding, search, completion, insert) failed."""

    def __init__(self, service: str, message: str):
        super().__init__(message)
        self.service = service
        self.message = message


async def call_upstream(
    service: str,
    fn: Callable[[], T],
    settings: Settings,
    retries: int | None = None,
    bounded: bool = True,
) -> T:
    """
    Run a blocking upstream call with a timeout and retries.

    Args:
        service: Short label for logs and errors ("embedding", "search", ...)
        fn: Zero-argument callable performing the call
        settings: Application settings (timeout and retry count)
        retries: Override for UPSTREAM_MAX_RETRIES (0 for non-idempotent writes)
        bounded: Apply UPSTREAM_TIMEOUT_SECONDS around each attempt. Pass False
            for writes so a reported failure never leaves a row behind.

    Returns:
        Whatever ``fn`` returns

    Raises:
        UpstreamError: On a non-retryable failure, or once every attempt failed
    """
    max_retries = settings.UPSTREAM_MAX_RETRIES if retries is None else retries
    timeout = settings.UPSTREAM_TIMEOUT_SECONDS if bounded else None

    last_error: Exception | None = None
    for attempt in range(max_retries + 1):
        try:
            return await asyncio.wait_for(asyncio.to_thread(fn), timeout=timeout)
        except asyncio.TimeoutError:
            last_error = TimeoutError(f"{service} call timed out after {timeout}s")
        except RETRYABLE_ERRORS as e:
            last_error = e
        except Exception as e:
            logger.error(f"{service} call failed ({type(e).__name__}): {e}")
            raise UpstreamError(service, str(e)) from e

        if attempt < max_retries:
            delay = settings.UPSTREAM_RETRY_DELAY_SECONDS * (2**attempt)
            logger.warning(
                f"{service} attempt {attempt + 1}/{max_retries + 1} failed "
                f"({type(last_error).__name__}), retrying in {delay}s"
            )
            await asyncio.sleep(delay)

    logger.error(f"{service} call failed after {max_retries + 1} attempt(s): {last_error}")
    raise UpstreamError(service, str(last_error)) from last_error
