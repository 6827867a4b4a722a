"""Supabase client initialization."""

from functools import lru_cache

from supabase import Client, ClientOptions, create_client

from kbchat.core.config import Settings


@lru_cache(maxsize=4)
def _create_client(url: str, key: str, timeout: float) -> Client:
    try:
        return create_client(url, key, options=ClientOptions(postgrest_client_timeout=timeout))
    except Exception as e:
        raise RuntimeError(f"Failed to initialize Supabase client: {e}") from e


def get_supabase(settings: Settings) -> Client:
    """
    Get Supabase client instance (cached per project URL, key and timeout).

    The HTTP timeout is UPSTREAM_TIMEOUT_SECONDS, which is what bounds inserts.

    Args:
        settings: Application settings

    Returns:
        Supabase client configured with service role key

    Raises:
        RuntimeError: If client initialization fails
    """
    return _create_client(
        settings.SUPABASE_URL,
        settings.SUPABASE_SERVICE_ROLE_KEY,
        float(settings.UPSTREAM_TIMEOUT_SECONDS),
    )
