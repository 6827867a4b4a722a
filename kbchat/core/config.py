"""Configuration management for Knowledge Card Chat."""

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file (only if accessible)
try:
    load_dotenv()
except (PermissionError, OSError):
    # In sandboxed environments, .env might not be accessible
    pass


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Supabase configuration (required)
    SUPABASE_URL: str = Field(..., description="Supabase project URL")
    SUPABASE_SERVICE_ROLE_KEY: str = Field(..., description="Supabase service role key")

    # OpenAI configuration (required)
    OPENAI_API_KEY: str = Field(..., description="OpenAI API key")

    # Access
    APP_PASSWORD: str | None = Field(
        default=None, description="Shared login password (unset disables login)"
    )
    AUTH_COOKIE_NAME: str = Field(default="kb_authed", description="Session flag cookie name")
    KB_PUBLIC_MODE: str = Field(
        default="0", description="Server-side public mode flag ('1' enables)"
    )
    KB_PUBLIC_MODE_CLIENT: str = Field(
        default="0", description="Client-side public mode flag ('1' enables)"
    )

    # Environment
    KB_ENV: str = Field(default="dev", description="Environment: dev, staging, prod")

    # Embedding configuration
    EMBEDDING_MODEL: str = Field(
        default="text-embedding-3-small", description="OpenAI embedding model"
    )
    EMBEDDING_DIM: int = Field(default=1536, description="Embedding vector dimension")

    # Grounded generation
    CHAT_MODEL: str = Field(default="gpt-4.1-mini", description="Model for grounded answers")
    CHAT_TEMPERATURE: float = Field(default=0.2, description="Temperature for grounded answers")

    # Retrieval
    HARD_MIN_SIMILARITY: float = Field(
        default=0.25, description="Similarity floor passed to match_knowledge_cards"
    )
    SOFT_MIN_SIMILARITY: float = Field(
        default=0.25, description="Top similarity below which the fallback reply is used"
    )
    MATCH_COUNT: int = Field(default=5, description="Max cards returned per question", ge=1)

    # Upstream calls (OpenAI + Supabase)
    UPSTREAM_TIMEOUT_SECONDS: float = Field(
        default=20.0, description="Timeout for each external call attempt", gt=0
    )
    UPSTREAM_MAX_RETRIES: int = Field(
        default=2, description="Retries after the first failed attempt", ge=0
    )
    UPSTREAM_RETRY_DELAY_SECONDS: float = Field(
        default=0.5, description="Initial backoff delay, doubled per retry", ge=0
    )

    @property
    def public_mode(self) -> bool:
        """Server-side public mode: hide debug detail and block admin pages."""
        return self.KB_PUBLIC_MODE == "1"

    @property
    def public_mode_client(self) -> bool:
        """Public mode flag handed to the browser pages."""
        return self.KB_PUBLIC_MODE_CLIENT == "1"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance

    Raises:
        ValidationError: If required environment variables are missing
    """
    return Settings()
