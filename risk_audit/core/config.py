"""Configuration management for the Risk Audit Engine."""

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

    # Environment
    AUDIT_ENGINE_ENV: str = Field(default="dev", description="Environment: dev, test, prod")

    # Supabase lead capture (optional: persistence is skipped when missing)
    SUPABASE_URL: str | None = Field(default=None, description="Supabase project URL")
    SUPABASE_SERVICE_ROLE_KEY: str | None = Field(
        default=None, description="Supabase service role key"
    )
    LEADS_TABLE: str = Field(default="leads", description="Table receiving audit leads")

    # Narrative augmentation (optional: deterministic narrative is used when missing)
    ANTHROPIC_API_KEY: str | None = Field(default=None, description="Anthropic API key")
    AUGMENTATION_ENABLED: bool = Field(
        default=True, description="Allow generative narrative augmentation"
    )
    AUGMENTATION_MODEL: str = Field(
        default="claude-haiku-4-5-20251001", description="Model for narrative augmentation"
    )
    AUGMENTATION_MAX_TOKENS: int = Field(
        default=1200, description="Max tokens for the augmentation response"
    )
    AUGMENTATION_TIMEOUT_SECONDS: float = Field(
        default=8.0, gt=0, description="Time box for the augmentation call"
    )

    @property
    def persistence_configured(self) -> bool:
        return bool(self.SUPABASE_URL and self.SUPABASE_SERVICE_ROLE_KEY)

    @property
    def augmentation_configured(self) -> bool:
        return self.AUGMENTATION_ENABLED and bool(self.ANTHROPIC_API_KEY)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance

    Raises:
        ValidationError: If an environment variable has an invalid value
    """
    return Settings()
