"""
Application configuration and settings.
Centralized configuration management using Pydantic Settings.
"""
from functools import lru_cache
from typing import List

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_AVAILABLE_MODELS = [
    "openai/gpt-4o",
    "openai/gpt-4o-mini",
    "openai/gpt-4-turbo",
    "anthropic/claude-3.5-sonnet",
    "anthropic/claude-sonnet-4.5",
    "google/gemini-2.0-flash-exp:free",
    "meta-llama/llama-3.2-3b-instruct:free",
]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Allow extra fields from .env files that aren't defined here
    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
        env_file=[".env", ".env.local"],  # .env.local overrides .env
    )

    # Application settings
    app_name: str = "Roblox AI Chatbot Proxy Server"
    version: str = "1.0.0"
    environment: str = "local"
    debug: bool = True
    port: int = 3000

    # OpenRouter settings
    openrouter_api_key: str = ""
    openrouter_url: str = "https://openrouter.ai/api/v1/chat/completions"
    default_model: str = Field(
        default="openai/gpt-4o-mini",
        validation_alias=AliasChoices("default_model", "model"),
    )
    available_models: List[str] = Field(
        default_factory=lambda: list(DEFAULT_AVAILABLE_MODELS)
    )
    # Sent as HTTP-Referer / X-Title so OpenRouter can attribute traffic
    app_url: str = "https://your-render-app.onrender.com"
    app_title: str = "Roblox AI Chatbot"
    upstream_timeout: float = 60.0

    # Request normalization
    default_max_tokens: int = 1000
    max_tokens_limit: int = 4000
    default_temperature: float = 0.7
    max_compare_models: int = 5

    # Rate limiting (applied to /api/)
    rate_limit_requests: int = 100
    rate_limit_window_seconds: float = 15 * 60
    # Only enable behind a reverse proxy that overwrites X-Forwarded-For
    trust_forwarded_headers: bool = False

    # Database settings
    supabase_url: str = "http://localhost:54321"
    supabase_service_role_key: str = "test_service_role_key"
    accounts_table: str = "accounts"

    # Logging settings
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_local(self) -> bool:
        """Check if running in local development environment."""
        return self.environment == "local"

    @property
    def has_api_key(self) -> bool:
        return bool(self.openrouter_api_key)


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
