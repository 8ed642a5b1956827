"""Application configuration using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # LLM provider credentials (each optional; absent => provider not registered)
    openai_api_key: str | None = None
    anthropic_api_key: str | None = None
    groq_api_key: str | None = None

    # Vendor endpoints (None => SDK default)
    openai_base_url: str | None = None
    anthropic_base_url: str | None = None
    groq_base_url: str = "https://api.groq.com/openai/v1"

    # Provider selection
    default_llm_provider: str = "anthropic"
    default_model: str | None = None

    # Vendor call limits
    llm_request_timeout_seconds: float = 30.0
    llm_max_retries: int = 2

    # Sessions
    session_timeout_hours: float = 24.0
    session_cleanup_interval_minutes: float = 30.0
    max_questions_per_session: int = 10
    use_fallback_questions: bool = False

    # API
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:3000"]


settings = Settings()


def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return settings
