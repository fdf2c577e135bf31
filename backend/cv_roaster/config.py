"""Application settings loaded from environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from cv_roaster.core.constants import (
    DEFAULT_MAX_CONTENT_LENGTH,
    DEFAULT_MIN_CONTENT_LENGTH,
    LLM_TIMEOUT_SECONDS,
    RATE_LIMIT_MAX_REQUESTS,
    RATE_LIMIT_WINDOW_MINUTES,
)


class Settings(BaseSettings):
    anthropic_api_key: str = ""
    openai_api_key: str = ""
    llm_provider: str = "anthropic"
    llm_model: str = ""
    llm_timeout_seconds: float = LLM_TIMEOUT_SECONDS
    langfuse_secret_key: str = ""
    langfuse_public_key: str = ""
    langfuse_host: str = "https://cloud.langfuse.com"
    host: str = "0.0.0.0"
    port: int = 3001
    allowed_origins: str = "http://localhost:3000"
    environment: str = "production"
    max_content_length: int = DEFAULT_MAX_CONTENT_LENGTH
    min_content_length: int = DEFAULT_MIN_CONTENT_LENGTH
    rate_limit_max_requests: int = RATE_LIMIT_MAX_REQUESTS
    rate_limit_window_minutes: int = RATE_LIMIT_WINDOW_MINUTES
    rate_limit_storage_uri: str = "memory://"
    log_level: str = "INFO"
    log_format: str = "console"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def rate_limit(self) -> str:
        """Limit string in the `limits` notation, e.g. "10 per 15 minutes"."""
        return f"{self.rate_limit_max_requests} per {self.rate_limit_window_minutes} minutes"


_settings: Settings | None = None


def load_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
