"""
Application settings and configuration management.

Uses pydantic-settings for environment variable loading.
"""

from functools import lru_cache

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "VoiceInterview"
    app_version: str = "0.1.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    # OpenAI-compatible provider
    openai_api_key: str = ""
    openai_org_id: str = ""
    openai_base_url: str = "https://api.openai.com/v1"
    chat_model: str = "gpt-3.5-turbo"
    completion_max_tokens: int = 2000
    llm_timeout_seconds: float = 60.0
    llm_max_retries: int = Field(default=1, ge=0, le=3)

    # Speech
    whisper_model: str = "whisper-1"
    tts_model: str = "tts-1"
    tts_voice: str = "alloy"
    max_audio_bytes: int = 25 * 1024 * 1024

    # Langfuse tracing
    langfuse_enabled: bool = False
    langfuse_public_key: str = ""
    langfuse_secret_key: str = ""
    langfuse_base_url: str = "https://cloud.langfuse.com"

    # Interview settings
    max_questions: int = Field(default=8, ge=2)
    max_follow_ups: int = Field(default=3, ge=0)
    max_topic_depth: int = Field(default=3, ge=0)
    fatigue_min_questions: int = 6  # fatigue check starts after this many questions
    fatigue_min_words: int = 10

    # Resume upload
    max_resume_bytes: int = 10 * 1024 * 1024

    # Synthesized phrase cache
    media_cache_max_entries: int = 100
    media_cache_ttl_hours: float = 24.0

    # CORS - stored as comma-separated string in env
    # Uses validation_alias to read from CORS_ORIGINS env var
    cors_origins_str: str = Field(
        default="http://localhost:3000,http://localhost:8000",
        validation_alias="cors_origins"
    )

    @computed_field
    @property
    def cors_origins(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
