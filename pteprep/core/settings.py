# pteprep/core/settings.py
from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Basics
    PROJECT_NAME: str = "pte-prep"
    VERSION: str = "1.0.0"
    DATABASE_URL: str = "sqlite:///pteprep.db"
    LOG_LEVEL: str = "INFO"
    ALLOW_ALL_CORS: bool = False

    # API key for admin endpoints (x-api-key)
    API_KEY: str = "supersecret123"

    # Model provider (OpenAI-compatible chat completions)
    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL: str = "gpt-4o-mini"
    OPENAI_BASE_URL: str | None = None
    OPENAI_TEMPERATURE: float = 0.2
    OPENAI_MAX_TOKENS: int = 1024
    OPENAI_TIMEOUT_SECONDS: float = 30.0
    OPENAI_JSON_MODE: bool = True
    TRANSCRIBE_MODEL: str = "whisper-1"
    MAX_AUDIO_BYTES: int = 25 * 1024 * 1024

    # Daily scoring quota
    QUOTA_TIMEZONE: str = "UTC"
    DEFAULT_TIER: str = "free"

    @field_validator("OPENAI_TEMPERATURE", mode="before")
    @classmethod
    def _comma_decimal(cls, v):
        # "0,2" is accepted as 0.2
        if isinstance(v, str):
            return v.replace(",", ".")
        return v

    @field_validator("OPENAI_API_KEY", "OPENAI_BASE_URL", mode="before")
    @classmethod
    def _blank_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def LLM_configured(self) -> bool:
        """An OPENAI_API_KEY means the scoring model is available."""
        return bool(self.OPENAI_API_KEY)

    def masked_openai_key(self) -> str:
        """Return the API key masked for display."""
        key = self.OPENAI_API_KEY or ""
        if not key:
            return ""
        if len(key) <= 8:
            return "*" * len(key)
        return "*" * (len(key) - 8) + key[-8:]


# Settings singleton imported by the other modules
settings = Settings()
