from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "mood-relay"
    app_env: str = Field(
        default="production",
        validation_alias=AliasChoices("APP_ENV", "app_env"),
        description="Runtime environment: development|production.",
    )

    # HTTP server
    host: str = Field(
        default="0.0.0.0",
        validation_alias=AliasChoices("HOST", "host"),
        description="Interface the HTTP server binds to.",
    )
    port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("PORT", "port"),
        description="Port the HTTP server listens on.",
    )
    public_dir: str = Field(
        default="public",
        validation_alias=AliasChoices("PUBLIC_DIR", "public_dir"),
        description="Directory served as static files at `/` (skipped when missing).",
    )
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        validation_alias=AliasChoices("CORS_ALLOW_ORIGINS", "cors_allow_origins"),
        description="Origins allowed by the CORS middleware.",
    )

    # Analysis
    default_tone: str = Field(
        default="empathetic",
        min_length=1,
        validation_alias=AliasChoices("DEFAULT_TONE", "default_tone"),
        description="Tone used when the request does not supply one.",
    )
    provider_timeout_seconds: float = Field(
        default=60.0,
        ge=1.0,
        validation_alias=AliasChoices("PROVIDER_TIMEOUT_SECONDS", "provider_timeout_seconds"),
        description="Timeout for each outbound provider request (seconds).",
    )

    # Gemini
    gemini_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "gemini_api_key"),
        description="Google Gemini API key (required for the `gemini` provider).",
    )
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1",
        validation_alias=AliasChoices("GEMINI_BASE_URL", "gemini_base_url"),
    )
    gemini_model: str = Field(
        default="gemini-pro",
        validation_alias=AliasChoices("GEMINI_MODEL", "gemini_model"),
    )

    # DeepSeek. The `deepseak` spelling is part of the public request/response contract.
    deepseak_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("DEEPSEAK_API_KEY", "DEEPSEEK_API_KEY", "deepseak_api_key"),
        description="DeepSeek API key (required for the `deepseak` provider).",
    )
    deepseak_base_url: str = Field(
        default="https://api.deepseek.com/v1",
        validation_alias=AliasChoices("DEEPSEAK_BASE_URL", "deepseak_base_url"),
    )
    deepseak_model: str = Field(
        default="deepseek-chat",
        validation_alias=AliasChoices("DEEPSEAK_MODEL", "deepseak_model"),
    )
    deepseak_max_tokens: int = Field(
        default=1000,
        ge=1,
        validation_alias=AliasChoices("DEEPSEAK_MAX_TOKENS", "deepseak_max_tokens"),
    )
    deepseak_temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        validation_alias=AliasChoices("DEEPSEAK_TEMPERATURE", "deepseak_temperature"),
    )

    @property
    def is_development(self) -> bool:
        return str(self.app_env).strip().lower() == "development"


@lru_cache
def get_settings() -> Settings:
    return Settings()
