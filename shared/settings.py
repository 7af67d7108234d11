"""Centralised application configuration.

Settings are loaded from environment variables or the `.env` file in the
project root. Using pydantic's BaseSettings provides convenient parsing
and type checking. The question generator instantiates one Settings
object at import time and treats it as read-only for the life of the
process; nothing mutates configuration after startup.
"""

from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Value shipped in sample .env files; treated the same as "no key".
API_KEY_PLACEHOLDER = "YOUR_GEMINI_API_KEY_HERE"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # HTTP listener
    host: str = Field(default="0.0.0.0", validation_alias=AliasChoices("HOST", "host"))
    port: int = Field(default=3000, validation_alias=AliasChoices("PORT", "port"))

    # Gemini (generateContent REST endpoint)
    gl_api_key: str = Field(
        default=API_KEY_PLACEHOLDER,
        validation_alias=AliasChoices("GL_API_KEY", "GEMINI_API_KEY", "gl_api_key"),
    )
    model: str = Field(
        default="gemini-2.0-flash", validation_alias=AliasChoices("MODEL", "model")
    )
    api_base: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta/models",
        validation_alias=AliasChoices("API_BASE", "api_base"),
    )
    upstream_connect_timeout: float = Field(
        default=10.0, validation_alias="UPSTREAM_CONNECT_TIMEOUT"
    )
    upstream_read_timeout: float = Field(
        default=180.0, validation_alias="UPSTREAM_READ_TIMEOUT"
    )

    # Prompt
    question_count: int = Field(
        default=2, ge=1, validation_alias=AliasChoices("QUESTION_COUNT", "question_count")
    )

    # Deployment / CORS
    app_env: str = Field(
        default="development",
        validation_alias=AliasChoices("NODE_ENV", "APP_ENV", "app_env"),
    )
    app_url: str | None = Field(
        default=None, validation_alias=AliasChoices("APP_URL", "app_url")
    )

    # Logging/observability
    langfuse_enabled: bool = Field(False, validation_alias="LANGFUSE_ENABLED")
    langfuse_host: str = Field("", validation_alias="LANGFUSE_HOST")
    langfuse_public_key: str = Field("", validation_alias="LANGFUSE_PUBLIC_KEY")
    langfuse_secret_key: str = Field("", validation_alias="LANGFUSE_SECRET_KEY")
    tracing_backend: str = Field("langfuse", validation_alias="TRACING_BACKEND")
    trace_name: str = Field("neetpg-qgen-trace", validation_alias="TRACE_NAME")

    @property
    def api_key_configured(self) -> bool:
        key = (self.gl_api_key or "").strip()
        return bool(key) and key != API_KEY_PLACEHOLDER

    @property
    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    def cors_origins(self) -> list[str]:
        """Origins allowed to call the API from a browser.

        Production deployments with ``APP_URL`` set only accept that
        origin; every other configuration accepts any origin.
        """
        if self.is_production and self.app_url:
            return [o.strip().rstrip("/") for o in self.app_url.split(",") if o.strip()]
        return ["*"]
