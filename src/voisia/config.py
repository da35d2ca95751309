"""Application Configuration

Type-safe configuration using Pydantic Settings for environment variable handling.

Two settings models live here:
- Settings: process configuration, read once and cached
- ProviderEnvironment: provider API keys and endpoint overrides, rebuilt on
  every lookup so a key exported after startup is picked up
"""

from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings

_MIB = 1024 * 1024


class Settings(BaseSettings):
    """Application settings from environment variables"""

    # =============================================================================
    # APPLICATION
    # =============================================================================

    app_name: str = Field(default="voisia-backend", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    app_description: str = Field(
        default="Command backend forwarding chat prompts to Anthropic and OpenAI",
        alias="APP_DESCRIPTION",
    )
    environment: str = Field(default="development", alias="ENVIRONMENT")

    # =============================================================================
    # API CONFIGURATION
    # =============================================================================

    api_host: str = Field(default="127.0.0.1", alias="API_HOST")
    api_port: int = Field(default=8000, alias="API_PORT")

    # CORS Settings (the desktop shell serves the UI from its own origin)
    cors_origins: str = Field(default="tauri://localhost,http://localhost:1420", alias="CORS_ORIGINS")

    # =============================================================================
    # LOGGING
    # =============================================================================

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_dir: str = Field(default="logs", alias="LOG_DIR")
    log_max_bytes: int = Field(default=50 * _MIB, ge=1, alias="LOG_MAX_BYTES")
    log_to_file: bool = Field(default=True, alias="LOG_TO_FILE")

    # =============================================================================
    # LLM CONFIGURATION
    # =============================================================================

    # Model Catalog
    model_catalog_path: str = Field(default="resources/llm-info.json", alias="MODEL_CATALOG_PATH")

    # Per-call deadline for provider requests, in seconds
    request_timeout_seconds: float = Field(default=120.0, gt=0, alias="REQUEST_TIMEOUT_SECONDS")

    model_config = {"env_file": ".env", "case_sensitive": False, "extra": "ignore", "protected_namespaces": ()}


class ProviderEnvironment(BaseSettings):
    """Provider credentials and endpoint overrides.

    Every field is optional here; a missing key only becomes an error when a
    command actually needs it.
    """

    anthropic_api_key: SecretStr | None = Field(default=None, alias="ANTHROPIC_API_KEY")
    openai_api_key: SecretStr | None = Field(default=None, alias="OPENAI_API_KEY")
    # Reserved for a third provider; read but not consumed by any client
    gemini_api_key: SecretStr | None = Field(default=None, alias="GEMINI_API_KEY")

    anthropic_api_endpoint: str | None = Field(default=None, alias="ANTHROPIC_API_ENDPOINT")
    openai_api_endpoint: str | None = Field(default=None, alias="OPENAI_API_ENDPOINT")

    model_config = {"env_file": ".env", "case_sensitive": False, "extra": "ignore", "protected_namespaces": ()}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
