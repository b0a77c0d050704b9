"""
Process configuration loaded once at startup.

Uses `pydantic-settings` to read environment variables and a `.env` file in
the working directory (real environment variables win over `.env`). The
resulting Settings object is frozen and is handed to the app factory;
nothing else reads the environment.

Example `.env`:
    GEMINI_API_KEY=your-key-here
    GEMINI_MODEL=gemini-2.0-flash
    LLM_TIMEOUT_SECONDS=60
    PORT=3000
"""

import logging

from pydantic import AliasChoices, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class ConfigError(RuntimeError):
    """Configuration is missing or invalid; the service cannot start."""


class Settings(BaseSettings):
    """
    Service configuration.

    Attributes (env var in parentheses):
        gemini_api_key (GEMINI_API_KEY, or LLM_API_KEY): required credential.
        gemini_model (GEMINI_MODEL): Gemini model name.
        request_timeout (LLM_TIMEOUT_SECONDS): bound on each LLM call, seconds.
        static_dir (STATIC_DIR): front-end directory served at "/" if present.
        host / port (HOST / PORT): listen address.
        log_level (LOG_LEVEL): root logging level.
    """

    gemini_api_key: str = Field(
        min_length=1,
        validation_alias=AliasChoices("gemini_api_key", "GEMINI_API_KEY", "LLM_API_KEY"),
    )
    gemini_model: str = Field(
        default="gemini-2.0-flash",
        validation_alias=AliasChoices("gemini_model", "GEMINI_MODEL"),
    )
    request_timeout: float = Field(
        default=60.0,
        gt=0,
        validation_alias=AliasChoices("request_timeout", "LLM_TIMEOUT_SECONDS"),
    )
    static_dir: str = Field(default="public", validation_alias=AliasChoices("static_dir", "STATIC_DIR"))
    host: str = Field(default="127.0.0.1", validation_alias=AliasChoices("host", "HOST"))
    port: int = Field(default=3000, gt=0, lt=65536, validation_alias=AliasChoices("port", "PORT"))
    log_level: str = Field(
        default="INFO",
        pattern=r"(?i)^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        validation_alias=AliasChoices("log_level", "LOG_LEVEL"),
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
    )


def load_settings() -> Settings:
    """
    Build Settings from the environment and `.env`.

    Raises ConfigError when the API key is absent or a value fails validation.
    """
    try:
        settings = Settings()
    except ValidationError as e:
        if any(err["type"] == "missing" for err in e.errors()):
            raise ConfigError("GEMINI_API_KEY is not set") from e
        raise ConfigError(f"Invalid configuration: {e}") from e

    logger.debug(f"Loaded settings: model={settings.gemini_model}, timeout={settings.request_timeout}s")
    return settings
