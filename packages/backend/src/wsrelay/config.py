"""Application configuration via environment variables.

Uses pydantic-settings to load config from env vars with WSRELAY_ prefix.
No config files — just env vars (12-factor app style).

Learn: pydantic-settings auto-loads from environment, validates types,
provides defaults. A bad value fails at import time, so the relay never
starts half-configured.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """All relay configuration. Set via WSRELAY_* env vars."""

    # Server
    environment: str = "development"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 3000
    ws_path: str = "/"

    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    log_payload_preview: int = Field(200, ge=1)  # max chars of a payload shown in logs

    model_config = {"env_prefix": "WSRELAY_"}

    @field_validator("ws_path")
    @classmethod
    def validate_ws_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("WSRELAY_WS_PATH must start with '/'")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            available = ", ".join(sorted(_LOG_LEVELS))
            raise ValueError(f"Unknown log level '{value}'. Available: {available}")
        return level


# Singleton — import this everywhere
settings = Settings()
