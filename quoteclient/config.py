"""Runtime settings for the quote runner.

Every value has a default; environment variables prefixed ``QUOTECLIENT_``
(or a ``.env`` file) override them, e.g. ``QUOTECLIENT_URL``.
"""

from __future__ import annotations

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from quoteclient.fetcher import DEFAULT_URL


class Settings(BaseSettings):
    """Configuration for a single run."""

    model_config = SettingsConfigDict(
        env_prefix="QUOTECLIENT_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    url: str = Field(default=DEFAULT_URL, description="Quote endpoint to call")
    timeout: float = Field(default=10.0, gt=0, description="Timeout in seconds")
    verify: bool = Field(default=True, description="Verify TLS certificates")
    log_level: str = Field(default="INFO", description="Minimum log level")

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.strip().upper()
        # Raises ValueError for names loguru does not know.
        logger.level(level)
        return level


def load_settings(**overrides) -> Settings:
    """Load settings from defaults, ``.env`` and the environment."""
    return Settings(**overrides)
