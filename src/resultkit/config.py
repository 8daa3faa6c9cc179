"""Environment-based configuration using pydantic-settings.

Example:
    >>> from resultkit.config import get_settings
    >>> get_settings().capture_base_exceptions
    False

    # Or with environment variables:
    # RESULTKIT_CAPTURE_BASE_EXCEPTIONS=true
    # RESULTKIT_LOG_CAPTURES=true
    # RESULTKIT_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["console", "json", "none"]


class ResultSettings(BaseSettings):
    """Capture and logging behaviour for ``from_unsafe``/``wrap``."""

    model_config = SettingsConfigDict(
        env_prefix="RESULTKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    capture_base_exceptions: bool = Field(
        default=False,
        description="Capture BaseException (KeyboardInterrupt, SystemExit) as well as Exception",
    )
    log_captures: bool = Field(
        default=False,
        description="Emit a debug event for every failure captured by from_unsafe",
    )
    log_level: LogLevel = "INFO"
    log_format: LogFormat = "console"

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, v: object) -> object:
        """Accept level names in any case."""
        return v.strip().upper() if isinstance(v, str) else v

    @field_validator("log_format", mode="before")
    @classmethod
    def _normalize_format(cls, v: object) -> object:
        """Accept format names in any case; "text" is an alias for console."""
        if not isinstance(v, str):
            return v
        v = v.strip().lower()
        return "console" if v == "text" else v

    @property
    def capture_types(self) -> tuple[type[BaseException], ...]:
        """Exception types ``from_unsafe`` converts into a Failure by default."""
        return (BaseException,) if self.capture_base_exceptions else (Exception,)


@lru_cache(maxsize=1)
def get_settings() -> ResultSettings:
    """Get cached settings instance.

    Settings are loaded once and cached. Use clear_settings_cache()
    to reload after environment changes.
    """
    return ResultSettings()


def clear_settings_cache() -> None:
    """Clear settings cache to reload from environment."""
    get_settings.cache_clear()
