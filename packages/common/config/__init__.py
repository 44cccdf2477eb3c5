"""Configuration management for envquack.

Defaults for the CLI (file locations, report style) and the logging setup,
loaded with pydantic-settings. Only these ambient defaults may come from
``ENVQUACK_*`` environment variables; the comparisons themselves never read
the process environment.
"""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class EnvQuackConfig(BaseSettings):
    """Main configuration class for envquack."""

    model_config = SettingsConfigDict(
        env_prefix="ENVQUACK_",
        case_sensitive=False,
        extra="ignore",
    )

    # ========== Default Sources ==========
    env_file: str = ".env"
    example_file: str = ".env.example"
    compose_file: str = "docker-compose.yml"
    dockerfile: str = "Dockerfile"

    # ========== Report Defaults ==========
    show_duck: bool = True
    colorize: bool = True

    # ========== Observability ==========
    log_level: str = "WARNING"
    log_format: Literal["json", "text"] = "json"

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level


@lru_cache(maxsize=1)
def get_config() -> EnvQuackConfig:
    """Return cached EnvQuackConfig instance.

    Returns:
        EnvQuackConfig: The configuration loaded from ``ENVQUACK_*`` variables.
    """
    return EnvQuackConfig()


__all__ = ["EnvQuackConfig", "get_config"]
