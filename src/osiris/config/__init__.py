"""
Osiris Configuration Module.

Nested Settings Pattern: each sub-module is an independent concern with its
own environment variable prefix.

Multi-Environment Support:
    Set `OSIRIS_ENV` to one of: development, testing, staging, production
    The system will load .env files in this order (later overrides earlier):
    1. .env
    2. .env.local
    3. .env.{environment}
    4. .env.{environment}.local

Usage:
    from osiris.config import settings

    settings.logging.folder
    settings.logging.detail_level
"""

from functools import cached_property

from pydantic_settings import BaseSettings, SettingsConfigDict

from .environment import EnvironmentSettings
from .logging import LoggingSettings


class Settings(BaseSettings):
    """Composite settings aggregating all configuration domains.

    Sub-settings resolve their .env files through ``environment.env_files``.
    """

    model_config = SettingsConfigDict(extra="ignore")

    @cached_property
    def environment(self) -> EnvironmentSettings:
        return EnvironmentSettings()

    @cached_property
    def logging(self) -> LoggingSettings:
        return LoggingSettings(_env_file=self.environment.env_files)  # type: ignore[call-arg]


# Singleton instance
settings = Settings()

__all__ = [
    "EnvironmentSettings",
    "LoggingSettings",
    "Settings",
    "settings",
]
