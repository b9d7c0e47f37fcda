"""
Logging Configuration.
"""

from datetime import timedelta

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from osiris.logging.levels import DetailLevel
from osiris.logging.retention import DEFAULT_CLEANUP_INTERVAL, AgeRule
from osiris.logging.sinks import DEFAULT_FILE_NAME_FORMAT


class LoggingSettings(BaseSettings):
    """Logging infrastructure configuration."""

    model_config = SettingsConfigDict(
        env_prefix="OSIRIS_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    folder: str = Field(default="", description="Log folder; empty disables file logging")
    max_files: int = Field(default=-1, description="Max log files kept (<= 0: unlimited)")
    max_age: timedelta = Field(default=timedelta(0), description="Max log file age (0: unlimited)")
    detail_level: DetailLevel = Field(default=DetailLevel.DETAILED, description="none, basic or detailed")
    datetime_format: str = Field(default="%Y-%m-%d %H:%M:%S.%f", description="Record timestamp format")
    file_name_format: str = Field(default=DEFAULT_FILE_NAME_FORMAT, description="Per-run log file name format")
    cleanup_interval: timedelta = Field(default=DEFAULT_CLEANUP_INTERVAL, description="Retention pass period")
    age_rule: AgeRule = Field(default=AgeRule.FUTURE, description="Age retention comparison (future, past)")
    console_color: bool | None = Field(default=None, description="Force console color; unset means TTY only")
    intercept_stdlib: bool = Field(default=False, description="Route stdlib logging into the pipeline")

    @field_validator("detail_level", mode="before")
    @classmethod
    def _parse_detail_level(cls, value: object) -> DetailLevel:
        return DetailLevel.parse(value)

    @field_validator("age_rule", mode="before")
    @classmethod
    def _normalize_age_rule(cls, value: object) -> object:
        return value.strip().lower() if isinstance(value, str) else value

    @property
    def log_to_file(self) -> bool:
        return bool(self.folder)
