"""
Configuration management for CareerHub.

Uses Pydantic Settings for type-safe configuration with environment variable support.
"""

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from careerhub.utils.constants import (
    COURSE_APPLICATIONS_LINK,
    DEFAULT_NOTIFICATION_LIMIT,
    JOB_APPLICATIONS_LINK,
    MAX_APPLICATIONS_PER_INSTITUTION,
)


# Base paths
ROOT_DIR = Path(__file__).parent.parent.parent


class DatabaseSettings(BaseSettings):
    """MongoDB database configuration."""

    model_config = SettingsConfigDict(env_prefix="DB_")

    host: str = "localhost"
    port: int = 27017
    name: str = "careerhub"
    username: str | None = None
    password: str | None = None

    # Multi-document batches run inside a transaction; needs a replica set or mongos
    use_transactions: bool = False
    timeout_ms: int = 5000


class MatchingSettings(BaseSettings):
    """Applicant matching and ranking configuration."""

    model_config = SettingsConfigDict(env_prefix="MATCH_")

    max_concurrency: int = 10
    ranking_timeout_seconds: Optional[float] = None

    @field_validator("max_concurrency")
    @classmethod
    def validate_concurrency(cls, v: int) -> int:
        """Concurrency must allow at least one evaluation."""
        if v < 1:
            raise ValueError("max_concurrency must be at least 1")
        return v


class WorkflowSettings(BaseSettings):
    """Application workflow configuration."""

    model_config = SettingsConfigDict(env_prefix="WORKFLOW_")

    max_applications_per_institution: int = MAX_APPLICATIONS_PER_INSTITUTION
    course_notification_link: str = COURSE_APPLICATIONS_LINK
    job_notification_link: str = JOB_APPLICATIONS_LINK
    notification_list_limit: int = DEFAULT_NOTIFICATION_LIMIT


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: str = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"
    file_path: Path = ROOT_DIR / "logs" / "careerhub.log"
    rotation: str = "10 MB"
    retention: str = "30 days"
    audit_retention: str = "1 year"
    console_output: bool = True
    file_output: bool = True


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    name: str = "CareerHub"
    version: str = "0.1.0"
    description: str = "Applicant qualification, ranking and application workflow"
    debug: bool = False

    # Environment
    environment: Literal["development", "production", "testing"] = "development"

    # Nested settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    matching: MatchingSettings = Field(default_factory=MatchingSettings)
    workflow: WorkflowSettings = Field(default_factory=WorkflowSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


# Global settings instance (singleton pattern)
_settings: AppSettings | None = None


def get_settings() -> AppSettings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = AppSettings()
    return _settings


def reload_settings() -> AppSettings:
    """Force reload settings from environment."""
    global _settings
    _settings = AppSettings()
    return _settings
