"""
Lambda config from environment.
Uses pydantic-settings so all env vars are validated and documented in one model.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class LessonMetadataSettings(BaseSettings):
    """
    All environment variables used by the lesson-metadata Lambda.
    Env vars are read from os.environ (UPPER_SNAKE_CASE by default).
    """

    model_config = SettingsConfigDict(extra="ignore")

    # Single-table education store holding COURSE#/LESSON# items
    education_table_name: str = ""
    aws_region: str = "us-east-1"

    def require(self) -> None:
        """Raise ValueError if a required value is missing (configuration error, not retryable)."""
        if not self.education_table_name:
            raise ValueError("EDUCATION_TABLE_NAME environment variable is required")


def get_settings() -> LessonMetadataSettings:
    """Return validated settings from current environment."""
    return LessonMetadataSettings()
