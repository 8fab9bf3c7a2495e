"""
App config from environment with defaults.
Single place for env-derived values used by the video-access service.
Uses pydantic-settings so all env vars are validated and documented in one model.
"""

from __future__ import annotations

from pathlib import Path

from lesson_video_aws_adapters import DEFAULT_COOKIE_EXPIRY_SECONDS
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VideoAccessSettings(BaseSettings):
    """
    All environment variables used by the video-access service.
    Env vars are read from os.environ (UPPER_SNAKE_CASE by default).

    Signing credentials (CLOUDFRONT_KEY_PAIR_ID, CLOUDFRONT_PRIVATE_KEY_SECRET_NAME)
    and EDUCATION_TABLE_NAME are read by lesson_video_aws_adapters.env_config.
    """

    model_config = SettingsConfigDict(
        env_file=None,  # We load .env via bootstrap_env() in main so env is ready
        extra="ignore",
    )

    # Distribution domain serving courses/* (e.g. d111111abcdef8.cloudfront.net)
    cloudfront_domain: str = ""
    # Signed URL lifetime for a single lesson manifest
    video_url_expiry_minutes: int = Field(30, ge=1)
    # Signed cookie policy lifetime; the cookies themselves are session cookies
    cookie_expiry_seconds: int = Field(DEFAULT_COOKIE_EXPIRY_SECONDS, ge=1)
    # Parent domain shared by the site and the CDN (e.g. .example.com); host-only when unset
    cookie_domain: str | None = None


def get_settings() -> VideoAccessSettings:
    """Return validated settings from current environment."""
    return VideoAccessSettings()


def bootstrap_env() -> None:
    """
    Load .env from path in LESSON_VIDEO_ENV_FILE if set (local development).
    Call once at app startup before using get_settings() so vars from the file are in os.environ.
    """
    import os

    import dotenv

    path = os.environ.get("LESSON_VIDEO_ENV_FILE")
    if path:
        dotenv.load_dotenv(Path(path).resolve())
