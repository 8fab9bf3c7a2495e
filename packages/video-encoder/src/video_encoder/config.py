"""
Lambda config from environment.
Uses pydantic-settings so all env vars are validated and documented in one model.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class VideoEncoderSettings(BaseSettings):
    """
    All environment variables used by the video-encoder Lambda.
    Env vars are read from os.environ (UPPER_SNAKE_CASE by default).
    """

    model_config = SettingsConfigDict(extra="ignore")

    # IAM role MediaConvert assumes to read uploads and write HLS output
    mediaconvert_role_arn: str = ""
    # Destination bucket for HLS output (served through CloudFront)
    video_bucket: str = ""
    aws_region: str = "us-east-1"

    def require(self) -> None:
        """Raise ValueError if a required value is missing (configuration error, not retryable)."""
        if not self.mediaconvert_role_arn:
            raise ValueError("MEDIACONVERT_ROLE_ARN environment variable is required")
        if not self.video_bucket:
            raise ValueError("VIDEO_BUCKET environment variable is required")


def get_settings() -> VideoEncoderSettings:
    """Return validated settings from current environment."""
    return VideoEncoderSettings()
