"""Dependencies and app state for FastAPI routes."""

from fastapi import Header, Request
from lesson_video_shared import LessonCatalog

from .config import VideoAccessSettings, get_settings
from .service import VideoAccessService


def get_user_id(x_user_id: str | None = Header(default=None)) -> str | None:
    """Authenticated user id set by the upstream authenticator; None when absent."""
    if x_user_id is None or not x_user_id.strip():
        return None
    return x_user_id.strip()


def get_video_access_settings(request: Request) -> VideoAccessSettings:
    """Return VideoAccessSettings from app state or env."""
    settings = getattr(request.app.state, "settings", None)
    if settings is not None:
        return settings
    return get_settings()


def get_lesson_catalog(request: Request) -> LessonCatalog:
    """Return LessonCatalog from app state or build from env."""
    catalog = getattr(request.app.state, "lesson_catalog", None)
    if catalog is not None:
        return catalog
    from lesson_video_aws_adapters.env_config import lesson_catalog_from_env

    return lesson_catalog_from_env()


def get_video_access_service(request: Request) -> VideoAccessService:
    """
    Return VideoAccessService from app state or build from env.

    The env-built service is kept on app state so the signing key is fetched once
    per process.
    """
    service = getattr(request.app.state, "video_access_service", None)
    if service is not None:
        return service
    from lesson_video_aws_adapters.env_config import (
        cloudfront_signer_from_env,
        enrollment_checker_from_env,
    )

    settings = get_video_access_settings(request)
    service = VideoAccessService(
        enrollment_checker_from_env(),
        cloudfront_signer_from_env,
        settings.cloudfront_domain,
        url_expiry_minutes=settings.video_url_expiry_minutes,
        cookie_expiry_seconds=settings.cookie_expiry_seconds,
    )
    request.app.state.video_access_service = service
    return service
