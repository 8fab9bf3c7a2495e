"""
Video access API: CloudFront signed cookies per course, signed URL per lesson.

The caller is authenticated upstream; its user id arrives in X-User-Id.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from ..config import VideoAccessSettings
from ..deps import (
    get_lesson_catalog,
    get_user_id,
    get_video_access_service,
    get_video_access_settings,
)
from ..service import VideoAccessForbiddenError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/courses")


@router.get("/{course_id}/video-access")
async def get_video_access(
    request: Request,
    course_id: str,
    user_id: str | None = Depends(get_user_id),
    settings: VideoAccessSettings = Depends(get_video_access_settings),
) -> JSONResponse:
    """
    Signed cookies granting the course's HLS manifests and segments.

    200 {success, cookies} plus Set-Cookie for each value; 401 without a user;
    403 when not enrolled; 500 on configuration or signing failure.
    """
    if not user_id:
        logger.warning("course_id=%s video-access unauthorized (no user id)", course_id)
        return JSONResponse(
            status_code=401,
            content={"success": False, "error": "Unauthorized"},
        )
    try:
        service = get_video_access_service(request)
        cookies = service.get_video_access_cookies(user_id, course_id)
    except VideoAccessForbiddenError as e:
        return JSONResponse(status_code=403, content={"success": False, "error": str(e)})
    except Exception:
        logger.exception("user_id=%s course_id=%s failed to generate cookies", user_id, course_id)
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "Failed to generate video access cookies"},
        )

    values = cookies.model_dump(by_alias=True)
    response = JSONResponse(content={"success": True, "cookies": values})
    # Session cookies: no Expires/Max-Age; the signed policy carries the hard expiry.
    for name, value in values.items():
        response.set_cookie(
            name,
            value,
            path="/",
            domain=settings.cookie_domain or None,
            secure=True,
            httponly=True,
            samesite="none",
        )
    return response


@router.get("/{course_id}/lessons/{lesson_id}/video-url")
async def get_lesson_video_url(
    request: Request,
    course_id: str,
    lesson_id: str,
    user_id: str | None = Depends(get_user_id),
) -> dict:
    """Signed URL for the lesson's master playlist: {url, expiresAt}."""
    if not user_id:
        logger.warning(
            "course_id=%s lesson_id=%s video-url unauthorized (no user id)",
            course_id,
            lesson_id,
        )
        raise HTTPException(status_code=401, detail="Unauthorized")

    # Enrollment before lookup: non-enrolled callers must not learn which lessons are encoded.
    signed = None
    try:
        service = get_video_access_service(request)
        service.require_enrollment(user_id, course_id)
        catalog = get_lesson_catalog(request)
        hls_manifest_key = catalog.get_hls_manifest_key(course_id, lesson_id)
        if hls_manifest_key:
            signed = service.sign_lesson_video_url(
                user_id, course_id, lesson_id, hls_manifest_key
            )
    except VideoAccessForbiddenError as e:
        raise HTTPException(status_code=403, detail=str(e)) from e
    except Exception as e:
        logger.exception(
            "user_id=%s course_id=%s lesson_id=%s failed to generate video URL",
            user_id,
            course_id,
            lesson_id,
        )
        raise HTTPException(status_code=500, detail="Failed to generate video URL") from e

    if signed is None:
        logger.warning("course_id=%s lesson_id=%s no hlsManifestKey", course_id, lesson_id)
        raise HTTPException(status_code=404, detail="Lesson video not found")
    return signed.model_dump(by_alias=True)
