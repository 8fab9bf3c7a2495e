"""
Video access: entitlement check, then CloudFront credentials.

Course-wide access is a set of signed cookies whose custom policy covers
https://{cloudfront_domain}/courses/{course_id}/*, so the player can fetch every
manifest and segment of every lesson in the course. A single lesson can also be
granted with a short-lived signed URL for its master playlist.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from urllib.parse import quote

from lesson_video_aws_adapters import DEFAULT_COOKIE_EXPIRY_SECONDS, CloudFrontUrlSigner
from lesson_video_shared import EnrollmentChecker, SignedCookies, SignedUrl, course_resource_path

logger = logging.getLogger(__name__)

DEFAULT_URL_EXPIRY_MINUTES = 30


class VideoAccessForbiddenError(Exception):
    """The user is not entitled to the course's videos."""


class VideoAccessService:
    """
    Issues CloudFront credentials to enrolled users.

    The signer is built on first use through signer_factory (it fetches the
    private key from Secrets Manager) and reused afterwards. A missing domain or
    signer failure raises; callers map it to a server error.
    """

    def __init__(
        self,
        enrollment_checker: EnrollmentChecker,
        signer_factory: Callable[[], CloudFrontUrlSigner],
        cloudfront_domain: str,
        *,
        url_expiry_minutes: int = DEFAULT_URL_EXPIRY_MINUTES,
        cookie_expiry_seconds: int = DEFAULT_COOKIE_EXPIRY_SECONDS,
    ) -> None:
        self._enrollment_checker = enrollment_checker
        self._signer_factory = signer_factory
        self._signer: CloudFrontUrlSigner | None = None
        self._cloudfront_domain = cloudfront_domain
        self._url_expiry_minutes = url_expiry_minutes
        self._cookie_expiry_seconds = cookie_expiry_seconds

    def _get_signer(self) -> CloudFrontUrlSigner:
        if self._signer is None:
            self._signer = self._signer_factory()
        return self._signer

    def _resource_url(self, path: str) -> str:
        """https://{domain}/{path} with the path percent-encoded as CloudFront sees it on the wire."""
        if not self._cloudfront_domain:
            raise ValueError("CLOUDFRONT_DOMAIN environment variable is required")
        return f"https://{self._cloudfront_domain}/{quote(path, safe='/*')}"

    def require_enrollment(self, user_id: str, course_id: str) -> None:
        """Raise VideoAccessForbiddenError unless the user is enrolled in course_id."""
        if not self._enrollment_checker.check_enrollment(user_id, course_id):
            logger.warning("user_id=%s course_id=%s not enrolled", user_id, course_id)
            raise VideoAccessForbiddenError("Not enrolled in this course")

    def get_video_access_cookies(
        self,
        user_id: str,
        course_id: str,
        *,
        now: int | None = None,
    ) -> SignedCookies:
        """Signed cookies for every video object of course_id. Raises VideoAccessForbiddenError."""
        self.require_enrollment(user_id, course_id)
        resource = self._resource_url(course_resource_path(course_id))
        cookies = self._get_signer().generate_signed_cookies(
            resource,
            expiry_seconds=self._cookie_expiry_seconds,
            now=now,
        )
        logger.info("user_id=%s course_id=%s video access cookies issued", user_id, course_id)
        return cookies

    def get_lesson_video_url(
        self,
        user_id: str,
        course_id: str,
        lesson_id: str,
        hls_manifest_key: str,
        *,
        now: int | None = None,
    ) -> SignedUrl:
        """Signed URL for one lesson's master playlist. Raises VideoAccessForbiddenError."""
        self.require_enrollment(user_id, course_id)
        return self.sign_lesson_video_url(
            user_id, course_id, lesson_id, hls_manifest_key, now=now
        )

    def sign_lesson_video_url(
        self,
        user_id: str,
        course_id: str,
        lesson_id: str,
        hls_manifest_key: str,
        *,
        now: int | None = None,
    ) -> SignedUrl:
        """Same as get_lesson_video_url for a caller that has already run require_enrollment."""
        issued_at = int(time.time()) if now is None else now
        expires_at = issued_at + self._url_expiry_minutes * 60
        signed = self._get_signer().generate_signed_url(
            self._resource_url(hls_manifest_key), expires_at
        )
        logger.info(
            "user_id=%s course_id=%s lesson_id=%s signed url expires_at=%s",
            user_id,
            course_id,
            lesson_id,
            expires_at,
        )
        return signed
