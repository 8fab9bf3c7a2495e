"""Tests for VideoAccessService: enrollment gate, cookie resource scope, URL expiry."""

import json
from unittest.mock import MagicMock
from urllib.parse import parse_qs, urlparse

import pytest
from lesson_video_aws_adapters import cloudfront_b64decode

from video_access.service import VideoAccessForbiddenError, VideoAccessService

CLOUDFRONT_DOMAIN = "d111111abcdef8.cloudfront.net"
KEY_PAIR_ID = "K2JCJMDEHXQW5F"

NOW = 1_700_000_000


class TestGetVideoAccessCookies:
    def test_enrolled_user_gets_course_scoped_cookies(self, service, enrollment_checker) -> None:
        enrollment_checker.enroll("u1", "c1")
        cookies = service.get_video_access_cookies("u1", "c1", now=NOW)
        policy = json.loads(cloudfront_b64decode(cookies.policy))
        statement = policy["Statement"][0]
        assert statement["Resource"] == f"https://{CLOUDFRONT_DOMAIN}/courses/c1/*"
        assert statement["Condition"]["DateLessThan"]["AWS:EpochTime"] == NOW + 86400
        assert cookies.key_pair_id == KEY_PAIR_ID

    def test_course_id_is_percent_encoded_in_resource(self, service, enrollment_checker) -> None:
        enrollment_checker.enroll("u1", "my course")
        cookies = service.get_video_access_cookies("u1", "my course", now=NOW)
        policy = json.loads(cloudfront_b64decode(cookies.policy))
        assert policy["Statement"][0]["Resource"] == (
            f"https://{CLOUDFRONT_DOMAIN}/courses/my%20course/*"
        )

    def test_not_enrolled_raises_forbidden(self, service, enrollment_checker) -> None:
        enrollment_checker.enroll("u1", "c2")
        with pytest.raises(VideoAccessForbiddenError, match="Not enrolled"):
            service.get_video_access_cookies("u1", "c1")

    def test_enrollment_checked_before_signer_is_built(self, enrollment_checker) -> None:
        factory = MagicMock()
        service = VideoAccessService(enrollment_checker, factory, CLOUDFRONT_DOMAIN)
        with pytest.raises(VideoAccessForbiddenError):
            service.get_video_access_cookies("u1", "c1")
        factory.assert_not_called()

    def test_signer_built_once(self, enrollment_checker, signer) -> None:
        enrollment_checker.enroll("u1", "c1")
        factory = MagicMock(return_value=signer)
        service = VideoAccessService(enrollment_checker, factory, CLOUDFRONT_DOMAIN)
        service.get_video_access_cookies("u1", "c1")
        service.get_video_access_cookies("u1", "c1")
        assert factory.call_count == 1

    def test_missing_domain_raises_value_error(self, enrollment_checker, signer) -> None:
        enrollment_checker.enroll("u1", "c1")
        service = VideoAccessService(enrollment_checker, lambda: signer, "")
        with pytest.raises(ValueError, match="CLOUDFRONT_DOMAIN"):
            service.get_video_access_cookies("u1", "c1")

    def test_custom_cookie_expiry(self, enrollment_checker, signer) -> None:
        enrollment_checker.enroll("u1", "c1")
        service = VideoAccessService(
            enrollment_checker, lambda: signer, CLOUDFRONT_DOMAIN, cookie_expiry_seconds=3600
        )
        cookies = service.get_video_access_cookies("u1", "c1", now=NOW)
        policy = json.loads(cloudfront_b64decode(cookies.policy))
        assert policy["Statement"][0]["Condition"]["DateLessThan"]["AWS:EpochTime"] == NOW + 3600


class TestGetLessonVideoUrl:
    def test_signed_url_for_manifest(self, service, enrollment_checker) -> None:
        enrollment_checker.enroll("u1", "c1")
        signed = service.get_lesson_video_url(
            "u1", "c1", "l1", "courses/c1/l1/l1.m3u8", now=NOW
        )
        assert signed.expires_at == NOW + 30 * 60
        parsed = urlparse(signed.url)
        assert parsed.netloc == CLOUDFRONT_DOMAIN
        assert parsed.path == "/courses/c1/l1/l1.m3u8"
        query = parse_qs(parsed.query)
        assert query["Expires"] == [str(NOW + 1800)]
        assert query["Key-Pair-Id"] == [KEY_PAIR_ID]
        assert query["Signature"][0]

    def test_expiry_minutes_configurable(self, enrollment_checker, signer) -> None:
        enrollment_checker.enroll("u1", "c1")
        service = VideoAccessService(
            enrollment_checker, lambda: signer, CLOUDFRONT_DOMAIN, url_expiry_minutes=5
        )
        signed = service.get_lesson_video_url("u1", "c1", "l1", "courses/c1/l1/l1.m3u8", now=NOW)
        assert signed.expires_at == NOW + 300

    def test_not_enrolled_raises_forbidden(self, service) -> None:
        with pytest.raises(VideoAccessForbiddenError):
            service.get_lesson_video_url("u1", "c1", "l1", "courses/c1/l1/l1.m3u8")

    def test_manifest_key_is_percent_encoded(self, service, enrollment_checker) -> None:
        enrollment_checker.enroll("u1", "c1")
        signed = service.get_lesson_video_url(
            "u1", "c1", "my lesson", "courses/c1/my lesson/my lesson.m3u8", now=NOW
        )
        assert " " not in signed.url
        assert urlparse(signed.url).path == "/courses/c1/my%20lesson/my%20lesson.m3u8"

    def test_non_ascii_manifest_key_is_percent_encoded(self, service, enrollment_checker) -> None:
        enrollment_checker.enroll("u1", "c1")
        signed = service.get_lesson_video_url(
            "u1", "c1", "café", "courses/c1/café/café.m3u8", now=NOW
        )
        assert signed.url.isascii()
        assert urlparse(signed.url).path == "/courses/c1/caf%C3%A9/caf%C3%A9.m3u8"

    def test_sign_without_enrollment_check(self, service, enrollment_checker) -> None:
        signed = service.sign_lesson_video_url(
            "u1", "c1", "l1", "courses/c1/l1/l1.m3u8", now=NOW
        )
        assert signed.expires_at == NOW + 1800
        assert enrollment_checker.calls == []
