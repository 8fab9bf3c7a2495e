"""Pytest fixtures: app with in-memory enrollments and lessons and a real signer over a throwaway RSA key."""

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from fastapi.testclient import TestClient
from lesson_video_aws_adapters import CloudFrontUrlSigner

from video_access.config import VideoAccessSettings
from video_access.main import app
from video_access.service import VideoAccessService

CLOUDFRONT_DOMAIN = "d111111abcdef8.cloudfront.net"
KEY_PAIR_ID = "K2JCJMDEHXQW5F"


class MockEnrollmentChecker:
    """EnrollmentChecker for tests: enrolled iff (user_id, course_id) was added."""

    def __init__(self) -> None:
        self.enrolled: set[tuple[str, str]] = set()
        self.calls: list[tuple[str, str]] = []

    def enroll(self, user_id: str, course_id: str) -> None:
        self.enrolled.add((user_id, course_id))

    def check_enrollment(self, user_id: str, course_id: str) -> bool:
        self.calls.append((user_id, course_id))
        return (user_id, course_id) in self.enrolled


class MockLessonCatalog:
    """LessonCatalog for tests: in-memory manifest keys."""

    def __init__(self) -> None:
        self.manifest_keys: dict[tuple[str, str], str] = {}

    def set_hls_manifest_key(
        self,
        course_id: str,
        lesson_id: str,
        hls_manifest_key: str,
        *,
        updated_at: str | None = None,
    ) -> bool:
        self.manifest_keys[(course_id, lesson_id)] = hls_manifest_key
        return True

    def get_hls_manifest_key(self, course_id: str, lesson_id: str) -> str | None:
        return self.manifest_keys.get((course_id, lesson_id))


@pytest.fixture(scope="session")
def rsa_private_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def private_key_pem(rsa_private_key) -> str:
    return rsa_private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("utf-8")


@pytest.fixture
def signer(private_key_pem: str) -> CloudFrontUrlSigner:
    return CloudFrontUrlSigner(KEY_PAIR_ID, private_key_pem)


@pytest.fixture
def enrollment_checker() -> MockEnrollmentChecker:
    return MockEnrollmentChecker()


@pytest.fixture
def lesson_catalog() -> MockLessonCatalog:
    return MockLessonCatalog()


@pytest.fixture
def service(enrollment_checker, signer) -> VideoAccessService:
    return VideoAccessService(
        enrollment_checker,
        lambda: signer,
        CLOUDFRONT_DOMAIN,
        url_expiry_minutes=30,
    )


@pytest.fixture
def app_with_mocks(service, lesson_catalog):
    """Set app.state so routes use mocks; cookie domain fixed."""
    app.state.video_access_service = service
    app.state.lesson_catalog = lesson_catalog
    app.state.settings = VideoAccessSettings(
        cloudfront_domain=CLOUDFRONT_DOMAIN,
        cookie_domain=".example.com",
    )
    yield
    for name in ("video_access_service", "lesson_catalog", "settings"):
        if hasattr(app.state, name):
            delattr(app.state, name)


@pytest.fixture
def client(app_with_mocks) -> TestClient:
    return TestClient(app)
