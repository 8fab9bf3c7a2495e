"""
Cloud-agnostic interfaces for job submission, the lesson catalog, signing keys,
and entitlement checks.

Implementations (e.g. AWS via MediaConvert, DynamoDB, Secrets Manager) live in
separate packages (e.g. aws-adapters). Handler logic depends on these
interfaces and receives the implementation by config.
"""

from typing import Any, Protocol, runtime_checkable

from .models import SubmittedJob


@runtime_checkable
class TranscodeJobSubmitter(Protocol):
    """Submit one transcoding job described by a CreateJob payload."""

    def submit(self, job_settings: dict[str, Any]) -> SubmittedJob:
        """Submit the job and return its id and initial status. Errors propagate."""
        ...


@runtime_checkable
class LessonCatalog(Protocol):
    """The slice of the catalog this pipeline touches: one field on existing lesson records."""

    def set_hls_manifest_key(
        self,
        course_id: str,
        lesson_id: str,
        hls_manifest_key: str,
        *,
        updated_at: str | None = None,
    ) -> bool:
        """
        Set hlsManifestKey and updatedAt on the lesson only if it already exists.

        Returns True if the record was updated, False if it does not exist.
        Any other persistence error propagates.
        """
        ...

    def get_hls_manifest_key(self, course_id: str, lesson_id: str) -> str | None:
        """Return the lesson's manifest key, or None if not transcoded yet (or no such lesson)."""
        ...


@runtime_checkable
class SigningKeyProvider(Protocol):
    """Source of the PEM-encoded private key used for CloudFront signing."""

    def get_private_key(self) -> str:
        """Return the PEM private key. Raises if it cannot be obtained."""
        ...


@runtime_checkable
class EnrollmentChecker(Protocol):
    """Entitlement check owned by the enrollment subsystem."""

    def check_enrollment(self, user_id: str, course_id: str) -> bool:
        """Return True if the user may watch the course."""
        ...
