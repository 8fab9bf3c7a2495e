"""Shared types and conventions for the lesson video ingestion and delivery pipeline."""

from .interfaces import (
    EnrollmentChecker,
    LessonCatalog,
    SigningKeyProvider,
    TranscodeJobSubmitter,
)
from .keys import (
    course_resource_path,
    generate_hls_manifest_key,
    generate_output_prefix,
    parse_output_prefix,
    parse_upload_descriptor,
    parse_upload_key,
)
from .logging_config import configure_logging
from .models import (
    AbrConstraints,
    JobMetadata,
    JobRequest,
    JobStateChange,
    JobStatus,
    LessonRef,
    SignedCookies,
    SignedUrl,
    SubmittedJob,
    UploadDescriptor,
)

__version__ = "0.1.0"
__all__ = [
    "AbrConstraints",
    "EnrollmentChecker",
    "JobMetadata",
    "JobRequest",
    "JobStateChange",
    "JobStatus",
    "LessonCatalog",
    "LessonRef",
    "SignedCookies",
    "SignedUrl",
    "SigningKeyProvider",
    "SubmittedJob",
    "TranscodeJobSubmitter",
    "UploadDescriptor",
    "configure_logging",
    "course_resource_path",
    "generate_hls_manifest_key",
    "generate_output_prefix",
    "parse_output_prefix",
    "parse_upload_descriptor",
    "parse_upload_key",
]
