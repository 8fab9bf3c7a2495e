"""AWS implementations of lesson-video cloud interfaces."""

from .cloudfront_signer import (
    DEFAULT_COOKIE_EXPIRY_SECONDS,
    CloudFrontUrlSigner,
    cloudfront_b64decode,
    cloudfront_b64encode,
)
from .dynamodb_catalog import DynamoDBLessonCatalog, lesson_key
from .dynamodb_enrollment import DynamoDBEnrollmentChecker, enrollment_key
from .mediaconvert import MediaConvertJobSubmitter, get_mediaconvert_endpoint
from .signing_key import SecretsManagerSigningKeyProvider

__all__ = [
    "DEFAULT_COOKIE_EXPIRY_SECONDS",
    "CloudFrontUrlSigner",
    "DynamoDBEnrollmentChecker",
    "DynamoDBLessonCatalog",
    "MediaConvertJobSubmitter",
    "SecretsManagerSigningKeyProvider",
    "cloudfront_b64decode",
    "cloudfront_b64encode",
    "enrollment_key",
    "get_mediaconvert_endpoint",
    "lesson_key",
]
