"""
Build AWS adapter instances from environment variables.

Lambda and container environments get resource names from the deployment stack
as env vars. Set these before constructing adapters so names are not hardcoded.

Required env vars (per consumer):
- EDUCATION_TABLE_NAME (lesson-metadata, video-access enrollment and lesson URLs)
- CLOUDFRONT_KEY_PAIR_ID, CLOUDFRONT_PRIVATE_KEY_SECRET_NAME (video-access)

Optional:
- AWS_REGION (default: boto3 resolution, e.g. us-east-1 in Lambda)
- AWS_ENDPOINT_URL (e.g. for LocalStack; not applied to MediaConvert, which
  always uses its discovered account endpoint)
- MEDIACONVERT_ENDPOINT_URL: skip DescribeEndpoints and use this endpoint
"""

import os

from .cloudfront_signer import CloudFrontUrlSigner
from .dynamodb_catalog import DynamoDBLessonCatalog
from .dynamodb_enrollment import DynamoDBEnrollmentChecker
from .mediaconvert import MediaConvertJobSubmitter
from .signing_key import SecretsManagerSigningKeyProvider


def _get_region() -> str | None:
    return os.environ.get("AWS_REGION") or None


def _get_endpoint_url() -> str | None:
    return os.environ.get("AWS_ENDPOINT_URL") or None


def lesson_catalog_from_env() -> DynamoDBLessonCatalog:
    """Build DynamoDBLessonCatalog from EDUCATION_TABLE_NAME."""
    table_name = os.environ["EDUCATION_TABLE_NAME"]
    return DynamoDBLessonCatalog(
        table_name,
        region_name=_get_region(),
        endpoint_url=_get_endpoint_url(),
    )


def enrollment_checker_from_env() -> DynamoDBEnrollmentChecker:
    """Build DynamoDBEnrollmentChecker from EDUCATION_TABLE_NAME."""
    table_name = os.environ["EDUCATION_TABLE_NAME"]
    return DynamoDBEnrollmentChecker(
        table_name,
        region_name=_get_region(),
        endpoint_url=_get_endpoint_url(),
    )


def job_submitter_from_env() -> MediaConvertJobSubmitter:
    """Build MediaConvertJobSubmitter; the endpoint is discovered lazily unless overridden."""
    return MediaConvertJobSubmitter(
        region_name=_get_region(),
        endpoint_url=os.environ.get("MEDIACONVERT_ENDPOINT_URL") or None,
    )


def signing_key_provider_from_env() -> SecretsManagerSigningKeyProvider:
    """Build SecretsManagerSigningKeyProvider from CLOUDFRONT_PRIVATE_KEY_SECRET_NAME."""
    return SecretsManagerSigningKeyProvider(
        os.environ.get("CLOUDFRONT_PRIVATE_KEY_SECRET_NAME") or None,
        region_name=_get_region(),
        endpoint_url=_get_endpoint_url(),
    )


def cloudfront_signer_from_env(
    signing_key_provider: SecretsManagerSigningKeyProvider | None = None,
) -> CloudFrontUrlSigner:
    """
    Build CloudFrontUrlSigner from CLOUDFRONT_KEY_PAIR_ID and the Secrets Manager key.

    Raises ValueError when the key pair id or the key is missing (configuration error).
    """
    key_pair_id = os.environ.get("CLOUDFRONT_KEY_PAIR_ID")
    if not key_pair_id:
        raise ValueError("CLOUDFRONT_KEY_PAIR_ID environment variable is required")
    provider = signing_key_provider or signing_key_provider_from_env()
    return CloudFrontUrlSigner(key_pair_id, provider.get_private_key())
