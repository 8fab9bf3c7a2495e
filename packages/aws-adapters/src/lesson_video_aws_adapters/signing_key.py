"""AWS Secrets Manager provider for the CloudFront signing private key."""

from __future__ import annotations

import json
import logging

import boto3

logger = logging.getLogger(__name__)


def _region_from_arn(arn: str) -> str | None:
    """Parse region from Secrets Manager ARN (arn:aws:secretsmanager:REGION:...)."""
    if arn and arn.startswith("arn:aws:secretsmanager:") and arn.count(":") >= 3:
        return arn.split(":")[3]
    return None


def _extract_pem(secret: str) -> str:
    """The secret is either the PEM itself or JSON with a private_key / privateKey field."""
    if secret.lstrip().startswith("-----BEGIN"):
        return secret
    try:
        data = json.loads(secret)
    except json.JSONDecodeError:
        return secret
    if isinstance(data, dict):
        pem = data.get("private_key") or data.get("privateKey")
        if pem:
            return pem
    raise ValueError("CloudFront private key secret has no private_key field")


class SecretsManagerSigningKeyProvider:
    """
    SigningKeyProvider that fetches the PEM from Secrets Manager once and caches it
    for the lifetime of the instance (i.e. across warm invocations).
    """

    def __init__(
        self,
        secret_id: str | None,
        *,
        region_name: str | None = None,
        endpoint_url: str | None = None,
    ) -> None:
        self._secret_id = secret_id
        self._region_name = region_name or (_region_from_arn(secret_id) if secret_id else None)
        self._endpoint_url = endpoint_url
        self._private_key: str | None = None

    def get_private_key(self) -> str:
        if self._private_key:
            return self._private_key
        if not self._secret_id:
            raise ValueError("CLOUDFRONT_PRIVATE_KEY_SECRET_NAME environment variable is required")
        logger.info("signing-key: fetching CloudFront private key from Secrets Manager")
        client = boto3.client(
            "secretsmanager",
            region_name=self._region_name,
            endpoint_url=self._endpoint_url,
        )
        try:
            response = client.get_secret_value(SecretId=self._secret_id)
        except Exception as e:
            logger.error("signing-key: failed to fetch CloudFront private key: %s", e)
            raise
        secret = response.get("SecretString")
        if not secret:
            raise ValueError("CloudFront private key not found in Secrets Manager")
        self._private_key = _extract_pem(secret)
        logger.info("signing-key: private key fetched and cached")
        return self._private_key
