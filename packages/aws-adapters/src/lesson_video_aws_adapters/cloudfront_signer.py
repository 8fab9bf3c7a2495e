"""
CloudFront signed URLs and signed cookies.

Signed URLs use a canned policy (one resource, one expiry). Signed cookies use a
custom policy with a wildcard resource so one grant covers every manifest and
segment under a path prefix. Both are signed with the distribution key pair's
RSA private key (SHA-1, as CloudFront requires).

Reference: https://docs.aws.amazon.com/AmazonCloudFront/latest/DeveloperGuide/private-content-signed-cookies.html
"""

from __future__ import annotations

import base64
import time
from datetime import datetime, timezone

from botocore.signers import CloudFrontSigner
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from lesson_video_shared import SignedCookies, SignedUrl

# 24 hours: cookies are session-scoped, the policy expiry is the backstop.
DEFAULT_COOKIE_EXPIRY_SECONDS = 86400


def cloudfront_b64encode(data: bytes) -> str:
    """Base64 with CloudFront's URL-safe substitutions ('+' -> '-', '=' -> '_', '/' -> '~')."""
    return (
        base64.b64encode(data)
        .replace(b"+", b"-")
        .replace(b"=", b"_")
        .replace(b"/", b"~")
        .decode("utf-8")
    )


def cloudfront_b64decode(value: str) -> bytes:
    """Inverse of cloudfront_b64encode."""
    raw = value.replace("-", "+").replace("_", "=").replace("~", "/")
    return base64.b64decode(raw)


def load_rsa_private_key(private_key_pem: str | bytes) -> rsa.RSAPrivateKey:
    """Load a PEM RSA private key; ValueError if it is not an RSA key."""
    if isinstance(private_key_pem, str):
        private_key_pem = private_key_pem.encode("utf-8")
    key = serialization.load_pem_private_key(private_key_pem, password=None)
    if not isinstance(key, rsa.RSAPrivateKey):
        raise ValueError("CloudFront signing key must be an RSA private key")
    return key


class CloudFrontUrlSigner:
    """Issues CloudFront signed URLs and cookies for one key pair."""

    def __init__(self, key_pair_id: str, private_key_pem: str | bytes) -> None:
        if not key_pair_id:
            raise ValueError("CloudFront key pair id is required")
        if not private_key_pem:
            raise ValueError("CloudFront private key is required")
        self._key_pair_id = key_pair_id
        self._private_key = load_rsa_private_key(private_key_pem)
        self._signer = CloudFrontSigner(key_pair_id, self._rsa_sign)

    @property
    def key_pair_id(self) -> str:
        return self._key_pair_id

    def _rsa_sign(self, message: bytes) -> bytes:
        return self._private_key.sign(message, padding.PKCS1v15(), hashes.SHA1())

    def generate_signed_url(self, resource_url: str, expires_at: int) -> SignedUrl:
        """
        Sign a single asset URL with a canned policy valid until expires_at (Unix seconds).

        The returned URL carries Expires, Signature and Key-Pair-Id query parameters.
        """
        date_less_than = datetime.fromtimestamp(expires_at, tz=timezone.utc)
        url = self._signer.generate_presigned_url(resource_url, date_less_than=date_less_than)
        return SignedUrl(url=url, expires_at=expires_at)

    def build_custom_policy(self, resource_pattern: str, expires_at: int) -> str:
        """Custom policy JSON (compact) allowing resource_pattern until expires_at."""
        date_less_than = datetime.fromtimestamp(expires_at, tz=timezone.utc)
        return self._signer.build_policy(resource_pattern, date_less_than)

    def generate_signed_cookies(
        self,
        resource_pattern: str,
        *,
        expiry_seconds: int = DEFAULT_COOKIE_EXPIRY_SECONDS,
        now: int | None = None,
    ) -> SignedCookies:
        """
        Sign a custom policy for every object matching resource_pattern
        (e.g. https://cdn.example.com/courses/c1/*) until now + expiry_seconds.

        Returns the three cookie values; the caller sets them as session cookies.
        """
        issued_at = int(time.time()) if now is None else now
        policy = self.build_custom_policy(resource_pattern, issued_at + expiry_seconds)
        policy_bytes = policy.encode("utf-8")
        return SignedCookies(
            policy=cloudfront_b64encode(policy_bytes),
            signature=cloudfront_b64encode(self._rsa_sign(policy_bytes)),
            key_pair_id=self._key_pair_id,
        )
