"""MediaConvert endpoint discovery and job submission (TranscodeJobSubmitter)."""

import logging
from typing import Any

import boto3
from lesson_video_shared import SubmittedJob

logger = logging.getLogger(__name__)

# Account-specific API endpoint, discovered once per process and reused on warm starts.
# Never invalidated: a changed endpoint needs a fresh process.
_endpoint_url: str | None = None


def get_mediaconvert_endpoint(
    *,
    region_name: str | None = None,
    mediaconvert_client=None,
) -> str:
    """
    Return the account-specific MediaConvert endpoint URL.

    The first call issues DescribeEndpoints and caches the result for the lifetime
    of the process. Concurrent cold callers may each discover; the call is
    read-only and the last writer stores the same value.
    """
    global _endpoint_url
    if _endpoint_url:
        return _endpoint_url
    client = mediaconvert_client or boto3.client("mediaconvert", region_name=region_name)
    resp = client.describe_endpoints(MaxResults=1)
    endpoints = resp.get("Endpoints") or []
    url = endpoints[0].get("Url") if endpoints else None
    if not url:
        raise RuntimeError("Failed to get MediaConvert endpoint")
    _endpoint_url = url
    logger.info("mediaconvert: discovered endpoint=%s", url)
    return url


class MediaConvertJobSubmitter:
    """TranscodeJobSubmitter backed by MediaConvert CreateJob on the discovered endpoint."""

    def __init__(
        self,
        *,
        region_name: str | None = None,
        endpoint_url: str | None = None,
    ) -> None:
        self._region_name = region_name
        self._endpoint_url = endpoint_url
        self._client = None

    def _get_client(self):
        if self._client is None:
            endpoint = self._endpoint_url or get_mediaconvert_endpoint(
                region_name=self._region_name
            )
            self._client = boto3.client(
                "mediaconvert",
                region_name=self._region_name,
                endpoint_url=endpoint,
            )
        return self._client

    def submit(self, job_settings: dict[str, Any]) -> SubmittedJob:
        """Submit CreateJob with the given payload (Role, Settings, UserMetadata, ...)."""
        resp = self._get_client().create_job(**job_settings)
        job = resp.get("Job") or {}
        return SubmittedJob(job_id=job.get("Id"), status=job.get("Status"))
