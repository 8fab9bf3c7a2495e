"""
Lambda handler for S3 uploads under uploads/raw/.

For each record in the batch, parse uploads/raw/{course_id}/{lesson_id}.{ext},
build the MediaConvert HLS job for courses/{course_id}/{lesson_id} and submit it.
Keys that do not match are skipped (manual test files and the like). A failed
submission raises so the event source retries the whole batch; a duplicate
delivery only costs a duplicate job, since the output location is the same.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence

from lesson_video_shared import (
    SubmittedJob,
    TranscodeJobSubmitter,
    configure_logging,
    generate_output_prefix,
    parse_upload_descriptor,
)

from .config import VideoEncoderSettings, get_settings
from .job_settings import JobConfig, build_job_settings

configure_logging()
logger = logging.getLogger(__name__)

# Reused across warm invocations: keeps the MediaConvert client and its endpoint.
_submitter: TranscodeJobSubmitter | None = None


def _get_submitter() -> TranscodeJobSubmitter:
    global _submitter
    if _submitter is None:
        from lesson_video_aws_adapters.env_config import job_submitter_from_env

        _submitter = job_submitter_from_env()
    return _submitter


def submit_upload(
    bucket: str,
    key: str,
    submitter: TranscodeJobSubmitter,
    settings: VideoEncoderSettings,
) -> SubmittedJob | None:
    """
    Submit one transcoding job for an upload. Returns None if the key is not a lesson upload.
    Submission errors propagate.
    """
    upload = parse_upload_descriptor(bucket, key)
    if upload is None:
        logger.warning(
            "video-encoder: skip key=%s (expected uploads/raw/{courseId}/{lessonId}.ext)",
            key,
        )
        return None

    output_prefix = generate_output_prefix(upload.course_id, upload.lesson_id)
    logger.info(
        "video-encoder: course_id=%s lesson_id=%s output_prefix=%s",
        upload.course_id,
        upload.lesson_id,
        output_prefix,
    )
    job_settings = build_job_settings(
        JobConfig(
            input_bucket=upload.bucket,
            input_key=upload.key,
            output_bucket=settings.video_bucket,
            output_prefix=output_prefix,
            role_arn=settings.mediaconvert_role_arn,
        )
    )
    try:
        job = submitter.submit(job_settings)
    except Exception as e:
        logger.error(
            "video-encoder: course_id=%s lesson_id=%s key=%s failed to create job: %s",
            upload.course_id,
            upload.lesson_id,
            upload.key,
            e,
        )
        raise
    logger.info(
        "video-encoder: course_id=%s lesson_id=%s job_id=%s status=%s",
        upload.course_id,
        upload.lesson_id,
        job.job_id,
        job.status,
    )
    return job


def process_upload_records(
    records: Sequence[tuple[str, str] | None],
    submitter: TranscodeJobSubmitter,
    settings: VideoEncoderSettings,
) -> dict[str, list[str]]:
    """
    Submit one job per valid record. Records are independent; order does not matter.

    Returns {"submitted_job_ids": [...], "skipped_keys": [...]}.
    """
    submitted: list[str] = []
    skipped: list[str] = []
    for record in records:
        if record is None:
            logger.warning("video-encoder: skip malformed S3 record")
            continue
        bucket, key = record
        job = submit_upload(bucket, key, submitter, settings)
        if job is None:
            skipped.append(key)
        elif job.job_id:
            submitted.append(job.job_id)
    return {"submitted_job_ids": submitted, "skipped_keys": skipped}


def lambda_handler(event: dict, context: object) -> dict:
    """
    S3 ObjectCreated handler.

    Env vars (set by the deployment stack): MEDIACONVERT_ROLE_ARN, VIDEO_BUCKET, AWS_REGION.
    """
    from .s3_event import upload_records_from_event

    settings = get_settings()
    settings.require()

    records = upload_records_from_event(event)
    logger.info("video-encoder: received %s record(s)", len(records))
    result = process_upload_records(records, _get_submitter(), settings)
    return {"statusCode": 200, "body": json.dumps(result)}
