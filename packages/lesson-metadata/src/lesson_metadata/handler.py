"""
Lambda handler for EventBridge "MediaConvert Job State Change" events.

On COMPLETE, read userMetadata.outputPrefix (set by video-encoder at submit
time), recover course_id and lesson_id from it and record the lesson's HLS
manifest key with a conditional update (the lesson item must already exist).
Other statuses, ERROR included, are logged and ignored.

Replaying an event rewrites the same hlsManifestKey; only updatedAt moves.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from lesson_video_shared import (
    JobStateChange,
    LessonCatalog,
    configure_logging,
    generate_hls_manifest_key,
    parse_output_prefix,
)

from .config import get_settings

configure_logging()
logger = logging.getLogger(__name__)


class ReconcileOutcome(str, Enum):
    """What reconcile_job_state_change did with one event."""

    IGNORED = "ignored"
    UPDATED = "updated"
    LESSON_NOT_FOUND = "lesson_not_found"


def reconcile_job_state_change(
    detail: dict[str, Any],
    catalog: LessonCatalog,
) -> ReconcileOutcome:
    """
    Record the manifest key for a completed job.

    Raises ValueError when a COMPLETE job carries no outputPrefix or one that is
    not courses/{course_id}/{lesson_id}; the event is malformed and a retry
    will not fix it. Catalog errors other than a missing lesson propagate.
    """
    change = JobStateChange.model_validate(detail)
    if not change.is_complete:
        logger.info(
            "lesson-metadata: job_id=%s status=%s not complete, skipping",
            change.job_id,
            change.status,
        )
        return ReconcileOutcome.IGNORED

    output_prefix = change.user_metadata.output_prefix
    if not output_prefix:
        logger.error("lesson-metadata: job_id=%s missing outputPrefix in userMetadata", change.job_id)
        raise ValueError("Missing outputPrefix in job userMetadata")

    lesson = parse_output_prefix(output_prefix)
    if lesson is None:
        logger.error(
            "lesson-metadata: job_id=%s invalid output_prefix=%s",
            change.job_id,
            output_prefix,
        )
        raise ValueError(f"Invalid outputPrefix format: {output_prefix}")

    hls_manifest_key = generate_hls_manifest_key(lesson.course_id, lesson.lesson_id)
    logger.info(
        "lesson-metadata: job_id=%s course_id=%s lesson_id=%s hls_manifest_key=%s",
        change.job_id,
        lesson.course_id,
        lesson.lesson_id,
        hls_manifest_key,
    )
    updated = catalog.set_hls_manifest_key(lesson.course_id, lesson.lesson_id, hls_manifest_key)
    if not updated:
        logger.warning(
            "lesson-metadata: course_id=%s lesson_id=%s lesson not found, skipping update",
            lesson.course_id,
            lesson.lesson_id,
        )
        return ReconcileOutcome.LESSON_NOT_FOUND

    logger.info(
        "lesson-metadata: course_id=%s lesson_id=%s hlsManifestKey updated",
        lesson.course_id,
        lesson.lesson_id,
    )
    return ReconcileOutcome.UPDATED


def lambda_handler(event: dict, context: object) -> dict:
    """
    EventBridge handler (rule on source aws.mediaconvert, detail-type
    "MediaConvert Job State Change").

    Env vars (set by the deployment stack): EDUCATION_TABLE_NAME, AWS_REGION.
    """
    from lesson_video_aws_adapters.env_config import lesson_catalog_from_env

    settings = get_settings()
    settings.require()

    detail = event.get("detail") or {}
    outcome = reconcile_job_state_change(detail, lesson_catalog_from_env())
    return {"outcome": outcome.value}
