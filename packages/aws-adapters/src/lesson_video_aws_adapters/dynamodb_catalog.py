"""DynamoDB implementation of LessonCatalog (single-table education model)."""

from datetime import datetime, timezone

import boto3
from botocore.exceptions import ClientError


def lesson_key(course_id: str, lesson_id: str) -> dict[str, str]:
    """Primary key of a lesson item: PK=COURSE#{course_id}, SK=LESSON#{lesson_id}."""
    return {"PK": f"COURSE#{course_id}", "SK": f"LESSON#{lesson_id}"}


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class DynamoDBLessonCatalog:
    """LessonCatalog over the education table; lesson items are created by the catalog API."""

    def __init__(
        self,
        table_name: str,
        *,
        region_name: str | None = None,
        endpoint_url: str | None = None,
    ) -> None:
        self._table_name = table_name
        self._resource = boto3.resource(
            "dynamodb",
            region_name=region_name,
            endpoint_url=endpoint_url,
        )
        self._table = self._resource.Table(table_name)

    def set_hls_manifest_key(
        self,
        course_id: str,
        lesson_id: str,
        hls_manifest_key: str,
        *,
        updated_at: str | None = None,
    ) -> bool:
        """
        Conditional update: SET hlsManifestKey, updatedAt only if the lesson item exists.

        Returns True if the update succeeded, False if the item does not exist
        (ConditionalCheckFailedException). Other ClientErrors propagate.
        """
        try:
            self._table.update_item(
                Key=lesson_key(course_id, lesson_id),
                UpdateExpression="SET hlsManifestKey = :hlsManifestKey, updatedAt = :updatedAt",
                ConditionExpression="attribute_exists(PK) AND attribute_exists(SK)",
                ExpressionAttributeValues={
                    ":hlsManifestKey": hls_manifest_key,
                    ":updatedAt": updated_at or _utc_now_iso(),
                },
            )
            return True
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                return False
            raise

    def get_hls_manifest_key(self, course_id: str, lesson_id: str) -> str | None:
        """Return the lesson's hlsManifestKey, or None if the lesson or the field is missing."""
        resp = self._table.get_item(
            Key=lesson_key(course_id, lesson_id),
            ProjectionExpression="hlsManifestKey",
        )
        item = resp.get("Item")
        if not item:
            return None
        return item.get("hlsManifestKey")
