"""
Extract (bucket, key) pairs from an S3 event notification delivered to Lambda.

Event shape: Records[].s3.bucket.name and Records[].s3.object.key. Keys are
URL-encoded in the notification; decoding happens in the shared key parser so
raw keys are kept as delivered here.
"""

from typing import Any


def _bucket_key_from_record(record: Any) -> tuple[str, str] | None:
    """(bucket_name, key) from one S3 record; None if the record is malformed."""
    if not isinstance(record, dict):
        return None
    s3_data = record.get("s3")
    if not isinstance(s3_data, dict):
        return None
    bucket_obj = s3_data.get("bucket")
    object_obj = s3_data.get("object")
    if not isinstance(bucket_obj, dict) or not isinstance(object_obj, dict):
        return None
    bucket_name = bucket_obj.get("name")
    key = object_obj.get("key")
    if not isinstance(bucket_name, str) or not isinstance(key, str):
        return None
    if not bucket_name or not key:
        return None
    return (bucket_name, key)


def upload_records_from_event(event: dict[str, Any]) -> list[tuple[str, str] | None]:
    """
    One entry per record in the event, in order.

    Malformed records map to None so the caller can log and skip them without
    losing their position in the batch.
    """
    records = event.get("Records") or []
    if not isinstance(records, list):
        return []
    return [_bucket_key_from_record(r) for r in records]
