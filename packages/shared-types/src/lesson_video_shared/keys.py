"""
Upload, output-prefix and manifest key format and parsers.

Single source of truth: video-encoder parses upload keys and builds output
prefixes, lesson-metadata parses output prefixes and builds manifest keys,
video-access builds the signed-cookie resource path. No duplicate parsing
logic elsewhere.

Upload key format:   uploads/raw/{course_id}/{lesson_id}.{ext}
Output prefix:       courses/{course_id}/{lesson_id}
HLS manifest key:    courses/{course_id}/{lesson_id}/{lesson_id}.m3u8

MediaConvert names the master playlist after the input file's base name, so
the manifest key follows from the upload key without asking the service.

Parser behaviour: Invalid keys return None. Callers must check and handle accordingly.
"""

import re
from urllib.parse import unquote_plus

from .models import LessonRef, UploadDescriptor

UPLOAD_KEY_PREFIX = "uploads/raw/"
OUTPUT_KEY_PREFIX = "courses/"
MANIFEST_EXTENSION = ".m3u8"

_UPLOAD_KEY_RE = re.compile(r"^uploads/raw/([^/]+)/([^/]+)\.([^./]+)$")
_OUTPUT_PREFIX_RE = re.compile(r"^courses/([^/]+)/([^/]+)$")


def _match_upload_key(key: str) -> re.Match[str] | None:
    return _UPLOAD_KEY_RE.match(unquote_plus(key))


def parse_upload_key(key: str) -> LessonRef | None:
    """
    Parse a raw upload object key into course_id and lesson_id.

    The key is URL-decoded first ('+' becomes a space) because S3 event
    notifications deliver object keys encoded.

    Args:
        key: Object key (e.g. uploads/raw/course-1/lesson-1.mp4), encoded or not.

    Returns:
        LessonRef if the key matches uploads/raw/{course_id}/{lesson_id}.{ext},
        otherwise None.
    """
    match = _match_upload_key(key)
    if not match:
        return None
    return LessonRef(course_id=match.group(1), lesson_id=match.group(2))


def parse_upload_descriptor(bucket: str, key: str) -> UploadDescriptor | None:
    """Same as parse_upload_key but keeps the bucket, decoded key and file extension."""
    match = _match_upload_key(key)
    if not match:
        return None
    return UploadDescriptor(
        bucket=bucket,
        key=unquote_plus(key),
        course_id=match.group(1),
        lesson_id=match.group(2),
        file_extension=match.group(3),
    )


def generate_output_prefix(course_id: str, lesson_id: str) -> str:
    """Output prefix for a lesson's HLS files: courses/{course_id}/{lesson_id} (no trailing slash)."""
    return f"{OUTPUT_KEY_PREFIX}{course_id}/{lesson_id}"


def generate_hls_manifest_key(course_id: str, lesson_id: str) -> str:
    """Master playlist key: courses/{course_id}/{lesson_id}/{lesson_id}.m3u8."""
    return f"{generate_output_prefix(course_id, lesson_id)}/{lesson_id}{MANIFEST_EXTENSION}"


def parse_output_prefix(output_prefix: str) -> LessonRef | None:
    """
    Parse an output prefix (as echoed in job metadata) back into course_id and lesson_id.

    Expected format: courses/{course_id}/{lesson_id}

    Returns:
        LessonRef if the prefix is valid, otherwise None.
    """
    match = _OUTPUT_PREFIX_RE.match(output_prefix)
    if not match:
        return None
    return LessonRef(course_id=match.group(1), lesson_id=match.group(2))


def course_resource_path(course_id: str) -> str:
    """Path pattern covering every manifest and segment of a course: courses/{course_id}/*."""
    return f"{OUTPUT_KEY_PREFIX}{course_id}/*"
