"""Pydantic models for uploads, transcoding jobs, job-state events, and signed credentials."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LessonRef(BaseModel):
    """Catalog coordinates of one lesson (parsed from an upload key or output prefix)."""

    model_config = ConfigDict(frozen=True)

    course_id: str
    lesson_id: str


class UploadDescriptor(BaseModel):
    """One finished upload: bucket + key, plus the lesson it belongs to."""

    bucket: str
    key: str = Field(..., description="Decoded object key, e.g. uploads/raw/{courseId}/{lessonId}.mp4")
    course_id: str
    lesson_id: str
    file_extension: str


# --- Transcoding job ---

class AbrConstraints(BaseModel):
    """Bounds for the automated ABR rendition ladder chosen by the transcoding service."""

    model_config = ConfigDict(frozen=True)

    max_renditions: int = Field(4, ge=1)
    min_bitrate: int = Field(600_000, gt=0, description="bits per second")
    max_bitrate: int = Field(8_000_000, gt=0, description="bits per second")


class JobRequest(BaseModel):
    """What gets submitted for one upload. output_prefix depends only on (course_id, lesson_id)."""

    model_config = ConfigDict(frozen=True)

    input_location: str = Field(..., description="s3://bucket/key of the raw upload")
    output_prefix: str = Field(..., description="courses/{courseId}/{lessonId}")
    service_role_identity: str = Field(..., description="IAM role ARN the service assumes")
    abr_constraints: AbrConstraints = Field(default_factory=AbrConstraints)


class JobMetadata(BaseModel):
    """
    Routing data echoed back by the transcoding service on completion.

    Serialized with camelCase aliases because that is what lands in the job's
    UserMetadata and what the completion event carries.
    """

    model_config = ConfigDict(populate_by_name=True)

    input_key: str | None = Field(None, alias="inputKey")
    output_prefix: str | None = Field(None, alias="outputPrefix")


class JobStatus(str, Enum):
    """MediaConvert job status as reported in job state change events."""

    SUBMITTED = "SUBMITTED"
    PROGRESSING = "PROGRESSING"
    COMPLETE = "COMPLETE"
    ERROR = "ERROR"
    CANCELED = "CANCELED"


class JobStateChange(BaseModel):
    """The `detail` of a MediaConvert Job State Change event."""

    model_config = ConfigDict(populate_by_name=True)

    status: str
    job_id: str | None = Field(None, alias="jobId")
    user_metadata: JobMetadata = Field(default_factory=JobMetadata, alias="userMetadata")

    @field_validator("user_metadata", mode="before")
    @classmethod
    def _null_metadata_is_empty(cls, value: object) -> object:
        return {} if value is None else value

    @property
    def is_complete(self) -> bool:
        return self.status == JobStatus.COMPLETE.value


class SubmittedJob(BaseModel):
    """Job id and initial status returned by a submission."""

    job_id: str | None = None
    status: str | None = None


# --- Signed credentials ---

class SignedUrl(BaseModel):
    """Signed URL for a single asset; expires_at is Unix seconds."""

    url: str
    expires_at: int = Field(..., serialization_alias="expiresAt")


class SignedCookies(BaseModel):
    """CloudFront signed-cookie triple. Dump with by_alias=True for the cookie names."""

    model_config = ConfigDict(populate_by_name=True)

    policy: str = Field(..., alias="CloudFront-Policy")
    signature: str = Field(..., alias="CloudFront-Signature")
    key_pair_id: str = Field(..., alias="CloudFront-Key-Pair-Id")
