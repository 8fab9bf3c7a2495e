"""
MediaConvert job settings for HLS encoding with Automated ABR.

Automated ABR analyzes the source and picks the rendition ladder (e.g. 360p to
1080p) within the AbrConstraints bounds. ABR requires audio and video in
separate outputs, so the group has exactly two output templates: a video-only
H.264 QVBR output and an audio-only AAC output, joined by one audio group.

Output structure (SINGLE_DIRECTORY):
s3://{output_bucket}/{output_prefix}/
    {lesson_id}.m3u8        master playlist (named after the input base name)
    {lesson_id}_video*.m3u8 / .ts
    {lesson_id}_audio*.m3u8 / .ts

Settings follow https://docs.aws.amazon.com/mediaconvert/latest/ug/example-job-settings.html
"""

from __future__ import annotations

from typing import Any

from lesson_video_shared import AbrConstraints, JobMetadata, JobRequest
from pydantic import BaseModel, ConfigDict, Field

HLS_SEGMENT_LENGTH_SEC = 6
AUDIO_GROUP_ID = "program_audio"
AUDIO_SELECTOR_NAME = "Audio Selector 1"
AUDIO_BITRATE = 128_000
AUDIO_SAMPLE_RATE = 48_000
VIDEO_NAME_MODIFIER = "_video"
AUDIO_NAME_MODIFIER = "_audio"

_AUDIO_PIDS = [482, 483, 484, 485, 486, 487, 488, 489, 490, 491, 492]


class JobConfig(BaseModel):
    """Inputs to the job builder; everything else in the payload is fixed."""

    model_config = ConfigDict(frozen=True)

    input_bucket: str
    input_key: str
    output_bucket: str
    output_prefix: str
    role_arn: str
    abr_constraints: AbrConstraints = Field(default_factory=AbrConstraints)


def _m3u8_container(*, timed_metadata: bool = False) -> dict[str, Any]:
    settings: dict[str, Any] = {
        "AudioFramesPerPes": 4,
        "PcrControl": "PCR_EVERY_PES_PACKET",
        "PmtPid": 480,
        "PrivateMetadataPid": 503,
        "ProgramNumber": 1,
        "PatInterval": 0,
        "PmtInterval": 0,
        "Scte35Source": "NONE",
        "VideoPid": 481,
        "AudioPids": list(_AUDIO_PIDS),
    }
    if timed_metadata:
        settings["TimedMetadataPid"] = 502
    return {"Container": "M3U8", "M3u8Settings": settings}


def _input(input_bucket: str, input_key: str) -> dict[str, Any]:
    return {
        "FileInput": f"s3://{input_bucket}/{input_key}",
        "AudioSelectors": {
            AUDIO_SELECTOR_NAME: {
                "Offset": 0,
                "DefaultSelection": "DEFAULT",
                "ProgramSelection": 1,
            },
        },
        "VideoSelector": {
            "ColorSpace": "FOLLOW",
            "Rotate": "DEGREE_0",
            "AlphaBehavior": "DISCARD",
        },
        "FilterEnable": "AUTO",
        "PsiControl": "USE_PSI",
        "FilterStrength": 0,
        "DeblockFilter": "DISABLED",
        "DenoiseFilter": "DISABLED",
        "InputScanType": "AUTO",
        "TimecodeSource": "ZEROBASED",
    }


def _hls_group_settings(output_bucket: str, output_prefix: str) -> dict[str, Any]:
    return {
        "Type": "HLS_GROUP_SETTINGS",
        "HlsGroupSettings": {
            "ManifestDurationFormat": "FLOATING_POINT",
            "SegmentLength": HLS_SEGMENT_LENGTH_SEC,
            "TimedMetadataId3Period": 10,
            "CaptionLanguageSetting": "OMIT",
            "Destination": f"s3://{output_bucket}/{output_prefix}/",
            "TimedMetadataId3Frame": "PRIV",
            "CodecSpecification": "RFC_4281",
            "OutputSelection": "MANIFESTS_AND_SEGMENTS",
            "ProgramDateTimePeriod": 600,
            "MinSegmentLength": 0,
            "MinFinalSegmentLength": 0,
            "DirectoryStructure": "SINGLE_DIRECTORY",
            "ProgramDateTime": "EXCLUDE",
            "SegmentControl": "SEGMENTED_FILES",
            "ManifestCompression": "NONE",
            "ClientCache": "ENABLED",
            "AudioOnlyHeader": "INCLUDE",
            "StreamInfResolution": "INCLUDE",
        },
    }


def _abr_settings(abr: AbrConstraints) -> dict[str, Any]:
    return {
        "AbrSettings": {
            "MaxRenditions": abr.max_renditions,
            "MaxAbrBitrate": abr.max_bitrate,
            "MinAbrBitrate": abr.min_bitrate,
        },
    }


def _video_output() -> dict[str, Any]:
    """Video-only template; Automated ABR derives every rendition from it."""
    return {
        "ContainerSettings": _m3u8_container(),
        "VideoDescription": {
            "ScalingBehavior": "DEFAULT",
            "TimecodeInsertion": "DISABLED",
            "AntiAlias": "ENABLED",
            "Sharpness": 50,
            "CodecSettings": {
                "Codec": "H_264",
                "H264Settings": {
                    "InterlaceMode": "PROGRESSIVE",
                    "NumberReferenceFrames": 3,
                    "Syntax": "DEFAULT",
                    "Softness": 0,
                    "GopClosedCadence": 1,
                    "GopSize": 60,
                    "Slices": 2,
                    "GopBReference": "DISABLED",
                    "EntropyEncoding": "CABAC",
                    "FramerateControl": "INITIALIZE_FROM_SOURCE",
                    "RateControlMode": "QVBR",
                    "CodecProfile": "MAIN",
                    "Telecine": "NONE",
                    "MinIInterval": 0,
                    "AdaptiveQuantization": "AUTO",
                    "CodecLevel": "AUTO",
                    "FieldEncoding": "PAFF",
                    "SceneChangeDetect": "ENABLED",
                    "QualityTuningLevel": "MULTI_PASS_HQ",
                    "FramerateConversionAlgorithm": "DUPLICATE_DROP",
                    "UnregisteredSeiTimecode": "DISABLED",
                    "GopSizeUnits": "FRAMES",
                    "ParControl": "INITIALIZE_FROM_SOURCE",
                    "NumberBFramesBetweenReferenceFrames": 2,
                    "RepeatPps": "DISABLED",
                    "DynamicSubGop": "STATIC",
                },
            },
            "AfdSignaling": "NONE",
            "DropFrameTimecode": "ENABLED",
            "RespondToAfd": "NONE",
            "ColorMetadata": "INSERT",
        },
        "OutputSettings": {
            "HlsSettings": {
                "AudioGroupId": AUDIO_GROUP_ID,
                "AudioRenditionSets": AUDIO_GROUP_ID,
                "AudioOnlyContainer": "AUTOMATIC",
                "IFrameOnlyManifest": "EXCLUDE",
            },
        },
        "NameModifier": VIDEO_NAME_MODIFIER,
    }


def _audio_output() -> dict[str, Any]:
    """Audio-only output: AAC-LC stereo, constant bitrate."""
    return {
        "ContainerSettings": _m3u8_container(timed_metadata=True),
        "AudioDescriptions": [
            {
                "AudioTypeControl": "FOLLOW_INPUT",
                "AudioSourceName": AUDIO_SELECTOR_NAME,
                "CodecSettings": {
                    "Codec": "AAC",
                    "AacSettings": {
                        "AudioDescriptionBroadcasterMix": "NORMAL",
                        "Bitrate": AUDIO_BITRATE,
                        "RateControlMode": "CBR",
                        "CodecProfile": "LC",
                        "CodingMode": "CODING_MODE_2_0",
                        "RawFormat": "NONE",
                        "SampleRate": AUDIO_SAMPLE_RATE,
                        "Specification": "MPEG4",
                    },
                },
                "LanguageCodeControl": "FOLLOW_INPUT",
            },
        ],
        "OutputSettings": {
            "HlsSettings": {
                "AudioGroupId": AUDIO_GROUP_ID,
                "AudioTrackType": "ALTERNATE_AUDIO_AUTO_SELECT_DEFAULT",
                "AudioOnlyContainer": "AUTOMATIC",
                "IFrameOnlyManifest": "EXCLUDE",
            },
        },
        "NameModifier": AUDIO_NAME_MODIFIER,
    }


def build_job_settings(config: JobConfig) -> dict[str, Any]:
    """
    Build the full CreateJob payload (boto3 mediaconvert.create_job kwargs).

    Pure and deterministic: the same JobConfig always yields an equal payload.
    UserMetadata carries inputKey and outputPrefix verbatim so the completion
    handler can route the result without a job table.
    """
    metadata = JobMetadata(input_key=config.input_key, output_prefix=config.output_prefix)
    return {
        "Role": config.role_arn,
        "Settings": {
            "TimecodeConfig": {"Source": "ZEROBASED"},
            "Inputs": [_input(config.input_bucket, config.input_key)],
            "OutputGroups": [
                {
                    "Name": "Apple HLS",
                    "OutputGroupSettings": _hls_group_settings(
                        config.output_bucket, config.output_prefix
                    ),
                    "AutomatedEncodingSettings": _abr_settings(config.abr_constraints),
                    "Outputs": [_video_output(), _audio_output()],
                },
            ],
        },
        "AccelerationSettings": {"Mode": "PREFERRED"},
        "StatusUpdateInterval": "SECONDS_60",
        "Priority": 0,
        "UserMetadata": metadata.model_dump(by_alias=True),
    }


def build_job_request(config: JobConfig) -> JobRequest:
    """Summary view of what build_job_settings submits (for logging and tests)."""
    return JobRequest(
        input_location=f"s3://{config.input_bucket}/{config.input_key}",
        output_prefix=config.output_prefix,
        service_role_identity=config.role_arn,
        abr_constraints=config.abr_constraints,
    )
