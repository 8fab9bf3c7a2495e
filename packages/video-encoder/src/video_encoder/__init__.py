"""Lambda: S3 upload -> MediaConvert HLS job."""
