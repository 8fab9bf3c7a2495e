"""Lambda: MediaConvert completion -> lesson hlsManifestKey."""
