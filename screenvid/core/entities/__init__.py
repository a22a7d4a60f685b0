from screenvid.core.entities.extraction_request import ExtractionMode, ExtractionRequest
from screenvid.core.entities.video_metadata import (
    VideoMetadata,
    VideoMetadataOverride,
    VideoMetadataRecord,
)

__all__ = [
    "ExtractionMode", "ExtractionRequest",
    "VideoMetadata", "VideoMetadataOverride", "VideoMetadataRecord",
]
