from screenvid.application.dto.merge_request import MergeVideosRequest, MergeVideosResponse
from screenvid.application.dto.metadata_overrides import (
    VideoMetadataItem,
    VideoMetadataOverrideFields,
    VideoMetadataOverrides,
)

__all__ = [
    "MergeVideosRequest", "MergeVideosResponse",
    "VideoMetadataItem", "VideoMetadataOverrideFields", "VideoMetadataOverrides",
]
