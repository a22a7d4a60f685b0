"""Inbound port for video metadata, frame and merge operations."""
from __future__ import annotations
from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable
if TYPE_CHECKING:
    from PIL import Image
    from screenvid.application.dto.merge_request import MergeVideosRequest, MergeVideosResponse
    from screenvid.application.dto.metadata_overrides import VideoMetadataOverrides
    from screenvid.core.entities.extraction_request import ExtractionRequest
    from screenvid.core.entities.video_metadata import VideoMetadata


@runtime_checkable
class VideoMediaUseCase(Protocol):
    async def get_video_metadata(self, video_path: str, overrides: Optional[VideoMetadataOverrides] = None) -> VideoMetadata: ...
    async def extract(self, request: ExtractionRequest) -> str | list[Image.Image]: ...
    async def validate_media(self, file_path: str) -> None: ...
    async def merge_videos(self, request: MergeVideosRequest) -> MergeVideosResponse: ...
