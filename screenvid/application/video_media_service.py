"""
Video media use case: metadata, frame extraction and segment merging.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PIL import Image

from screenvid.application.dto.merge_request import MergeVideosRequest, MergeVideosResponse
from screenvid.application.dto.metadata_overrides import VideoMetadataOverrides
from screenvid.core.entities.extraction_request import ExtractionMode, ExtractionRequest
from screenvid.core.entities.video_metadata import VideoMetadata
from screenvid.core.exceptions import MediaNotFoundError
from screenvid.ports.outbound.frame_extraction_port import FrameExtractionPort
from screenvid.ports.outbound.metadata_port import VideoMetadataPort
from screenvid.ports.outbound.segment_merge_port import SegmentMergePort

logger = logging.getLogger(__name__)


class VideoMediaService:
    """Implements :class:`VideoMediaUseCase` over the metadata, frame and merge ports."""

    def __init__(
        self,
        metadata: VideoMetadataPort,
        frames: FrameExtractionPort,
        merger: SegmentMergePort,
        default_merge_dir: str = "",
    ):
        self._metadata = metadata
        self._frames = frames
        self._merger = merger
        self._default_merge_dir = default_merge_dir

    async def get_video_metadata(
        self,
        video_path: str,
        overrides: Optional[VideoMetadataOverrides] = None,
    ) -> VideoMetadata:
        """Resolve metadata for *video_path*, then apply its override if one exists.

        Never raises for unreadable or missing files; see the resolver's fallbacks.
        """
        metadata = await self._metadata.resolve(video_path)
        if overrides is not None:
            override = overrides.find(str(video_path))
            if override is not None and not override.is_empty:
                override.apply_to(metadata)
                logger.info("Applied metadata override for %s", video_path)
        return metadata

    async def extract(self, request: ExtractionRequest) -> str | list[Image.Image]:
        """Dispatch *request* to the extraction mode it names."""
        if not request.source_exists:
            raise MediaNotFoundError(request.source_path)

        if request.mode is ExtractionMode.PIPE:
            return await self._frames.extract_frame(request.source_path, request.offset_index)
        if request.mode is ExtractionMode.DISK:
            return await self._frames.extract_frame_from_video(
                request.source_path, request.offset_index
            )
        if request.mode is ExtractionMode.HIGH_QUALITY:
            return await self._frames.extract_high_quality_frame(
                request.source_path, request.offset_index, Path(request.output_dir)
            )
        output_dir = Path(request.output_dir) if request.output_dir else None
        return await self._frames.extract_frames_from_video(Path(request.source_path), output_dir)

    async def validate_media(self, file_path: str) -> None:
        await self._merger.validate_media(file_path)

    async def merge_videos(self, request: MergeVideosRequest) -> MergeVideosResponse:
        output_dir = request.output_dir or self._default_merge_dir
        if not output_dir:
            raise ValueError("merge request has no output_dir and no default is configured")
        video_path = await self._merger.merge(request.video_paths, Path(output_dir))
        return MergeVideosResponse(video_path=video_path)
