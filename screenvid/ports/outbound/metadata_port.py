"""Port for resolving video metadata."""
from __future__ import annotations
from typing import TYPE_CHECKING, Protocol, runtime_checkable
if TYPE_CHECKING:
    from screenvid.core.entities.video_metadata import VideoMetadata


@runtime_checkable
class VideoMetadataPort(Protocol):
    async def resolve(self, video_path: str) -> VideoMetadata: ...
