"""DTOs for bulk metadata corrections keyed by file path."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from screenvid.core.entities.video_metadata import VideoMetadataOverride


class VideoMetadataOverrideFields(BaseModel):
    creation_time: Optional[datetime] = None
    fps: Optional[float] = Field(default=None, gt=0)
    duration: Optional[float] = Field(default=None, ge=0)
    device_name: Optional[str] = None
    name: Optional[str] = None

    def to_override(self) -> VideoMetadataOverride:
        return VideoMetadataOverride(**self.model_dump())


class VideoMetadataItem(BaseModel):
    file_path: str
    metadata: VideoMetadataOverrideFields = Field(default_factory=VideoMetadataOverrideFields)


class VideoMetadataOverrides(BaseModel):
    """Bulk-correction payload, e.g. loaded from a JSON file."""

    overrides: list[VideoMetadataItem] = Field(default_factory=list)

    def find(self, file_path: str) -> Optional[VideoMetadataOverride]:
        """Return the override for *file_path*; the last matching item wins."""
        found: Optional[VideoMetadataOverride] = None
        for item in self.overrides:
            if item.file_path == file_path:
                found = item.metadata.to_override()
        return found
