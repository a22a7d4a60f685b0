"""Port for frame extraction from video files."""
from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable
if TYPE_CHECKING:
    from PIL import Image


@runtime_checkable
class FrameExtractionPort(Protocol):
    async def extract_frame(self, file_path: str, offset_index: int) -> str: ...
    async def extract_frame_from_video(self, file_path: str, offset_index: int) -> str: ...
    async def extract_high_quality_frame(self, file_path: str, offset_index: int, output_dir: Path) -> str: ...
    async def extract_frames_from_video(self, video_path: Path, output_dir: Optional[Path] = None) -> list[Image.Image]: ...
