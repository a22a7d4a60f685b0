"""Port for merging video segments."""
from __future__ import annotations
from pathlib import Path
from typing import Protocol, Sequence, runtime_checkable


@runtime_checkable
class SegmentMergePort(Protocol):
    async def validate_media(self, file_path: str) -> None: ...
    async def merge(self, video_paths: Sequence[str], output_dir: Path) -> str: ...
