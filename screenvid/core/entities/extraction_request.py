"""Frame extraction request entity."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


class ExtractionMode(str, Enum):
    PIPE = "pipe"
    DISK = "disk"
    HIGH_QUALITY = "high_quality"
    BULK = "bulk"


@dataclass(frozen=True)
class ExtractionRequest:
    """One frame extraction call.

    ``offset_index`` is milliseconds in pipe mode and a frame index in the disk
    modes; it is ignored in bulk mode.
    """

    source_path: str
    offset_index: int = 0
    mode: ExtractionMode = ExtractionMode.PIPE
    output_dir: Optional[str] = None

    @property
    def source_exists(self) -> bool:
        return Path(self.source_path).exists()

    def __post_init__(self) -> None:
        if self.mode is ExtractionMode.HIGH_QUALITY and not self.output_dir:
            raise ValueError("high quality extraction requires an output_dir")
