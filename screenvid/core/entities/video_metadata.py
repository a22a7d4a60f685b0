"""VideoMetadata entity and its sparse override patch."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Optional

DEFAULT_FPS = 30.0
DEFAULT_DURATION = 0.0


@dataclass
class VideoMetadataRecord:
    """Plain record handed to the persistence layer."""

    creation_time: datetime
    fps: float
    duration: float
    device_name: Optional[str] = None
    name: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class VideoMetadata:
    """Resolved temporal and technical metadata of one video file.

    ``creation_time`` is always an aware UTC datetime. Instances are produced once
    per resolution and are only changed afterwards through
    :meth:`VideoMetadataOverride.apply_to`.
    """

    creation_time: datetime
    fps: float = DEFAULT_FPS
    duration: float = DEFAULT_DURATION
    device_name: Optional[str] = None
    name: Optional[str] = None

    def __post_init__(self) -> None:
        self.creation_time = _as_utc(self.creation_time)

    def to_record(self) -> VideoMetadataRecord:
        return VideoMetadataRecord(
            creation_time=self.creation_time,
            fps=self.fps,
            duration=self.duration,
            device_name=self.device_name,
            name=self.name,
        )


@dataclass(frozen=True)
class VideoMetadataOverride:
    """Sparse patch for a previously resolved :class:`VideoMetadata`.

    Only fields that are not ``None`` are written. Fields are independent of each
    other, so applying the same override twice gives the same result as once.
    """

    creation_time: Optional[datetime] = None
    fps: Optional[float] = None
    duration: Optional[float] = None
    device_name: Optional[str] = None
    name: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return all(value is None for value in asdict(self).values())

    def apply_to(self, metadata: VideoMetadata) -> VideoMetadata:
        if self.creation_time is not None:
            metadata.creation_time = _as_utc(self.creation_time)
        if self.fps is not None:
            metadata.fps = self.fps
        if self.duration is not None:
            metadata.duration = self.duration
        if self.device_name is not None:
            metadata.device_name = self.device_name
        if self.name is not None:
            metadata.name = self.name
        return metadata


def _as_utc(value: datetime) -> datetime:
    # Naive datetimes are taken to already be UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
