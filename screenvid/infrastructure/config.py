"""
screenvid configuration using Pydantic Settings.
Every section can be overridden through environment variables or a ``.env`` file.
"""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

# Load .env before any BaseSettings subclass reads env vars
load_dotenv()


class FFmpegSettings(BaseSettings):
    path: str = ""
    # None means no limit on a single tool invocation.
    timeout_seconds: Optional[float] = None

    model_config = {"env_prefix": "FFMPEG_"}


class FrameSettings(BaseSettings):
    temp_dir: str = str(Path(tempfile.gettempdir()) / "screenvid_frames")
    retention_seconds: int = 3600
    preview_scale: float = 0.75
    preview_quality: int = 10
    high_quality_width: int = 3840
    high_quality_height: int = 2160
    bulk_fps_ceiling: float = 10.0

    model_config = {"env_prefix": "FRAMES_"}


class MetadataSettings(BaseSettings):
    default_fps: float = 30.0
    default_duration: float = 0.0

    model_config = {"env_prefix": "METADATA_"}


class MergeSettings(BaseSettings):
    output_dir: str = "./merged"

    model_config = {"env_prefix": "MERGE_"}


class LoggingSettings(BaseSettings):
    level: str = "INFO"

    model_config = {"env_prefix": "LOG_"}


class Settings(BaseSettings):
    """Root settings aggregating all configuration sections."""

    app_env: str = "development"

    ffmpeg: FFmpegSettings = Field(default_factory=FFmpegSettings)
    frames: FrameSettings = Field(default_factory=FrameSettings)
    metadata: MetadataSettings = Field(default_factory=MetadataSettings)
    merge: MergeSettings = Field(default_factory=MergeSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    def as_config_dict(self) -> dict:
        """Plain dict form consumed by the adapters."""
        return {
            "ffmpeg": {
                "path": self.ffmpeg.path,
                "timeout_seconds": self.ffmpeg.timeout_seconds,
            },
            "frames": {
                "temp_dir": self.frames.temp_dir,
                "retention_seconds": self.frames.retention_seconds,
                "preview_scale": self.frames.preview_scale,
                "preview_quality": self.frames.preview_quality,
                "high_quality_width": self.frames.high_quality_width,
                "high_quality_height": self.frames.high_quality_height,
                "bulk_fps_ceiling": self.frames.bulk_fps_ceiling,
            },
            "metadata": {
                "default_fps": self.metadata.default_fps,
                "default_duration": self.metadata.default_duration,
            },
            "merge": {
                "output_dir": self.merge.output_dir,
            },
            "logging": {
                "level": self.logging.level,
            },
        }
