"""FFprobe adapter resolving creation time, fps and duration of a video."""
from __future__ import annotations

import asyncio
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from screenvid.adapters.outbound.ffmpeg.ffprobe_parser import ProbeOutput, parse_probe_output
from screenvid.core.entities.video_metadata import DEFAULT_DURATION, DEFAULT_FPS, VideoMetadata
from screenvid.core.services.creation_time import parse_creation_time_tag, parse_time_from_filename
from screenvid.core.services.fallback_chain import first_available
from screenvid.ports.outbound.process_runner_port import ProcessRunnerPort

logger = logging.getLogger(__name__)

_CREATION_TAG_ARGS: tuple[str, ...] = (
    "-v", "quiet",
    "-print_format", "json",
    "-show_format",
    "-show_streams",
    "-show_entries", "format_tags=creation_time",
)

_TECHNICAL_ARGS: tuple[str, ...] = (
    "-v", "quiet",
    "-print_format", "json",
    "-show_format",
    "-show_streams",
)


class FFprobeMetadataResolver:
    """Implements VideoMetadataPort on top of ffprobe.

    :meth:`resolve` is total: every probe, parse or I/O failure falls through to
    the next source and finally to defaults, so callers never see an exception.
    """

    def __init__(self, runner: ProcessRunnerPort, config: Optional[dict[str, Any]] = None) -> None:
        meta_cfg = (config or {}).get("metadata", {})
        self.default_fps: float = meta_cfg.get("default_fps", DEFAULT_FPS)
        self.default_duration: float = meta_cfg.get("default_duration", DEFAULT_DURATION)
        self._runner = runner

    # -- port interface ---------------------------------------------------------

    async def resolve(self, video_path: str) -> VideoMetadata:
        video_path = str(video_path)
        creation_time = await self.resolve_creation_time(video_path)
        fps, duration = await self.resolve_technical_metadata(video_path)

        metadata = VideoMetadata(
            creation_time=creation_time,
            fps=fps,
            duration=duration,
            device_name=None,
            name=video_path,
        )
        logger.debug(
            "Resolved metadata for %s: created=%s fps=%.3f duration=%.3fs",
            video_path, metadata.creation_time.isoformat(), fps, duration,
        )
        return metadata

    async def resolve_creation_time(self, video_path: str) -> datetime:
        resolved = await first_available(
            [
                ("probe tag", lambda: self.creation_time_from_probe(video_path)),
                ("filename", lambda: self.creation_time_from_filename(video_path)),
                ("filesystem", lambda: self.creation_time_from_filesystem(video_path)),
            ],
            subject=video_path,
        )
        if resolved is None:
            logger.debug("Falling back to current time for creation_time of %s", video_path)
            return datetime.now(timezone.utc)
        return resolved

    async def resolve_technical_metadata(self, video_path: str) -> tuple[float, float]:
        """Return ``(fps, duration)`` from one full probe, with defaults on any failure."""
        try:
            probe = await self._probe(video_path, _TECHNICAL_ARGS)
        except Exception as exc:
            logger.debug("Technical probe failed for %s: %s", video_path, exc)
            return self.default_fps, self.default_duration

        fps = probe.fps
        duration = probe.duration
        return (
            fps if fps is not None else self.default_fps,
            duration if duration is not None else self.default_duration,
        )

    # -- creation time tiers ----------------------------------------------------

    async def creation_time_from_probe(self, video_path: str) -> Optional[datetime]:
        probe = await self._probe(video_path, _CREATION_TAG_ARGS, require_success=True)
        return parse_creation_time_tag(probe.creation_time_tag)

    async def creation_time_from_filename(self, video_path: str) -> Optional[datetime]:
        return parse_time_from_filename(video_path)

    async def creation_time_from_filesystem(self, video_path: str) -> Optional[datetime]:
        loop = asyncio.get_running_loop()
        stat = await loop.run_in_executor(None, os.stat, video_path)
        # st_birthtime is the true creation time where the platform exposes it.
        created = getattr(stat, "st_birthtime", None)
        if created is None:
            created = stat.st_ctime
        return datetime.fromtimestamp(created, tz=timezone.utc)

    # -- private helpers --------------------------------------------------------

    async def _probe(
        self,
        video_path: str,
        args: tuple[str, ...],
        require_success: bool = False,
    ) -> ProbeOutput:
        result = await self._runner.run_ffprobe([*args, video_path])
        if require_success:
            result.check(f"ffprobe failed for {Path(video_path).name}")
        return parse_probe_output(result.stdout)
