"""FFmpeg adapter for single-frame and bulk frame extraction.

Four entry points share one failure taxonomy:

* :meth:`FFmpegFrameExtractor.extract_frame` streams a scaled JPEG through
  stdout and returns it base64 encoded. The offset is in milliseconds.
* :meth:`FFmpegFrameExtractor.extract_frame_from_video` writes a JPEG into the
  shared frames directory and schedules a background cleanup of that directory.
* :meth:`FFmpegFrameExtractor.extract_high_quality_frame` writes a 4K PNG into a
  caller-owned directory.
* :meth:`FFmpegFrameExtractor.extract_frames_from_video` samples a whole video
  and returns decoded Pillow images.

In the two disk modes the offset is a frame index and the seek time is
``offset_index * fps`` seconds.
"""
from __future__ import annotations

import asyncio
import base64
import logging
import tempfile
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from PIL import Image

from screenvid.adapters.outbound.ffmpeg.ffprobe_parser import parse_probe_output
from screenvid.core.exceptions import (
    MalformedOutputError,
    MediaNotFoundError,
    OutputMissingError,
)
from screenvid.ports.outbound.artifact_cleanup_port import ArtifactCleanupPort
from screenvid.ports.outbound.process_runner_port import ProcessRunnerPort

logger = logging.getLogger(__name__)

# Default configuration values used when keys are absent.
_DEFAULT_FRAMES_DIR = str(Path(tempfile.gettempdir()) / "screenvid_frames")
_DEFAULT_PREVIEW_SCALE: float = 0.75
_DEFAULT_PREVIEW_QUALITY: int = 10
_DEFAULT_HQ_WIDTH: int = 3840
_DEFAULT_HQ_HEIGHT: int = 2160
_DEFAULT_FPS_CEILING: float = 10.0

# Used when the lightweight fps probe fails.
_FALLBACK_FPS: float = 1.0

_FPS_PROBE_ARGS: tuple[str, ...] = (
    "-v", "quiet",
    "-print_format", "json",
    "-select_streams", "v:0",
    "-show_entries", "stream=r_frame_rate",
)

# Zero padded so a sorted directory listing is also frame order.
_BULK_PATTERN = "frame%06d.jpg"


def format_seek(seconds: float) -> str:
    return f"{seconds:.3f}"


class FFmpegFrameExtractor:
    """Implements FrameExtractionPort using the FFmpeg CLI."""

    def __init__(
        self,
        runner: ProcessRunnerPort,
        janitor: Optional[ArtifactCleanupPort] = None,
        config: Optional[dict[str, Any]] = None,
    ) -> None:
        frames = (config or {}).get("frames", {})
        self.frames_dir = Path(frames.get("temp_dir") or _DEFAULT_FRAMES_DIR)
        self.preview_scale: float = frames.get("preview_scale", _DEFAULT_PREVIEW_SCALE)
        self.preview_quality: int = frames.get("preview_quality", _DEFAULT_PREVIEW_QUALITY)
        self.hq_width: int = frames.get("high_quality_width", _DEFAULT_HQ_WIDTH)
        self.hq_height: int = frames.get("high_quality_height", _DEFAULT_HQ_HEIGHT)
        self.fps_ceiling: float = frames.get("bulk_fps_ceiling", _DEFAULT_FPS_CEILING)
        self._runner = runner
        self._janitor = janitor

    # -- public (port) interface ------------------------------------------------

    async def extract_frame(self, file_path: str, offset_index: int) -> str:
        """Return one frame at *offset_index* milliseconds as base64 JPEG text."""
        await self._require_source(file_path)
        offset_str = format_seek(offset_index / 1000.0)
        logger.debug("Extracting frame from %s at offset %s", file_path, offset_str)

        scale = self.preview_scale
        result = await self._runner.run_ffmpeg([
            "-ss", offset_str,
            "-i", str(file_path),
            "-vf", f"scale=iw*{scale}:ih*{scale}",
            "-vframes", "1",
            "-f", "image2pipe",
            "-c:v", "mjpeg",
            "-q:v", str(self.preview_quality),
            "-",
        ])
        if not result.ok:
            logger.info("ffmpeg error: %s", result.stderr_text)
        result.check("ffmpeg process failed")

        if not result.stdout:
            raise MalformedOutputError("failed to extract frame: no data received")

        return base64.b64encode(result.stdout).decode("ascii")

    async def extract_frame_from_video(self, file_path: str, offset_index: int) -> str:
        """Write the frame at index *offset_index* to the shared frames directory.

        Returns the path of the written JPEG. A cleanup pass over the frames
        directory is scheduled afterwards and not awaited.
        """
        await self._require_source(file_path)
        source_fps = await self.probe_sampling_fps(file_path)
        offset_str = format_seek(offset_index * source_fps)

        await _mkdir(self.frames_dir)
        output_path = self.frames_dir / f"frame_{offset_index}_{uuid.uuid4()}.jpg"

        logger.debug(
            "Extracting frame from %s at offset %s and fps %s to %s",
            file_path, offset_str, source_fps, output_path,
        )
        result = await self._runner.run_ffmpeg([
            "-ss", offset_str,
            "-i", str(file_path),
            "-vf", "scale=iw:ih,format=yuvj420p",
            "-vframes", "1",
            "-c:v", "mjpeg",
            "-strict", "unofficial",
            "-pix_fmt", "yuvj420p",
            "-q:v", str(self.preview_quality),
            "-y",
            str(output_path),
        ])
        if not result.ok:
            logger.info("ffmpeg error: %s", result.stderr_text)
        result.check("ffmpeg process failed")

        if not await _exists(output_path):
            raise OutputMissingError(str(output_path))

        if self._janitor is not None:
            self._janitor.schedule(self.frames_dir)

        return str(output_path)

    async def extract_high_quality_frame(
        self,
        file_path: str,
        offset_index: int,
        output_dir: Path,
    ) -> str:
        """Write a lossless 4K PNG of frame *offset_index* into *output_dir*."""
        await self._require_source(file_path)
        source_fps = await self.probe_fps(file_path)
        frame_time = offset_index * source_fps

        output_dir = Path(output_dir)
        await _mkdir(output_dir)
        micros = int(datetime.now(timezone.utc).timestamp() * 1_000_000)
        output_path = output_dir / f"frame_{micros}_{offset_index}.png"

        result = await self._runner.run_ffmpeg([
            "-y",
            "-loglevel", "error",
            "-ss", format_seek(frame_time),
            "-i", str(file_path),
            "-vframes", "1",
            "-vf", f"scale={self.hq_width}:{self.hq_height}:flags=lanczos",
            "-c:v", "png",
            "-compression_level", "0",
            "-preset", "veryslow",
            "-qscale:v", "1",
            str(output_path),
        ])
        if not result.ok:
            logger.error("FFmpeg failed: %s", result.stderr_text)
        result.check("FFmpeg failed")

        if not await _exists(output_path):
            raise OutputMissingError(str(output_path))
        return str(output_path)

    async def extract_frames_from_video(
        self,
        video_path: Path,
        output_dir: Optional[Path] = None,
    ) -> list[Image.Image]:
        """Sample *video_path* and return the decoded frames in order.

        Sources above the fps ceiling are sampled at 1 fps, slower sources at their
        own rate. Each frame is also saved into *output_dir* when one is given.
        """
        video_path = Path(video_path)
        await self._require_source(str(video_path))

        source_fps = await self.probe_fps(str(video_path))
        target_fps = _FALLBACK_FPS if source_fps > self.fps_ceiling else source_fps

        loop = asyncio.get_running_loop()
        temp = await loop.run_in_executor(
            None, lambda: tempfile.TemporaryDirectory(prefix="screenvid_bulk_")
        )
        try:
            temp_dir = Path(temp.name)
            output_pattern = temp_dir / _BULK_PATTERN
            logger.debug("Extracting frames from %s to %s", video_path, output_pattern)

            result = await self._runner.run_ffmpeg([
                "-i", str(video_path),
                "-vf", f"fps={target_fps:g}",
                "-strict", "unofficial",
                "-c:v", "mjpeg",
                "-q:v", "2",
                "-qmin", "2",
                "-qmax", "4",
                "-vsync", "0",
                "-threads", "2",
                "-y",
                str(output_pattern),
            ])
            result.check("ffmpeg failed")

            frames = await loop.run_in_executor(None, _load_frames, temp_dir, output_dir)
        finally:
            await loop.run_in_executor(None, temp.cleanup)

        if not frames:
            raise MalformedOutputError("no frames were extracted")

        logger.debug("Extracted %d frames", len(frames))
        return frames

    # -- fps probing ------------------------------------------------------------

    async def probe_fps(self, file_path: str) -> float:
        """Frame rate of the first video stream via a stream-only probe.

        Falls back to 1.0 when the probe fails or reports no usable ratio.
        """
        try:
            result = await self._runner.run_ffprobe([*_FPS_PROBE_ARGS, str(file_path)])
            result.check("ffprobe failed")
            fps = parse_probe_output(result.stdout).fps
        except Exception as exc:
            logger.error("Failed to get video fps, using default 1fps: %s", exc)
            return _FALLBACK_FPS

        if fps is None:
            return _FALLBACK_FPS
        logger.debug("Video FPS: %s", fps)
        return fps

    async def probe_sampling_fps(self, file_path: str) -> float:
        """:meth:`probe_fps`, with rates at or above the ceiling folded to 1.0."""
        fps = await self.probe_fps(file_path)
        if fps >= self.fps_ceiling:
            return _FALLBACK_FPS
        return fps

    # -- private helpers --------------------------------------------------------

    @staticmethod
    async def _require_source(file_path: str) -> None:
        if not await _exists(Path(file_path)):
            raise MediaNotFoundError(str(file_path))


async def _exists(path: Path) -> bool:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, path.exists)


async def _mkdir(path: Path) -> None:
    loop = asyncio.get_running_loop()
    await loop.run_in_executor(None, lambda: path.mkdir(parents=True, exist_ok=True))


def _load_frames(frames_dir: Path, output_dir: Optional[Path]) -> list[Image.Image]:
    if output_dir is not None:
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

    frames: list[Image.Image] = []
    for path in sorted(frames_dir.iterdir()):
        if not path.is_file():
            continue
        with Image.open(path) as img:
            img.load()
            frame = img.copy()

        if output_dir is not None:
            dest_path = output_dir / path.name
            logger.debug("Saving frame to disk: %s", dest_path)
            frame.save(dest_path)

        frames.append(frame)
    return frames
