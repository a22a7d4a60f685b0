"""FFmpeg adapter for validating and concatenating recording segments."""
from __future__ import annotations

import asyncio
import logging
import uuid
from pathlib import Path
from typing import Sequence

from screenvid.core.exceptions import (
    InvalidMediaError,
    MediaNotFoundError,
    OutputMissingError,
)
from screenvid.ports.outbound.process_runner_port import ProcessRunnerPort

logger = logging.getLogger(__name__)


def quote_manifest_path(path: str) -> str:
    """Quote *path* for one ``file '...'`` line of an ffmpeg concat list."""
    return "'" + path.replace("'", "'\\''") + "'"


class FFmpegSegmentMerger:
    """Implements SegmentMergePort using the FFmpeg concat demuxer.

    Segments that fail validation are skipped rather than failing the merge. When
    none survive, the concat step itself fails on the empty list.
    """

    def __init__(self, runner: ProcessRunnerPort) -> None:
        self._runner = runner

    # -- public (port) interface ------------------------------------------------

    async def validate_media(self, file_path: str) -> None:
        """Decode *file_path* to a null sink; raise if it is missing or undecodable."""
        if not await _run_blocking(Path(file_path).exists):
            raise MediaNotFoundError(str(file_path))

        result = await self._runner.run_ffmpeg([
            "-v", "error",
            "-i", str(file_path),
            "-f", "null",
            "-",
        ])
        if not result.ok:
            raise InvalidMediaError(
                f"invalid media file: {file_path}",
                returncode=result.returncode,
                stderr=result.stderr_text,
            )

    async def merge(self, video_paths: Sequence[str], output_dir: Path) -> str:
        """Concatenate the valid segments of *video_paths*, in order, into one mp4.

        Returns the path of the merged file inside *output_dir*.
        """
        logger.info("Merging videos: %s", list(video_paths))
        output_dir = Path(output_dir)
        await _run_blocking(lambda: output_dir.mkdir(parents=True, exist_ok=True))

        output_path = output_dir / f"output_{uuid.uuid4()}.mp4"
        manifest = output_dir / f"input_list_{uuid.uuid4()}.txt"

        try:
            entries = await self._build_manifest(video_paths)
            await _run_blocking(
                manifest.write_text, "".join(entries), encoding="utf-8"
            )

            result = await self._runner.run_ffmpeg([
                "-f", "concat",
                "-safe", "0",
                "-i", str(manifest),
                "-c", "copy",
                "-y",
                str(output_path),
            ])
        finally:
            await _run_blocking(lambda: manifest.unlink(missing_ok=True))

        logger.debug("ffmpeg stdout: %s", result.stdout_text)
        logger.debug("ffmpeg stderr: %s", result.stderr_text)
        result.check("ffmpeg failed to merge videos")

        if not await _run_blocking(output_path.exists):
            raise OutputMissingError(str(output_path))

        logger.info("Videos merged successfully: %s (%d segments)", output_path, len(entries))
        return str(output_path)

    # -- private helpers --------------------------------------------------------

    async def _build_manifest(self, video_paths: Sequence[str]) -> list[str]:
        entries: list[str] = []
        for video_path in video_paths:
            try:
                await self.validate_media(video_path)
            except (MediaNotFoundError, InvalidMediaError) as exc:
                logger.warning("Invalid file in merging, skipping: %s", exc)
                continue
            abs_path = str(Path(video_path).absolute())
            entries.append(f"file {quote_manifest_path(abs_path)}\n")
        return entries


async def _run_blocking(fn, *args, **kwargs):
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, lambda: fn(*args, **kwargs))
