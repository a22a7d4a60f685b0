"""
FFmpeg/FFprobe path resolution and subprocess execution.
Every external tool invocation in screenvid goes through :class:`FFmpegProcessRunner`.
"""
from __future__ import annotations

import asyncio
import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from screenvid.core.exceptions import (
    ProcessFailedError,
    ProcessSpawnError,
    ProcessTimeoutError,
    ToolNotFoundError,
)

logger = logging.getLogger(__name__)


def locate_ffmpeg(configured: Optional[str] = None) -> str:
    """Resolve the ffmpeg executable. An explicit path wins over ``PATH`` lookup."""
    if configured:
        return configured

    path = shutil.which("ffmpeg")
    if path:
        return path

    raise ToolNotFoundError(
        "ffmpeg executable not found; install FFmpeg or set FFMPEG_PATH"
    )


def derive_ffprobe_path(ffmpeg_path: str) -> str:
    """Return the ffprobe binary that sits next to *ffmpeg_path*.

    ``/opt/ff/bin/ffmpeg`` -> ``/opt/ff/bin/ffprobe`` and
    ``C:/ff/ffmpeg.exe`` -> ``C:/ff/ffprobe.exe``.
    """
    path = Path(ffmpeg_path)
    name = path.name.replace("ffmpeg", "ffprobe")
    if name == path.name:
        name = "ffprobe" + path.suffix
    if str(path.parent) in ("", "."):
        return name
    return str(path.with_name(name))


@dataclass(frozen=True)
class ProcessResult:
    """Captured outcome of one tool invocation."""

    args: tuple[str, ...]
    returncode: int
    stdout: bytes = b""
    stderr: bytes = b""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def stdout_text(self) -> str:
        return self.stdout.decode("utf-8", errors="replace")

    @property
    def stderr_text(self) -> str:
        return self.stderr.decode("utf-8", errors="replace")

    def check(self, message: str) -> ProcessResult:
        """Raise :class:`ProcessFailedError` with captured stderr on non-zero exit."""
        if not self.ok:
            raise ProcessFailedError(message, returncode=self.returncode, stderr=self.stderr_text)
        return self


class FFmpegProcessRunner:
    """Runs ffmpeg/ffprobe as subprocesses without blocking the event loop.

    Satisfies :class:`~screenvid.ports.outbound.process_runner_port.ProcessRunnerPort`.
    The executable is located lazily on first use so that constructing the runner
    never touches the filesystem.
    """

    def __init__(
        self,
        ffmpeg_path: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self._configured_path = ffmpeg_path
        self._timeout = timeout
        self._ffmpeg_path: Optional[str] = None

    @property
    def ffmpeg_path(self) -> str:
        if self._ffmpeg_path is None:
            self._ffmpeg_path = locate_ffmpeg(self._configured_path)
            logger.debug("Using ffmpeg at %s", self._ffmpeg_path)
        return self._ffmpeg_path

    @property
    def ffprobe_path(self) -> str:
        return derive_ffprobe_path(self.ffmpeg_path)

    # -- port interface ---------------------------------------------------------

    async def run_ffmpeg(self, args: list[str]) -> ProcessResult:
        return await self.run([self.ffmpeg_path, *args])

    async def run_ffprobe(self, args: list[str]) -> ProcessResult:
        return await self.run([self.ffprobe_path, *args])

    async def run(self, cmd: list[str]) -> ProcessResult:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._run_sync, cmd)

    # -- private helpers --------------------------------------------------------

    def _run_sync(self, cmd: list[str]) -> ProcessResult:
        logger.debug("Running: %s", " ".join(cmd))
        try:
            completed = subprocess.run(cmd, capture_output=True, timeout=self._timeout)
        except subprocess.TimeoutExpired as exc:
            stderr = exc.stderr or b""
            raise ProcessTimeoutError(
                f"{Path(cmd[0]).name} timed out after {self._timeout}s",
                stderr=stderr.decode("utf-8", errors="replace"),
            ) from exc
        except OSError as exc:
            raise ProcessSpawnError(f"failed to start {cmd[0]}: {exc}") from exc

        result = ProcessResult(
            args=tuple(cmd),
            returncode=completed.returncode,
            stdout=completed.stdout or b"",
            stderr=completed.stderr or b"",
        )
        if not result.ok:
            logger.debug("%s exited with %d", Path(cmd[0]).name, result.returncode)
        return result
