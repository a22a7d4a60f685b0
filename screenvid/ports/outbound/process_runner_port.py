"""Port for invoking the external FFmpeg/FFprobe executables."""
from __future__ import annotations
from typing import TYPE_CHECKING, Protocol, runtime_checkable
if TYPE_CHECKING:
    from screenvid.adapters.outbound.ffmpeg.ffmpeg_base import ProcessResult


@runtime_checkable
class ProcessRunnerPort(Protocol):
    async def run_ffmpeg(self, args: list[str]) -> ProcessResult: ...
    async def run_ffprobe(self, args: list[str]) -> ProcessResult: ...
