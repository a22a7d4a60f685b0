"""Shared test fixtures for all tests."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Callable, Optional

import pytest
from PIL import Image

from screenvid.adapters.outbound.ffmpeg.ffmpeg_base import ProcessResult


def make_result(
    returncode: int = 0,
    stdout: bytes | str = b"",
    stderr: bytes | str = b"",
    args: tuple[str, ...] = (),
) -> ProcessResult:
    if isinstance(stdout, str):
        stdout = stdout.encode()
    if isinstance(stderr, str):
        stderr = stderr.encode()
    return ProcessResult(args=args, returncode=returncode, stdout=stdout, stderr=stderr)


def probe_json(
    r_frame_rate: Optional[str] = "30/1",
    duration: Optional[str] = "12.5",
    creation_time: Optional[str] = None,
) -> str:
    fmt: dict = {}
    if duration is not None:
        fmt["duration"] = duration
    if creation_time is not None:
        fmt["tags"] = {"creation_time": creation_time}
    streams = []
    if r_frame_rate is not None:
        streams.append({"codec_type": "video", "r_frame_rate": r_frame_rate})
    return json.dumps({"format": fmt, "streams": streams})


def write_jpeg(path: Path, color: tuple[int, int, int] = (200, 30, 30)) -> None:
    Image.new("RGB", (16, 9), color).save(path, format="JPEG")


Handler = Callable[[list[str]], ProcessResult]


class FakeRunner:
    """Scripted stand-in for FFmpegProcessRunner; records every invocation."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, list[str]]] = []
        self.ffmpeg: Handler = lambda args: make_result()
        self.ffprobe: Handler = lambda args: make_result(stdout=probe_json())

    async def run_ffmpeg(self, args: list[str]) -> ProcessResult:
        self.calls.append(("ffmpeg", list(args)))
        return self.ffmpeg(list(args))

    async def run_ffprobe(self, args: list[str]) -> ProcessResult:
        self.calls.append(("ffprobe", list(args)))
        return self.ffprobe(list(args))

    def calls_to(self, tool: str) -> list[list[str]]:
        return [args for name, args in self.calls if name == tool]


def arg_after(args: list[str], flag: str) -> str:
    return args[args.index(flag) + 1]


# ── Runner Fixtures ────────────────────────────────────────────────────────

@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


# ── Media File Fixtures ────────────────────────────────────────────────────

@pytest.fixture
def video_file(tmp_path: Path) -> Path:
    path = tmp_path / "recording.mp4"
    path.write_bytes(b"\x00\x00\x00\x18ftypmp42")
    return path


@pytest.fixture
def named_video_file(tmp_path: Path) -> Path:
    path = tmp_path / "cam_1_2024-10-19_02-51-20.mp4"
    path.write_bytes(b"\x00\x00\x00\x18ftypmp42")
    return path


@pytest.fixture
def frames_config(tmp_path: Path) -> dict:
    return {"frames": {"temp_dir": str(tmp_path / "frames")}}
