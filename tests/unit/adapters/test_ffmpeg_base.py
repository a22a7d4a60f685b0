"""Unit tests for executable resolution and FFmpegProcessRunner."""
from __future__ import annotations

import subprocess
from unittest.mock import patch

import pytest

from screenvid.adapters.outbound.ffmpeg.ffmpeg_base import (
    FFmpegProcessRunner,
    derive_ffprobe_path,
    locate_ffmpeg,
)
from screenvid.core.exceptions import (
    ProcessFailedError,
    ProcessSpawnError,
    ProcessTimeoutError,
    ToolNotFoundError,
)

from conftest import make_result


class TestLocateFFmpeg:
    def test_configured_path_wins(self):
        with patch("shutil.which") as which:
            assert locate_ffmpeg("/opt/ff/bin/ffmpeg") == "/opt/ff/bin/ffmpeg"
        which.assert_not_called()

    def test_path_lookup(self):
        with patch("shutil.which", return_value="/usr/bin/ffmpeg"):
            assert locate_ffmpeg() == "/usr/bin/ffmpeg"

    def test_not_found(self):
        with patch("shutil.which", return_value=None):
            with pytest.raises(ToolNotFoundError):
                locate_ffmpeg()

    def test_not_found_is_a_spawn_error(self):
        assert issubclass(ToolNotFoundError, ProcessSpawnError)


class TestDeriveFFprobePath:
    @pytest.mark.parametrize(
        "ffmpeg, ffprobe",
        [
            ("/opt/ff/bin/ffmpeg", "/opt/ff/bin/ffprobe"),
            ("/opt/ff/bin/ffmpeg.exe", "/opt/ff/bin/ffprobe.exe"),
            ("ffmpeg", "ffprobe"),
            ("/usr/local/bin/ffmpeg-6", "/usr/local/bin/ffprobe-6"),
        ],
    )
    def test_sibling(self, ffmpeg, ffprobe):
        assert derive_ffprobe_path(ffmpeg) == ffprobe


class TestProcessResult:
    def test_check_passes_on_zero(self):
        result = make_result(stdout="x")
        assert result.check("boom") is result

    def test_check_raises_with_stderr(self):
        result = make_result(returncode=1, stderr="Invalid data found when processing input")
        with pytest.raises(ProcessFailedError) as exc_info:
            result.check("ffmpeg process failed")
        assert exc_info.value.returncode == 1
        assert "Invalid data found" in str(exc_info.value)

    def test_text_decoding_is_lenient(self):
        assert make_result(stderr=b"\xff ok").stderr_text.endswith(" ok")


class TestFFmpegProcessRunner:
    """Tests for FFmpegProcessRunner with subprocess.run patched."""

    @pytest.mark.asyncio
    async def test_run_ffmpeg_prefixes_executable(self):
        runner = FFmpegProcessRunner(ffmpeg_path="/opt/ff/ffmpeg")
        completed = subprocess.CompletedProcess(args=[], returncode=0, stdout=b"out", stderr=b"")
        with patch("subprocess.run", return_value=completed) as run:
            result = await runner.run_ffmpeg(["-version"])

        cmd = run.call_args.args[0]
        assert cmd == ["/opt/ff/ffmpeg", "-version"]
        assert result.ok
        assert result.stdout == b"out"
        assert result.args == ("/opt/ff/ffmpeg", "-version")

    @pytest.mark.asyncio
    async def test_run_ffprobe_uses_sibling(self):
        runner = FFmpegProcessRunner(ffmpeg_path="/opt/ff/ffmpeg")
        completed = subprocess.CompletedProcess(args=[], returncode=0, stdout=b"{}", stderr=b"")
        with patch("subprocess.run", return_value=completed) as run:
            await runner.run_ffprobe(["-v", "quiet", "a.mp4"])

        assert run.call_args.args[0][0] == "/opt/ff/ffprobe"

    @pytest.mark.asyncio
    async def test_nonzero_exit_is_returned_not_raised(self):
        runner = FFmpegProcessRunner(ffmpeg_path="ffmpeg")
        completed = subprocess.CompletedProcess(args=[], returncode=1, stdout=None, stderr=b"bad")
        with patch("subprocess.run", return_value=completed):
            result = await runner.run_ffmpeg(["-i", "x"])

        assert result.returncode == 1
        assert result.stdout == b""
        assert result.stderr_text == "bad"

    @pytest.mark.asyncio
    async def test_spawn_failure(self):
        runner = FFmpegProcessRunner(ffmpeg_path="/missing/ffmpeg")
        with patch("subprocess.run", side_effect=FileNotFoundError("no such file")):
            with pytest.raises(ProcessSpawnError):
                await runner.run_ffmpeg(["-version"])

    @pytest.mark.asyncio
    async def test_timeout(self):
        runner = FFmpegProcessRunner(ffmpeg_path="ffmpeg", timeout=0.5)
        exc = subprocess.TimeoutExpired(cmd=["ffmpeg"], timeout=0.5, stderr=b"frame=  10")
        with patch("subprocess.run", side_effect=exc) as run:
            with pytest.raises(ProcessTimeoutError) as exc_info:
                await runner.run_ffmpeg(["-i", "x"])

        assert run.call_args.kwargs["timeout"] == 0.5
        assert exc_info.value.stderr == "frame=  10"

    def test_construction_does_not_resolve_executable(self):
        with patch("shutil.which", return_value=None) as which:
            runner = FFmpegProcessRunner()
            which.assert_not_called()
            with pytest.raises(ToolNotFoundError):
                _ = runner.ffmpeg_path
