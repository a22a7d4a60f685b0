"""Custom exception hierarchy for screenvid."""
from __future__ import annotations

from typing import Optional

# Keep error messages readable when FFmpeg dumps a full banner to stderr.
_STDERR_LIMIT = 500


class ScreenVidError(Exception):
    """Base exception for all screenvid errors."""


class MediaNotFoundError(ScreenVidError):
    """Raised when a source media file does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"media file does not exist: {path}")


class ProcessSpawnError(ScreenVidError):
    """Raised when an external tool could not be started."""


class ToolNotFoundError(ProcessSpawnError):
    """Raised when the FFmpeg executable cannot be located."""


class ProcessFailedError(ScreenVidError):
    """Raised when an external tool exits with a non-zero status."""

    def __init__(
        self,
        message: str,
        returncode: Optional[int] = None,
        stderr: str = "",
    ) -> None:
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr.strip()[:_STDERR_LIMIT]
        super().__init__(f"{message}: {detail}" if detail else message)


class ProcessTimeoutError(ProcessFailedError):
    """Raised when an external tool exceeds the configured timeout."""


class InvalidMediaError(ProcessFailedError):
    """Raised when a media file fails the decode-to-null validation."""


class MalformedOutputError(ScreenVidError):
    """Raised when tool output cannot be parsed or is unexpectedly empty."""


class OutputMissingError(ScreenVidError):
    """Raised when a tool reports success but its output file is absent."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"tool reported success, but output file not found: {path}")
