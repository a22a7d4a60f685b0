"""Best-effort removal of stale extracted frame files."""

from __future__ import annotations

import asyncio
import logging
import os
import time
from pathlib import Path
from typing import Optional

from screenvid.ports.outbound.task_queue_port import TaskQueuePort

logger = logging.getLogger(__name__)

CLEANUP_TASK = "cleanup_frames"
DEFAULT_RETENTION_SECONDS = 3600


class FrameArtifactJanitor:
    """Implements :class:`ArtifactCleanupPort` for a local frames directory.

    Files older than ``retention_seconds`` (by modification time) are deleted.
    A failure on one entry is logged and the scan continues. When a task queue is
    supplied, :meth:`schedule` runs :meth:`cleanup` on it without waiting.
    """

    def __init__(
        self,
        retention_seconds: float = DEFAULT_RETENTION_SECONDS,
        task_queue: Optional[TaskQueuePort] = None,
    ) -> None:
        self.retention_seconds = retention_seconds
        self._task_queue = task_queue
        if task_queue is not None:
            task_queue.register(CLEANUP_TASK, self._cleanup_task)

    # -- ArtifactCleanupPort implementation --------------------------------------

    async def cleanup(self, directory: Path) -> int:
        """Delete stale files directly inside *directory*; return how many went.

        Raises:
            OSError: *directory* itself cannot be listed.
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._cleanup_sync, Path(directory))

    def schedule(self, directory: Path) -> Optional[str]:
        """Queue a cleanup of *directory* and return the task id immediately."""
        if self._task_queue is None:
            logger.debug("No task queue configured; skipping cleanup of %s", directory)
            return None
        return self._task_queue.enqueue(CLEANUP_TASK, {"directory": str(directory)})

    # -- private helpers -------------------------------------------------------

    async def _cleanup_task(self, directory: str) -> int:
        return await self.cleanup(Path(directory))

    def _cleanup_sync(self, directory: Path) -> int:
        threshold = time.time() - self.retention_seconds
        removed = 0

        with os.scandir(directory) as entries:
            for entry in entries:
                try:
                    if not entry.is_file(follow_symlinks=False):
                        continue
                    if entry.stat(follow_symlinks=False).st_mtime >= threshold:
                        continue
                    os.remove(entry.path)
                except OSError as exc:
                    logger.error("Failed to remove old frame %s: %s", entry.path, exc)
                    continue
                removed += 1
                logger.debug("Removed old frame %s", entry.path)

        if removed:
            logger.info("Removed %d stale frame(s) from %s", removed, directory)
        return removed
