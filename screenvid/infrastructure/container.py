"""
Dependency container.
Wires the FFmpeg adapters, janitor and background queue from settings.
"""
from __future__ import annotations

import logging
from typing import Optional

from screenvid.infrastructure.config import Settings

logger = logging.getLogger(__name__)


class ApplicationContainer:
    """Simplified container that builds concrete instances from settings.

    Usage::

        container = ApplicationContainer(settings)
        service = container.video_media_service()
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self._cache: dict[str, object] = {}

    def _get_or_create(self, key: str, factory):
        if key not in self._cache:
            self._cache[key] = factory()
        return self._cache[key]

    # ── Public accessors ──────────────────────────────────────────

    def process_runner(self):
        def build():
            from screenvid.adapters.outbound.ffmpeg.ffmpeg_base import FFmpegProcessRunner
            return FFmpegProcessRunner(
                ffmpeg_path=self.settings.ffmpeg.path or None,
                timeout=self.settings.ffmpeg.timeout_seconds,
            )
        return self._get_or_create("process_runner", build)

    def task_queue(self):
        def build():
            from screenvid.adapters.outbound.queue.in_process_queue import InProcessTaskQueue
            return InProcessTaskQueue()
        return self._get_or_create("task_queue", build)

    def frame_janitor(self):
        def build():
            from screenvid.adapters.outbound.persistence.frame_janitor import FrameArtifactJanitor
            return FrameArtifactJanitor(
                retention_seconds=self.settings.frames.retention_seconds,
                task_queue=self.task_queue(),
            )
        return self._get_or_create("frame_janitor", build)

    def metadata_resolver(self):
        def build():
            from screenvid.adapters.outbound.ffmpeg.ffmpeg_metadata import FFprobeMetadataResolver
            return FFprobeMetadataResolver(
                self.process_runner(), config=self.settings.as_config_dict()
            )
        return self._get_or_create("metadata_resolver", build)

    def frame_extraction(self):
        def build():
            from screenvid.adapters.outbound.ffmpeg.ffmpeg_frames import FFmpegFrameExtractor
            return FFmpegFrameExtractor(
                self.process_runner(),
                janitor=self.frame_janitor(),
                config=self.settings.as_config_dict(),
            )
        return self._get_or_create("frame_extraction", build)

    def segment_merger(self):
        def build():
            from screenvid.adapters.outbound.ffmpeg.ffmpeg_merger import FFmpegSegmentMerger
            return FFmpegSegmentMerger(self.process_runner())
        return self._get_or_create("segment_merger", build)

    def video_media_service(self):
        def build():
            from screenvid.application.video_media_service import VideoMediaService
            return VideoMediaService(
                metadata=self.metadata_resolver(),
                frames=self.frame_extraction(),
                merger=self.segment_merger(),
                default_merge_dir=self.settings.merge.output_dir,
            )
        return self._get_or_create("video_media_service", build)
