from screenvid.ports.outbound.artifact_cleanup_port import ArtifactCleanupPort
from screenvid.ports.outbound.frame_extraction_port import FrameExtractionPort
from screenvid.ports.outbound.metadata_port import VideoMetadataPort
from screenvid.ports.outbound.process_runner_port import ProcessRunnerPort
from screenvid.ports.outbound.segment_merge_port import SegmentMergePort
from screenvid.ports.outbound.task_queue_port import TaskQueuePort

__all__ = [
    "ProcessRunnerPort",
    "VideoMetadataPort",
    "FrameExtractionPort",
    "SegmentMergePort",
    "ArtifactCleanupPort",
    "TaskQueuePort",
]
