"""Unit tests for core entities."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from screenvid.core.entities.extraction_request import ExtractionMode, ExtractionRequest
from screenvid.core.entities.video_metadata import (
    VideoMetadata,
    VideoMetadataOverride,
    VideoMetadataRecord,
)

CREATED = datetime(2024, 10, 19, 2, 51, 20, tzinfo=timezone.utc)


@pytest.fixture
def metadata() -> VideoMetadata:
    return VideoMetadata(
        creation_time=CREATED,
        fps=30.0,
        duration=90.5,
        device_name=None,
        name="/recordings/cam_1_2024-10-19_02-51-20.mp4",
    )


class TestVideoMetadata:
    """Tests for VideoMetadata entity."""

    def test_defaults(self):
        md = VideoMetadata(creation_time=CREATED)
        assert md.fps == 30.0
        assert md.duration == 0.0
        assert md.device_name is None
        assert md.name is None

    def test_naive_creation_time_is_taken_as_utc(self):
        md = VideoMetadata(creation_time=datetime(2024, 1, 1, 12, 0, 0))
        assert md.creation_time == datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def test_aware_creation_time_is_normalised_to_utc(self):
        plus_two = timezone(timedelta(hours=2))
        md = VideoMetadata(creation_time=datetime(2024, 1, 1, 14, 0, 0, tzinfo=plus_two))
        assert md.creation_time.utcoffset() == timedelta(0)
        assert md.creation_time.hour == 12

    def test_to_record_keeps_every_field(self, metadata):
        metadata.device_name = "monitor_1"
        record = metadata.to_record()

        assert isinstance(record, VideoMetadataRecord)
        assert record.to_dict() == {
            "creation_time": CREATED,
            "fps": 30.0,
            "duration": 90.5,
            "device_name": "monitor_1",
            "name": "/recordings/cam_1_2024-10-19_02-51-20.mp4",
        }


class TestVideoMetadataOverride:
    """Tests for VideoMetadataOverride.apply_to."""

    def test_fps_only_leaves_other_fields(self, metadata):
        VideoMetadataOverride(fps=60.0).apply_to(metadata)

        assert metadata.fps == 60.0
        assert metadata.creation_time == CREATED
        assert metadata.duration == 90.5
        assert metadata.device_name is None
        assert metadata.name == "/recordings/cam_1_2024-10-19_02-51-20.mp4"

    def test_applying_twice_equals_applying_once(self, metadata):
        override = VideoMetadataOverride(fps=24.0, device_name="screen 2")
        once = VideoMetadata(**vars(metadata))
        override.apply_to(once)

        twice = VideoMetadata(**vars(metadata))
        override.apply_to(twice)
        override.apply_to(twice)

        assert once == twice

    def test_field_order_does_not_matter(self, metadata):
        first = VideoMetadata(**vars(metadata))
        VideoMetadataOverride(fps=24.0).apply_to(first)
        VideoMetadataOverride(duration=3.0).apply_to(first)

        second = VideoMetadata(**vars(metadata))
        VideoMetadataOverride(duration=3.0).apply_to(second)
        VideoMetadataOverride(fps=24.0).apply_to(second)

        assert first == second

    def test_all_fields(self, metadata):
        new_time = datetime(2025, 1, 1, tzinfo=timezone.utc)
        VideoMetadataOverride(
            creation_time=new_time,
            fps=15.0,
            duration=1.0,
            device_name="monitor_2",
            name="renamed.mp4",
        ).apply_to(metadata)

        assert metadata == VideoMetadata(
            creation_time=new_time,
            fps=15.0,
            duration=1.0,
            device_name="monitor_2",
            name="renamed.mp4",
        )

    def test_apply_returns_same_instance(self, metadata):
        assert VideoMetadataOverride(fps=1.0).apply_to(metadata) is metadata

    def test_is_empty(self):
        assert VideoMetadataOverride().is_empty is True
        assert VideoMetadataOverride(name="x").is_empty is False


class TestExtractionRequest:
    """Tests for ExtractionRequest entity."""

    def test_defaults_to_pipe_mode(self):
        req = ExtractionRequest(source_path="/tmp/a.mp4")
        assert req.mode is ExtractionMode.PIPE
        assert req.offset_index == 0

    def test_high_quality_requires_output_dir(self):
        with pytest.raises(ValueError):
            ExtractionRequest(source_path="/tmp/a.mp4", mode=ExtractionMode.HIGH_QUALITY)

    def test_source_exists(self, video_file):
        assert ExtractionRequest(source_path=str(video_file)).source_exists is True
        assert ExtractionRequest(source_path=str(video_file) + ".gone").source_exists is False
