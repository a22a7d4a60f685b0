"""DTOs for segment merge requests."""
from __future__ import annotations

from pydantic import BaseModel, Field


class MergeVideosRequest(BaseModel):
    """Ordered segments to concatenate; order is kept in the output."""

    video_paths: list[str] = Field(default_factory=list)
    output_dir: str = ""


class MergeVideosResponse(BaseModel):
    video_path: str
