"""Typed parsing of ``ffprobe -print_format json`` output."""
from __future__ import annotations

import logging
import math
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, Field, ValidationError, field_validator

from screenvid.core.exceptions import MalformedOutputError
from screenvid.core.value_objects.frame_rate import parse_frame_rate

logger = logging.getLogger(__name__)


def _as_optional_str(value: Any) -> Any:
    # ffprobe emits numbers as strings, but tolerate bare JSON numbers too.
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


LooseStr = Annotated[Optional[str], BeforeValidator(_as_optional_str)]


class ProbeTags(BaseModel):
    model_config = {"extra": "ignore"}

    creation_time: LooseStr = None


class ProbeFormat(BaseModel):
    model_config = {"extra": "ignore"}

    duration: LooseStr = None
    tags: Optional[ProbeTags] = None


class ProbeStream(BaseModel):
    model_config = {"extra": "ignore"}

    codec_type: Optional[str] = None
    r_frame_rate: LooseStr = None


class ProbeOutput(BaseModel):
    """Transient view over one ffprobe run; consumed immediately, never stored."""

    model_config = {"extra": "ignore"}

    format: ProbeFormat = Field(default_factory=ProbeFormat)
    streams: list[ProbeStream] = Field(default_factory=list)

    @field_validator("format", mode="before")
    @classmethod
    def _null_format(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("streams", mode="before")
    @classmethod
    def _null_streams(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def duration(self) -> Optional[float]:
        """Container duration in seconds, ``None`` when absent or unparsable."""
        raw = self.format.duration
        if raw is None:
            return None
        try:
            value = float(raw)
        except ValueError:
            logger.debug("Unparsable duration %r", raw)
            return None
        if not math.isfinite(value) or value < 0:
            return None
        return value

    @property
    def frame_rates(self) -> list[str]:
        """Frame-rate ratio strings of the video streams, in stream order."""
        return [
            s.r_frame_rate
            for s in self.streams
            if s.r_frame_rate is not None and s.codec_type in (None, "video")
        ]

    @property
    def fps(self) -> Optional[float]:
        """Frame rate of the first video stream, ``None`` when unusable."""
        rates = self.frame_rates
        if not rates:
            return None
        return parse_frame_rate(rates[0])

    @property
    def creation_time_tag(self) -> Optional[str]:
        if self.format.tags is None:
            return None
        return self.format.tags.creation_time


def parse_probe_output(text: str | bytes) -> ProbeOutput:
    """Parse raw ffprobe JSON into a :class:`ProbeOutput`.

    Raises:
        MalformedOutputError: the text is not JSON, or its overall structure is
            not the object layout ffprobe produces.
    """
    if isinstance(text, bytes):
        text = text.decode("utf-8", errors="replace")
    if not text.strip():
        raise MalformedOutputError("ffprobe produced no output")
    try:
        return ProbeOutput.model_validate_json(text)
    except ValidationError as exc:
        raise MalformedOutputError(f"unexpected ffprobe output: {exc}") from exc
