"""FrameRate value object parsed from FFprobe ``N/D`` ratio strings."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class FrameRate:
    """Immutable frame-rate ratio such as ``30000/1001``."""

    numerator: float
    denominator: float

    def __post_init__(self) -> None:
        if self.denominator == 0:
            raise ValueError("frame rate denominator must be nonzero")

    @property
    def fps(self) -> float:
        return self.numerator / self.denominator

    @classmethod
    def parse(cls, ratio: Optional[str]) -> Optional[FrameRate]:
        """Parse ``"N/D"``; return ``None`` for anything that is not a usable rate."""
        if not isinstance(ratio, str):
            return None
        parts = ratio.strip().split("/")
        if len(parts) != 2:
            return None
        try:
            numerator, denominator = float(parts[0]), float(parts[1])
        except ValueError:
            return None
        if denominator == 0:
            return None
        rate = cls(numerator, denominator)
        fps = rate.fps
        if not math.isfinite(fps) or fps <= 0:
            return None
        return rate


def parse_frame_rate(ratio: Optional[str]) -> Optional[float]:
    rate = FrameRate.parse(ratio)
    return rate.fps if rate is not None else None
