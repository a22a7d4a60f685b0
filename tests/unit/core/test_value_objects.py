"""Unit tests for core value objects."""
from __future__ import annotations

import pytest

from screenvid.core.value_objects.frame_rate import FrameRate, parse_frame_rate


class TestFrameRate:
    """Tests for FrameRate value object."""

    def test_ntsc_ratio(self):
        assert parse_frame_rate("30000/1001") == pytest.approx(29.97, abs=0.001)

    def test_integer_ratio(self):
        assert parse_frame_rate("25/1") == 25.0

    def test_fractional_rate(self):
        assert parse_frame_rate("1/2") == 0.5

    @pytest.mark.parametrize(
        "ratio",
        ["0/0", "30/0", "0/1", "30", "30/1/1", "abc/1", "30/x", "", "/", "-30/1", "inf/1", None],
    )
    def test_unusable_ratios(self, ratio):
        assert parse_frame_rate(ratio) is None
        assert FrameRate.parse(ratio) is None

    def test_parse_keeps_parts(self):
        rate = FrameRate.parse(" 60000/1001 ")
        assert rate is not None
        assert rate.numerator == 60000
        assert rate.denominator == 1001

    def test_zero_denominator_rejected_on_construction(self):
        with pytest.raises(ValueError):
            FrameRate(30, 0)

    def test_immutable(self):
        rate = FrameRate(30, 1)
        with pytest.raises(AttributeError):
            rate.numerator = 60  # type: ignore[misc]
