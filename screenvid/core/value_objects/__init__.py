from screenvid.core.value_objects.frame_rate import FrameRate, parse_frame_rate

__all__ = ["FrameRate", "parse_frame_rate"]
