"""screenvid - metadata and frame extraction for screen recordings via FFmpeg."""

__version__ = "0.1.0"
