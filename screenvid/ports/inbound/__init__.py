from screenvid.ports.inbound.video_media_use_case import VideoMediaUseCase

__all__ = ["VideoMediaUseCase"]
