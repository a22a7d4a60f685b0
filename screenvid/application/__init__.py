from screenvid.application.video_media_service import VideoMediaService

__all__ = ["VideoMediaService"]
