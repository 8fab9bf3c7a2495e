"""API routers for video-access (course cookies, lesson URLs)."""

from .video_access import router as video_access_router

__all__ = ["video_access_router"]
