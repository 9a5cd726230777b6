"""API routers."""

from .health import router as health_router
from .upload import audio_validation_handler
from .upload import router as upload_router

__all__ = ["audio_validation_handler", "health_router", "upload_router"]
