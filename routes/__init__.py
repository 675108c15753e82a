"""API routers."""

from .health import router as health_router
from .keywords import router as keywords_router
from .payload import router as payload_router
from .transcribe import router as transcribe_router

__all__ = ["health_router", "keywords_router", "payload_router", "transcribe_router"]
