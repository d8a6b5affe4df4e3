"""API route modules."""

from tts_endpoint.api.routes.endpoint import router as endpoint_router
from tts_endpoint.api.routes.health import router as health_router
from tts_endpoint.api.routes.internal import router as internal_router

__all__ = ["endpoint_router", "health_router", "internal_router"]
