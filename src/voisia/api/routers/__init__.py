"""API router exports"""

from .commands import router as commands_router
from .health import router as health_router

__all__ = ["commands_router", "health_router"]
