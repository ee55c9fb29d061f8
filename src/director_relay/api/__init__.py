"""
Director Relay API endpoints.
"""

from .discover import router as discover_router
from .auth import router as auth_router
from .director import router as director_router
from .health import router as health_router
from .static import router as static_router
from .security import require_basic_auth

__all__ = [
    "discover_router", "auth_router", "director_router",
    "health_router", "static_router", "require_basic_auth",
]
