"""
HTTP routers. Thin controllers: parse the request, call a service, return its DTO.
"""

from .auth import router as auth_router
from .health import router as health_router
from .members import router as members_router
from .oauth import router as oauth_router
from .products import router as products_router

__all__ = [
    "auth_router",
    "health_router",
    "members_router",
    "oauth_router",
    "products_router",
]
