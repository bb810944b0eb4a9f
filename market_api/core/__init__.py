"""
Application wiring: lifespan, CORS and middlewares.
"""

from .cors import configure_cors
from .lifespan import lifespan
from .middlewares import register_middlewares

__all__ = [
    "configure_cors",
    "lifespan",
    "register_middlewares",
]
