"""
Market API main application.
Entry point for the FastAPI server.

Run:
    uvicorn market_api.main:app --reload
"""

from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded

from market_api import __version__
from market_api.core import configure_cors, lifespan, register_middlewares
from market_api.routers import (
    auth_router,
    health_router,
    members_router,
    oauth_router,
    products_router,
)
from shared.security.rate_limit import limiter, rate_limit_exceeded_handler


def create_app() -> FastAPI:
    app = FastAPI(
        title="Market API",
        description="Marketplace member identity, credentials and products",
        version=__version__,
        lifespan=lifespan,
    )

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    register_middlewares(app)
    configure_cors(app)

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(members_router)
    app.include_router(oauth_router)
    app.include_router(products_router)

    return app


app = create_app()
