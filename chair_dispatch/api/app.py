"""
FastAPI application factory.

* Registers the internal matching route and admin routes.
* Starts / stops the background matching loop via lifespan events.
* Applies rate-limiting middleware.
* Swagger / OpenAPI UI available at ``/docs``.
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from chair_dispatch.api.middleware import limiter
from chair_dispatch.api.routes import admin, internal
from chair_dispatch.config import settings
from chair_dispatch.workers import matcher as _matcher

logging.basicConfig(level=logging.INFO)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the matching loop on startup; stop on shutdown."""
    if settings.matching_loop_enabled:
        await _matcher.start_matching_loop()
    yield
    if settings.matching_loop_enabled:
        await _matcher.stop_matching_loop()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Chair Dispatch API",
        description=(
            "Assigns the oldest unmatched ride to the available chair "
            "with the lowest ETA.  Matching runs on a fixed interval or "
            "on demand through the internal endpoint."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Routers
    app.include_router(internal.router, prefix="/api")
    app.include_router(admin.router, prefix="/api/v1")

    return app
