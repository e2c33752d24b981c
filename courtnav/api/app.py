"""
FastAPI application factory.

* Registers routes for courts, directions, the embedded surface and admin.
* Opens / closes the shared routing HTTP client via lifespan events.
* Applies rate-limiting middleware.
* Swagger / OpenAPI UI available at ``/docs``.
"""

from contextlib import asynccontextmanager
import logging

import httpx
from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from courtnav.api.middleware import limiter
from courtnav.api.routes import admin, courts, directions, surface
from courtnav.config import settings
from courtnav.services.routing import OSRMClient, RouteService

logging.basicConfig(level=settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the routing client on startup; close it on shutdown."""
    async with httpx.AsyncClient(headers={"User-Agent": "courtnav/1.0"}) as http:
        app.state.route_service = RouteService(
            OSRMClient(
                http,
                settings.osrm_base_url,
                profile=settings.osrm_profile,
                timeout_seconds=settings.routing_timeout_seconds,
            ),
            fallback_speed_kmh=settings.fallback_speed_kmh,
        )
        yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="CourtNav API",
        description=(
            "Location-aware navigation for the court map: court markers, "
            "directions with a great-circle fallback when the routing engine "
            "is down, and a WebSocket bridge to the embedded map surface."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Routers
    app.include_router(courts.router, prefix="/api/v1")
    app.include_router(directions.router, prefix="/api/v1")
    app.include_router(surface.router, prefix="/api/v1")
    app.include_router(admin.router, prefix="/api/v1")

    return app
