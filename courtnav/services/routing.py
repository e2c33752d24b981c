"""
Route Service
=============

1. Ask an OSRM-compatible routing engine for a road route
   (``/route/v1/{profile}/{lng1},{lat1};{lng2},{lat2}?overview=full&geometries=geojson``).
2. On *any* failure -- transport error, timeout, non-``Ok`` code, empty
   route list, malformed body -- fall back to a straight great-circle
   segment:

   * geometry  = ``[origin, destination]``
   * distance  = haversine (R = 6 371 km)
   * duration  = ``ceil(distance_km / speed_kmh * 60)`` minutes, with the
     speed a configurable assumption (30 km/h by default), not an estimate.

``RouteService.route`` never raises: directions must always render
something even when the routing engine is down.
"""

from __future__ import annotations

import logging
import math
import time
from typing import Any

import httpx

from courtnav.domain.distance import haversine_km
from courtnav.domain.entities import Coordinate, Route
from courtnav.domain.errors import RoutingServiceError

logger = logging.getLogger(__name__)


def great_circle_route(
    origin: Coordinate, destination: Coordinate, speed_kmh: float = 30.0
) -> Route:
    """Approximate two-point route used when no road route is available."""
    distance_km = haversine_km(origin, destination)
    minutes = math.ceil(distance_km / speed_kmh * 60)
    return Route(
        distance_meters=distance_km * 1000.0,
        duration_seconds=minutes * 60.0,
        geometry=(origin, destination),
        is_approximate=True,
    )


class OSRMClient:
    """
    Thin adapter over the OSRM ``/route`` endpoint.

    Converts internal (lat, lng) to OSRM's ``lng,lat`` order and back, and
    normalises every failure into ``RoutingServiceError``.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        base_url: str,
        profile: str = "driving",
        timeout_seconds: float = 6.0,
    ):
        self.http = http
        self.base_url = base_url.rstrip("/")
        self.profile = profile
        self.timeout_seconds = timeout_seconds

    def route_url(self, origin: Coordinate, destination: Coordinate) -> str:
        coords = f"{origin.lng},{origin.lat};{destination.lng},{destination.lat}"
        return f"{self.base_url}/route/v1/{self.profile}/{coords}"

    async def fetch_route(self, origin: Coordinate, destination: Coordinate) -> Route:
        started = time.perf_counter()
        try:
            resp = await self.http.get(
                self.route_url(origin, destination),
                params={"overview": "full", "geometries": "geojson"},
                timeout=self.timeout_seconds,
            )
            data = resp.json()
        except httpx.HTTPError as exc:
            raise RoutingServiceError(f"{type(exc).__name__}: {exc}") from exc
        except ValueError as exc:
            raise RoutingServiceError(f"Invalid JSON from routing engine: {exc}") from exc

        route = self._parse(data)
        logger.info(
            "OSRM route distance=%.0fm duration=%.0fs points=%d latency=%.1fms",
            route.distance_meters,
            route.duration_seconds,
            len(route.geometry),
            (time.perf_counter() - started) * 1000,
        )
        return route

    @staticmethod
    def _parse(data: Any) -> Route:
        if not isinstance(data, dict):
            raise RoutingServiceError("Routing engine returned a non-object body")
        if data.get("code") != "Ok":
            raise RoutingServiceError(
                f"Routing engine code={data.get('code')!r}: {data.get('message', '')}"
            )
        routes = data.get("routes") or []
        if not isinstance(routes, list):
            raise RoutingServiceError("Routing engine returned a non-list routes field")
        if not routes:
            raise RoutingServiceError("Routing engine returned no routes")

        try:
            best = routes[0]
            geometry = tuple(
                Coordinate(float(lat), float(lng))
                for lng, lat in best["geometry"]["coordinates"]
            )
            distance = float(best["distance"])
            duration = float(best["duration"])
        except (KeyError, TypeError, ValueError) as exc:
            raise RoutingServiceError(f"Malformed route: {exc}") from exc

        if len(geometry) < 2:
            raise RoutingServiceError("Route geometry has fewer than two points")
        if distance < 0 or duration < 0:
            raise RoutingServiceError("Route has negative distance or duration")

        return Route(
            distance_meters=distance,
            duration_seconds=duration,
            geometry=geometry,
            is_approximate=False,
        )


class RouteService:
    """Road route when available, great-circle estimate otherwise."""

    def __init__(self, client: OSRMClient, fallback_speed_kmh: float = 30.0):
        self.client = client
        self.fallback_speed_kmh = fallback_speed_kmh

    async def route(self, origin: Coordinate, destination: Coordinate) -> Route:
        try:
            return await self.client.fetch_route(origin, destination)
        except RoutingServiceError as exc:
            logger.warning("Routing engine unavailable, using straight line: %s", exc)
        except Exception as exc:
            logger.warning(
                "Routing request failed unexpectedly, using straight line: %s: %s",
                type(exc).__name__,
                exc,
            )
        return great_circle_route(origin, destination, self.fallback_speed_kmh)
