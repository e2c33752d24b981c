"""
Tests for the route service: OSRM decoding and the great-circle fallback.

The routing engine is replaced with ``httpx.MockTransport`` so every
failure mode can be produced without network access.
"""

import math

import httpx
import pytest

from courtnav.domain.distance import haversine_km
from courtnav.domain.entities import Coordinate
from courtnav.domain.errors import RoutingServiceError
from courtnav.services.routing import OSRMClient, great_circle_route
from tests.helpers import USER_AT, osrm_ok, route_service, timeout_handler

DEST = Coordinate(10.31, 123.90)


# ── Road route ────────────────────────────────────────────────────────


class TestOSRMRoute:
    @pytest.mark.asyncio
    async def test_decodes_lng_lat_geometry(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json=osrm_ok([[123.89, 10.30], [123.895, 10.305], [123.90, 10.31]]),
            )

        route = await route_service(handler).route(USER_AT, DEST)

        assert route.is_approximate is False
        assert route.distance_meters == 1800.0
        assert route.duration_seconds == 300.0
        assert route.geometry == (
            Coordinate(10.30, 123.89),
            Coordinate(10.305, 123.895),
            Coordinate(10.31, 123.90),
        )

        request = seen[0]
        assert request.url.path == "/route/v1/driving/123.89,10.3;123.9,10.31"
        assert request.url.params["overview"] == "full"
        assert request.url.params["geometries"] == "geojson"

    def test_route_url_strips_trailing_slash(self):
        client = OSRMClient(httpx.AsyncClient(), "https://osrm.test/", profile="foot")
        assert client.route_url(USER_AT, DEST) == (
            "https://osrm.test/route/v1/foot/123.89,10.3;123.9,10.31"
        )

    @pytest.mark.asyncio
    async def test_client_raises_on_no_route(self):
        def handler(request):
            return httpx.Response(200, json={"code": "NoRoute", "routes": []})

        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        with pytest.raises(RoutingServiceError, match="NoRoute"):
            await OSRMClient(http, "https://osrm.test").fetch_route(USER_AT, DEST)


# ── Fallback ──────────────────────────────────────────────────────────


def _json(body):
    return lambda request: httpx.Response(200, json=body)


class TestFallback:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "handler",
        [
            timeout_handler,
            _json({"code": "NoRoute", "routes": []}),
            _json({"code": "Ok", "routes": []}),
            _json({"code": "Ok", "routes": [{"distance": 10}]}),
            _json(osrm_ok([[123.89, 10.30]])),
            _json(osrm_ok([[123.89, 10.30], [123.90, 10.31]], distance=-1.0)),
            _json(["not", "an", "object"]),
            _json({"code": "Ok", "routes": 5}),
            _json({"code": "Ok", "routes": {"a": 1}}),
            _json({"code": "Ok", "routes": [5]}),
            _json(osrm_ok([[123.89, 10.30, 0.0], [123.90, 10.31, 0.0]])),
            _json(osrm_ok([[123.89, 10.30], [200.0, 95.0]])),
            lambda request: httpx.Response(500, text="<html>Internal Server Error</html>"),
        ],
        ids=[
            "timeout",
            "no-route",
            "empty-routes",
            "missing-geometry",
            "single-point",
            "negative-distance",
            "non-object",
            "routes-not-a-list",
            "routes-is-object",
            "route-not-an-object",
            "three-value-points",
            "out-of-range-point",
            "html-500",
        ],
    )
    async def test_failures_give_straight_line(self, handler):
        route = await route_service(handler).route(USER_AT, DEST)

        assert route.is_approximate is True
        assert route.geometry == (USER_AT, DEST)
        assert route.distance_meters == pytest.approx(haversine_km(USER_AT, DEST) * 1000)

    @pytest.mark.asyncio
    async def test_connection_error_falls_back(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        route = await route_service(handler).route(USER_AT, DEST)
        assert route.is_approximate is True

    @pytest.mark.asyncio
    async def test_closed_client_falls_back(self):
        service = route_service(lambda request: httpx.Response(200, json=osrm_ok([])))
        await service.client.http.aclose()

        route = await service.route(USER_AT, DEST)

        assert route.is_approximate is True
        assert route.geometry == (USER_AT, DEST)

    @pytest.mark.asyncio
    async def test_unexpected_handler_error_falls_back(self):
        def handler(request):
            raise RuntimeError("transport torn down")

        route = await route_service(handler).route(USER_AT, DEST)
        assert route.is_approximate is True

    def test_one_degree_fallback_duration(self):
        origin, dest = Coordinate(10.0, 123.0), Coordinate(10.0, 124.0)
        route = great_circle_route(origin, dest)

        assert route.distance_km == pytest.approx(109.6, abs=1.0)
        assert abs(route.duration_minutes - 219) <= 1
        assert route.duration_seconds == route.duration_minutes * 60

    def test_duration_uses_configured_speed(self):
        slow = great_circle_route(USER_AT, DEST, speed_kmh=30.0)
        fast = great_circle_route(USER_AT, DEST, speed_kmh=60.0)

        km = haversine_km(USER_AT, DEST)
        assert slow.duration_minutes == math.ceil(km / 30 * 60)
        assert fast.duration_minutes == math.ceil(km / 60 * 60)

    def test_same_point_route(self):
        route = great_circle_route(USER_AT, USER_AT)
        assert route.distance_meters == 0.0
        assert route.duration_seconds == 0.0
        assert len(route.geometry) == 2

    @pytest.mark.asyncio
    async def test_every_route_is_drawable(self):
        pairs = [
            (Coordinate(0, 0), Coordinate(0, 0)),
            (Coordinate(-33.86, 151.21), Coordinate(51.5, -0.12)),
            (Coordinate(89.9, 10), Coordinate(-89.9, -170)),
            (USER_AT, DEST),
        ]
        service = route_service(timeout_handler)
        for origin, dest in pairs:
            route = await service.route(origin, dest)
            assert route.distance_meters >= 0
            assert len(route.geometry) >= 2
