"""
Test doubles and builders shared by the test modules.

Kept out of ``conftest.py`` so test modules can import them directly
without loading conftest a second time under another module name.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Callable, Optional

import httpx
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from courtnav.bridge.surface import RenderSurface
from courtnav.domain.content import MapContent
from courtnav.domain.entities import Coordinate, Court, UserPosition
from courtnav.infrastructure.models import CourtModel
from courtnav.services.position import LocationBackend
from courtnav.services.routing import OSRMClient, RouteService


# ── Test DB (SQLite in-memory) ────────────────────────────────────────

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"

# StaticPool: every session shares the one in-memory database
test_engine = create_async_engine(
    TEST_DB_URL,
    echo=False,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionFactory = async_sessionmaker(
    test_engine, class_=AsyncSession, expire_on_commit=False
)


COURT_ROWS = [
    dict(id="c1", name="Ayala Courts", city="Cebu City", latitude=10.31, longitude=123.90, rating=4.8, phone_number="+63 32 888 1001"),
    dict(id="c2", name="Banilad Hub", city="Cebu City", latitude=10.342, longitude=123.911, rating=4.5),
    dict(id="c3", name="Lapu-Lapu Beach Courts", city="Lapu-Lapu City", latitude=10.31, longitude=123.979, rating=4.6),
    dict(id="c4", name="Closed Court", city="Cebu City", latitude=10.329, longitude=123.889, is_active=False),
    dict(id="c5", name="Unmapped Court", address="Somewhere", latitude=None, longitude=None),
]


async def seed_courts(session: AsyncSession) -> None:
    for row in COURT_ROWS:
        session.add(CourtModel(**{"is_active": True, **row}))
    await session.commit()


# ── Domain samples ────────────────────────────────────────────────────

# Scenario pair: the user is ~1.5 km south-west of court c1.
USER_AT = Coordinate(10.30, 123.89)


def make_court(court_id: str = "c1", lat: float = 10.31, lng: float = 123.90, **kw) -> Court:
    defaults = dict(
        name=f"Court {court_id}",
        location="Cebu City",
        rating=4.5,
        image_url=f"https://img.example.com/{court_id}.jpg",
        phone_number="+63 32 888 1001",
    )
    defaults.update(kw)
    return Court(id=court_id, coordinate=Coordinate(lat, lng), **defaults)


def make_position(coord: Coordinate = USER_AT, accuracy: float = 12.0) -> UserPosition:
    return UserPosition(
        coordinate=coord,
        accuracy_meters=accuracy,
        captured_at=datetime(2026, 10, 17, 9, 0, tzinfo=timezone.utc),
    )


# ── Fakes ─────────────────────────────────────────────────────────────


class FakeLocationBackend(LocationBackend):
    """Scriptable permission + sensor.  ``gate`` holds the fix until set."""

    def __init__(
        self,
        granted: bool = True,
        position: Optional[UserPosition] = None,
        error: Optional[Exception] = None,
    ):
        self.granted = granted
        self.position = position or make_position()
        self.error = error
        self.gate: Optional[asyncio.Event] = None
        self.permission_prompts = 0
        self.fix_requests = 0

    async def request_permission(self) -> bool:
        self.permission_prompts += 1
        await asyncio.sleep(0)
        return self.granted

    async def current_position(self) -> UserPosition:
        self.fix_requests += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.position


class RecordingSurface(RenderSurface):
    def __init__(self):
        self.rendered: list[MapContent] = []

    @property
    def last(self) -> MapContent:
        return self.rendered[-1]

    async def render(self, content: MapContent) -> None:
        self.rendered.append(content)


# ── Routing engine stubs ──────────────────────────────────────────────


def osrm_ok(coords: list[list[float]], distance: float = 1800.0, duration: float = 300.0) -> dict:
    return {
        "code": "Ok",
        "routes": [
            {
                "distance": distance,
                "duration": duration,
                "geometry": {"type": "LineString", "coordinates": coords},
            }
        ],
    }


def route_service(
    handler: Callable[[httpx.Request], httpx.Response], speed_kmh: float = 30.0
) -> RouteService:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return RouteService(OSRMClient(http, "https://osrm.test"), fallback_speed_kmh=speed_kmh)


def timeout_handler(request: httpx.Request) -> httpx.Response:
    raise httpx.ReadTimeout("timed out", request=request)
