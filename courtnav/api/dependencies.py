"""FastAPI dependency injection helpers."""

from sqlalchemy.ext.asyncio import AsyncSession
from starlette.requests import HTTPConnection

from courtnav.config import settings
from courtnav.domain.content import MapContentGenerator, Padding
from courtnav.domain.entities import Coordinate
from courtnav.infrastructure.database import async_session_factory
from courtnav.services.routing import RouteService


async def get_db() -> AsyncSession:  # type: ignore[misc]
    """Yield an async DB session; commit on success, rollback on error."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def get_route_service(conn: HTTPConnection) -> RouteService:
    """The app-wide route service created in the lifespan handler."""
    return conn.app.state.route_service


def build_generator() -> MapContentGenerator:
    return MapContentGenerator(
        default_center=Coordinate(settings.default_center_lat, settings.default_center_lng),
        browse_zoom=settings.browse_zoom,
        directions_zoom=settings.directions_zoom,
        focus_zoom=settings.focus_zoom,
        padding=Padding(
            top=settings.camera_padding_top,
            bottom=settings.camera_padding_bottom,
            left=settings.camera_padding_left,
            right=settings.camera_padding_right,
        ),
        halo_radius_m=settings.accuracy_halo_radius_m,
    )
