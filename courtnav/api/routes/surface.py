"""
Embedded surface endpoints
==========================

GET /api/v1/surface/page -- HTML document the embedded surface loads
WS  /api/v1/surface      -- one map-screen session per connection
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession

from courtnav.api.dependencies import build_generator, get_db, get_route_service
from courtnav.api.session import ScreenSession
from courtnav.bridge.renderer import surface_page
from courtnav.config import settings
from courtnav.infrastructure.repositories import CourtRepository
from courtnav.services.routing import RouteService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/surface", tags=["surface"])


@router.get("/page", response_class=HTMLResponse, summary="Surface HTML page")
async def page():
    return HTMLResponse(
        surface_page(
            settings.google_maps_api_key,
            center_lat=settings.default_center_lat,
            center_lng=settings.default_center_lng,
            zoom=settings.browse_zoom,
        )
    )


@router.websocket("")
async def surface_session(
    websocket: WebSocket,
    db: AsyncSession = Depends(get_db),
    routes: RouteService = Depends(get_route_service),
):
    await websocket.accept()
    session = ScreenSession(
        send=websocket.send_json,
        repo=CourtRepository(db),
        routes=routes,
        generator=build_generator(),
        position_timeout_seconds=settings.position_timeout_seconds,
    )
    logger.info("Screen session opened")
    try:
        await session.start()
        while True:
            await session.handle(await websocket.receive_text())
    except WebSocketDisconnect:
        logger.info("Screen session closed by client")
    finally:
        await session.close()
