"""
Directions endpoint
===================

GET /api/v1/directions -- road route between two points, or the
                          great-circle estimate when the routing engine
                          cannot answer.  Never fails for valid input.
"""

from fastapi import APIRouter, Depends, Query, Request

from courtnav.api.dependencies import get_route_service
from courtnav.api.middleware import limiter
from courtnav.api.schemas import RouteResponse
from courtnav.domain.entities import Coordinate
from courtnav.services.routing import RouteService

router = APIRouter(prefix="/directions", tags=["directions"])


@router.get("", response_model=RouteResponse, summary="Route between two points")
@limiter.limit("60/minute")
async def get_directions(
    request: Request,
    origin_lat: float = Query(..., ge=-90, le=90),
    origin_lng: float = Query(..., ge=-180, le=180),
    dest_lat: float = Query(..., ge=-90, le=90),
    dest_lng: float = Query(..., ge=-180, le=180),
    routes: RouteService = Depends(get_route_service),
):
    route = await routes.route(
        Coordinate(origin_lat, origin_lng), Coordinate(dest_lat, dest_lng)
    )
    return RouteResponse.from_route(route)
