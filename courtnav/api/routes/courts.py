"""
Court endpoints
===============

GET /api/v1/courts              -- active courts (optional ``q`` search)
GET /api/v1/courts/nearby       -- courts within a radius, nearest first
GET /api/v1/courts/{court_id}   -- one court
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from courtnav.api.dependencies import get_db
from courtnav.api.middleware import limiter
from courtnav.api.schemas import CourtResponse, NearbyCourtResponse
from courtnav.config import settings
from courtnav.domain.distance import courts_within
from courtnav.domain.entities import Coordinate
from courtnav.infrastructure.repositories import CourtRepository

router = APIRouter(prefix="/courts", tags=["courts"])


@router.get("", response_model=list[CourtResponse], summary="List active courts")
@limiter.limit("100/minute")
async def list_courts(
    request: Request,
    q: Optional[str] = Query(None, min_length=1, max_length=100),
    db: AsyncSession = Depends(get_db),
):
    repo = CourtRepository(db)
    courts = await repo.search(q) if q else await repo.list_active()
    return [CourtResponse.from_court(c) for c in courts]


@router.get(
    "/nearby",
    response_model=list[NearbyCourtResponse],
    summary="Courts near a point, nearest first",
)
@limiter.limit("100/minute")
async def nearby_courts(
    request: Request,
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    radius_km: Optional[float] = Query(None, gt=0, le=500),
    db: AsyncSession = Depends(get_db),
):
    courts = await CourtRepository(db).list_active()
    radius = radius_km if radius_km is not None else settings.nearby_radius_km
    return [
        NearbyCourtResponse(
            **CourtResponse.from_court(court).model_dump(),
            distance_km=round(distance, 3),
        )
        for court, distance in courts_within(Coordinate(lat, lng), courts, radius)
    ]


@router.get("/{court_id}", response_model=CourtResponse, summary="Get one court")
@limiter.limit("100/minute")
async def get_court(
    request: Request,
    court_id: str,
    db: AsyncSession = Depends(get_db),
):
    court = await CourtRepository(db).get_by_id(court_id)
    if court is None:
        raise HTTPException(status_code=404, detail="Court not found")
    return CourtResponse.from_court(court)
