"""Pydantic request / response schemas for the REST API."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from courtnav.domain.entities import Court, Route
from courtnav.domain.formatting import format_distance, format_duration


class CoordinateSchema(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


# ── Responses ─────────────────────────────────────────────────────────


class CourtResponse(BaseModel):
    id: str
    name: str
    coordinate: CoordinateSchema
    location: str = ""
    rating: float = Field(0.0, ge=0)
    image_url: str = ""
    phone_number: Optional[str] = None

    @classmethod
    def from_court(cls, court: Court) -> CourtResponse:
        return cls(
            id=court.id,
            name=court.name,
            coordinate=CoordinateSchema(lat=court.coordinate.lat, lng=court.coordinate.lng),
            location=court.location,
            rating=court.rating,
            image_url=court.image_url,
            phone_number=court.phone_number,
        )


class NearbyCourtResponse(CourtResponse):
    distance_km: float


class RouteResponse(BaseModel):
    distance_meters: float = Field(..., ge=0)
    duration_seconds: float = Field(..., ge=0)
    is_approximate: bool
    geometry: list[CoordinateSchema]
    distance_text: str
    duration_text: str

    @classmethod
    def from_route(cls, route: Route) -> RouteResponse:
        return cls(
            distance_meters=route.distance_meters,
            duration_seconds=route.duration_seconds,
            is_approximate=route.is_approximate,
            geometry=[CoordinateSchema(lat=c.lat, lng=c.lng) for c in route.geometry],
            distance_text=format_distance(route.distance_meters),
            duration_text=format_duration(route.duration_seconds),
        )


class HealthResponse(BaseModel):
    status: str = "ok"

