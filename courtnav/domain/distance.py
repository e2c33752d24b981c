"""
Great-circle geometry: haversine distance and initial bearing.

Assumption
----------
The earth is treated as a sphere of radius 6 371 km.  Good to ~0.5 % which
is plenty for a straight-line fallback shown as "approximate route".

Complexity: O(1) per call, O(N log N) for ``courts_within``.
"""

from __future__ import annotations

import math
from typing import Iterable

from .entities import Coordinate, Court

EARTH_RADIUS_KM = 6_371.0

COMPASS_POINTS = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")


def haversine_km(a: Coordinate, b: Coordinate) -> float:
    """Return the great-circle distance in **km** between two points."""
    lat1_r, lat2_r = math.radians(a.lat), math.radians(b.lat)
    dlat = math.radians(b.lat - a.lat)
    dlng = math.radians(b.lng - a.lng)

    h = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1_r) * math.cos(lat2_r) * math.sin(dlng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_KM * c


def initial_bearing_deg(a: Coordinate, b: Coordinate) -> float:
    """Forward azimuth from *a* to *b*, degrees clockwise from north in [0, 360)."""
    lat1_r, lat2_r = math.radians(a.lat), math.radians(b.lat)
    dlng = math.radians(b.lng - a.lng)

    y = math.sin(dlng) * math.cos(lat2_r)
    x = math.cos(lat1_r) * math.sin(lat2_r) - math.sin(lat1_r) * math.cos(
        lat2_r
    ) * math.cos(dlng)
    return (math.degrees(math.atan2(y, x)) + 360.0) % 360.0


def compass_point(bearing_deg: float) -> str:
    """Map a bearing onto the 8-point compass rose."""
    index = int(((bearing_deg % 360.0) + 22.5) // 45.0) % len(COMPASS_POINTS)
    return COMPASS_POINTS[index]


def courts_within(
    origin: Coordinate, courts: Iterable[Court], radius_km: float
) -> list[tuple[Court, float]]:
    """Courts no further than *radius_km* from *origin*, nearest first."""
    scored = [(court, haversine_km(origin, court.coordinate)) for court in courts]
    nearby = [(court, dist) for court, dist in scored if dist <= radius_km]
    nearby.sort(key=lambda pair: pair[1])
    return nearby
