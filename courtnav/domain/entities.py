"""
Domain entities and value objects.

Patterns used
-------------
- **Value Objects**: ``Coordinate``, ``Court``, ``UserPosition`` and ``Route``
  are frozen; a court snapshot handed over by the data layer is never
  mutated inside the navigation core.
- ``Court.to_payload`` / ``Court.from_payload`` define the exact wire shape
  carried by a ``courtMarkerClick`` bridge message, so a court survives the
  trip through the embedded surface unchanged.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional


class InvalidStateTransition(Exception):
    """Raised when a navigation state change violates the state machine."""


# ── Value Objects ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class Coordinate:
    lat: float
    lng: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.lat) and math.isfinite(self.lng)):
            raise ValueError(f"Coordinate must be finite: ({self.lat}, {self.lng})")
        if not -90.0 <= self.lat <= 90.0:
            raise ValueError(f"Latitude out of range: {self.lat}")
        if not -180.0 <= self.lng <= 180.0:
            raise ValueError(f"Longitude out of range: {self.lng}")

    def to_dict(self) -> dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}


@dataclass(frozen=True)
class Court:
    id: str
    name: str
    coordinate: Coordinate
    location: str = ""
    rating: float = 0.0
    image_url: str = ""
    phone_number: Optional[str] = None

    def __post_init__(self) -> None:
        if self.rating < 0:
            raise ValueError(f"Court rating must be >= 0, got {self.rating}")

    def to_payload(self) -> dict[str, Any]:
        """Serialise for the ``courtMarkerClick`` message."""
        return {
            "id": self.id,
            "name": self.name,
            "location": self.location,
            "rating": self.rating,
            "imageUrl": self.image_url,
            "coordinate": self.coordinate.to_dict(),
            "phoneNumber": self.phone_number,
        }

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> Court:
        """Inverse of :meth:`to_payload`.  Raises on missing/invalid fields."""
        coord = payload["coordinate"]
        return cls(
            id=str(payload["id"]),
            name=str(payload["name"]),
            coordinate=Coordinate(float(coord["lat"]), float(coord["lng"])),
            location=str(payload.get("location") or ""),
            rating=float(payload.get("rating") or 0.0),
            image_url=str(payload.get("imageUrl") or ""),
            phone_number=payload.get("phoneNumber") or None,
        )


@dataclass(frozen=True)
class UserPosition:
    coordinate: Coordinate
    accuracy_meters: float
    captured_at: datetime


@dataclass(frozen=True)
class Route:
    distance_meters: float
    duration_seconds: float
    geometry: tuple[Coordinate, ...]
    is_approximate: bool = False

    @property
    def distance_km(self) -> float:
        return self.distance_meters / 1000.0

    @property
    def duration_minutes(self) -> int:
        return math.ceil(self.duration_seconds / 60.0)

    @property
    def origin(self) -> Coordinate:
        return self.geometry[0]

    @property
    def destination(self) -> Coordinate:
        return self.geometry[-1]
