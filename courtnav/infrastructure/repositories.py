"""
Read-only repository over court records.

Rows are converted to immutable ``Court`` snapshots at the boundary; rows
without usable coordinates are skipped because they cannot be placed on
the map.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from courtnav.domain.entities import Coordinate, Court

from .models import CourtModel

logger = logging.getLogger(__name__)

DEFAULT_COURT_IMAGE = "https://images.unsplash.com/photo-1554068865-24cecd4e34b8?w=800"


def to_court(row: CourtModel) -> Optional[Court]:
    """Map a row to a ``Court``, or ``None`` if it has no valid coordinates."""
    if row.latitude is None or row.longitude is None:
        return None
    try:
        coordinate = Coordinate(float(row.latitude), float(row.longitude))
    except ValueError as exc:
        logger.warning("Skipping court %s: %s", row.id, exc)
        return None
    return Court(
        id=str(row.id),
        name=row.name,
        coordinate=coordinate,
        location=row.city or row.address or "",
        rating=max(0.0, float(row.rating or 0.0)),
        image_url=row.cover_image or DEFAULT_COURT_IMAGE,
        phone_number=row.phone_number or None,
    )


class CourtRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_active(self) -> list[Court]:
        result = await self.session.execute(
            select(CourtModel)
            .where(CourtModel.is_active.is_(True))
            .order_by(CourtModel.name)
        )
        return self._mappable(result.scalars().all())

    async def search(self, term: str) -> list[Court]:
        pattern = f"%{term}%"
        result = await self.session.execute(
            select(CourtModel)
            .where(
                CourtModel.is_active.is_(True),
                or_(
                    CourtModel.name.ilike(pattern),
                    CourtModel.city.ilike(pattern),
                    CourtModel.address.ilike(pattern),
                ),
            )
            .order_by(CourtModel.name)
        )
        return self._mappable(result.scalars().all())

    async def get_by_id(self, court_id: str) -> Optional[Court]:
        row = await self.session.get(CourtModel, court_id)
        if row is None or not row.is_active:
            return None
        return to_court(row)

    @staticmethod
    def _mappable(rows) -> list[Court]:
        courts = [to_court(row) for row in rows]
        return [c for c in courts if c is not None]
