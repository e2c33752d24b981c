"""
SQLAlchemy ORM models.

Tables
------
* ``courts`` -- court records published by the booking backend.  Plain
  float latitude / longitude columns; rows missing either are not mappable.

Indexes
-------
* **B-Tree** on ``is_active`` and ``name`` for the ordered active listing.
"""

from sqlalchemy import Boolean, Column, DateTime, Float, Index, String, func

from .database import Base


class CourtModel(Base):
    __tablename__ = "courts"

    id = Column(String(64), primary_key=True)
    name = Column(String(200), nullable=False)
    address = Column(String(300), nullable=True)
    city = Column(String(120), nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    rating = Column(Float, default=0.0)
    cover_image = Column(String(500), nullable=True)
    phone_number = Column(String(40), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        Index("idx_courts_active", "is_active"),
        Index("idx_courts_name", "name"),
    )
