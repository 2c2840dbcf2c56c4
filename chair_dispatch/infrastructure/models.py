"""
SQLAlchemy ORM models  (maps to PostgreSQL).

Tables
------
* ``owners``          -- parties owning chairs
* ``chair_models``    -- model name -> rated speed
* ``chairs``          -- dispatchable chairs
* ``chair_locations`` -- append-only position telemetry
* ``rides``           -- ride requests; ``chair_id`` NULL = unmatched
* ``ride_statuses``   -- append-only lifecycle events per ride

Indexes
-------
* ``rides(chair_id, created_at)`` serves the oldest-unmatched lookup and
  the per-chair ride scan of the availability query.
* ``chair_locations(chair_id, created_at)`` serves the latest-location
  window.
* ``ride_statuses(ride_id)`` serves the sent-stage count.
"""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    func,
)

from .database import Base
from chair_dispatch.domain.enums import RideStatus


class OwnerModel(Base):
    __tablename__ = "owners"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(30), unique=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class ChairTypeModel(Base):
    """Row of ``chair_models``: the rated speed of a chair model."""

    __tablename__ = "chair_models"

    name = Column(String(50), primary_key=True)
    speed = Column(Integer, nullable=False)


class ChairModel(Base):
    __tablename__ = "chairs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(Integer, ForeignKey("owners.id"), nullable=False)
    name = Column(String(30), nullable=False)
    # Not a foreign key: an unknown model just leaves the chair unrated.
    model = Column(String(50), nullable=False)
    is_active = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        Index("idx_chairs_owner", "owner_id"),
        Index("idx_chairs_active", "is_active"),
    )


class ChairLocationModel(Base):
    __tablename__ = "chair_locations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    chair_id = Column(Integer, ForeignKey("chairs.id"), nullable=False)
    latitude = Column(Integer, nullable=False)
    longitude = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        Index("idx_chair_locations_chair_created", "chair_id", "created_at"),
    )


class RideModel(Base):
    __tablename__ = "rides"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, nullable=True)
    chair_id = Column(Integer, ForeignKey("chairs.id"), nullable=True)

    pickup_latitude = Column(Integer, nullable=False)
    pickup_longitude = Column(Integer, nullable=False)
    # Nullable so that incomplete requests surface as matcher data errors
    destination_latitude = Column(Integer, nullable=True)
    destination_longitude = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        Index("idx_rides_chair_created", "chair_id", "created_at"),
    )


class RideStatusModel(Base):
    __tablename__ = "ride_statuses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    ride_id = Column(Integer, ForeignKey("rides.id"), nullable=False)
    status = Column(Enum(RideStatus), nullable=False)
    chair_sent_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (Index("idx_ride_statuses_ride", "ride_id"),)
