"""Pydantic response schemas for the REST API."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class ChairCandidateResponse(BaseModel):
    id: int
    name: str
    model: str
    speed: Optional[int] = None
    latitude: Optional[int] = None
    longitude: Optional[int] = None
    available: bool
    rankable: bool


class RideResponse(BaseModel):
    id: int
    chair_id: Optional[int] = None
    pickup_latitude: int
    pickup_longitude: int
    destination_latitude: Optional[int] = None
    destination_longitude: Optional[int] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class HealthResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    detail: str
