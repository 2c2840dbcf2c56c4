"""
Admin / observability endpoints
===============================

GET /api/v1/admin/health           -- simple health check
GET /api/v1/admin/candidates       -- active chairs as the matcher sees them
GET /api/v1/admin/rides/{ride_id}  -- a ride and its assigned chair
"""

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from chair_dispatch.api.dependencies import get_db
from chair_dispatch.api.middleware import limiter
from chair_dispatch.api.schemas import (
    ChairCandidateResponse,
    ErrorResponse,
    HealthResponse,
    RideResponse,
)
from chair_dispatch.config import settings
from chair_dispatch.infrastructure.repositories import (
    ChairRepository,
    RideRepository,
)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get(
    "/candidates",
    response_model=list[ChairCandidateResponse],
    summary="List active chairs with location, speed and availability",
)
@limiter.limit(settings.rate_limit)
async def get_candidates(
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    candidates = await ChairRepository(db).get_candidates()
    return [
        ChairCandidateResponse(
            id=c.id,
            name=c.name,
            model=c.model,
            speed=c.speed,
            latitude=c.location.latitude if c.location else None,
            longitude=c.location.longitude if c.location else None,
            available=c.is_available,
            rankable=c.is_rankable,
        )
        for c in candidates
    ]


@router.get(
    "/rides/{ride_id}",
    response_model=RideResponse,
    summary="Get a ride and its assigned chair",
    responses={404: {"model": ErrorResponse}},
)
@limiter.limit(settings.rate_limit)
async def get_ride(
    request: Request,
    ride_id: int,
    db: AsyncSession = Depends(get_db),
):
    ride = await RideRepository(db).get_by_id(ride_id)
    if not ride:
        raise HTTPException(status_code=404, detail="Ride not found")
    return ride


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health():
    return HealthResponse()
