"""
Internal endpoints
==================

GET /api/internal/matching -- run one matching cycle now

Meant to be hit from inside the deployment at a fixed interval (cron,
sidecar) as an alternative to the in-process loop.  Every non-error
outcome answers ``204 No Content``; the caller learns nothing about the
pair that was formed.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from chair_dispatch.api.dependencies import get_matching_session_factory
from chair_dispatch.api.middleware import limiter
from chair_dispatch.api.schemas import ErrorResponse
from chair_dispatch.config import settings
from chair_dispatch.domain.entities import InvalidRideData
from chair_dispatch.domain.enums import MatchOutcome
from chair_dispatch.workers.matcher import run_matching_cycle

router = APIRouter(prefix="/internal", tags=["internal"])


@router.get(
    "/matching",
    status_code=204,
    summary="Assign the oldest unmatched ride to the fastest chair",
    responses={
        400: {
            "model": ErrorResponse,
            "description": "Oldest unmatched ride has invalid data.",
        },
        503: {
            "model": ErrorResponse,
            "description": "Storage failure; retry on the next tick.",
        },
    },
)
@limiter.limit(settings.rate_limit)
async def matching(
    request: Request,
    session_factory: async_sessionmaker[AsyncSession] = Depends(
        get_matching_session_factory
    ),
):
    result = await run_matching_cycle(session_factory)

    if result.outcome == MatchOutcome.ERROR:
        if isinstance(result.error, InvalidRideData):
            raise HTTPException(status_code=400, detail=result.error.reason)
        raise HTTPException(status_code=503, detail=str(result.error))

    return Response(status_code=204)
