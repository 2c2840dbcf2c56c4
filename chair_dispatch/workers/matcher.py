"""
Chair Matching Worker
=====================

``run_matching_cycle`` is the single entry point: it assigns the oldest
unmatched ride to the available chair with the lowest ETA and returns a
``MatchResult``.  It holds no state between calls and has no thread of
its own; a host (the loop below, the internal HTTP route, cron) decides
when to call it.

Concurrency safety
------------------
* **SELECT ... FOR UPDATE SKIP LOCKED** on the oldest unmatched ride: a
  second cycle passes over the held row and takes the next-oldest one.
* **SERIALIZABLE isolation** for the whole cycle: chairs are never
  locked; if two cycles on different rides both read a chair as
  available and both assign it, one of them fails at commit and rolls
  back.
* **Redis tick lock** (optional, host loop only) keeps a deployment with
  several API processes to one tick per interval.

Algorithm per cycle
-------------------
1. Open one transaction.
2. Lock the oldest unmatched ride, or stop with ``no-ride``.
3. Reject a ride without destination coordinates.
4. Resolve active chairs with location, speed and availability.
5. Rank by ETA to the destination, or stop with ``no-available-chair``.
6. Write the chair into the ride and commit.
"""

from __future__ import annotations

import asyncio
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from chair_dispatch.config import settings
from chair_dispatch.domain.entities import (
    InvalidRideData,
    MatchingError,
    MatchResult,
    StorageError,
)
from chair_dispatch.domain.enums import MatcherState, MatchOutcome
from chair_dispatch.domain.ranking import pick_fastest
from chair_dispatch.infrastructure.database import matching_session_factory
from chair_dispatch.infrastructure.locks import DistributedLock
from chair_dispatch.infrastructure.redis_client import get_redis
from chair_dispatch.infrastructure.repositories import (
    ChairRepository,
    RideRepository,
    to_ride,
)

logger = logging.getLogger(__name__)

_task: asyncio.Task | None = None
_stop_event: asyncio.Event | None = None


# ── Public API ────────────────────────────────────────────────────────


async def run_matching_cycle(
    session_factory: async_sessionmaker[AsyncSession] | None = None,
) -> MatchResult:
    """Execute one matching cycle.  Never raises ``MatchingError``."""
    factory = session_factory or matching_session_factory
    state = MatcherState.IDLE

    try:
        async with factory() as session:
            async with session.begin():
                ride_repo = RideRepository(session)
                chair_repo = ChairRepository(session)

                # 1. Oldest unmatched ride, row-locked
                state = MatcherState.SELECTING
                row = await ride_repo.get_oldest_unmatched_for_update()
                if row is None:
                    logger.debug("No unmatched ride")
                    return MatchResult(MatchOutcome.NO_RIDE, state=state)

                ride = to_ride(row)
                destination = ride.require_destination()

                # 2. Candidate chairs, same transaction
                state = MatcherState.RESOLVING_AVAILABILITY
                candidates = await chair_repo.get_candidates()

                # 3. Fastest chair to the destination
                state = MatcherState.RANKING
                best = pick_fastest(candidates, destination)
                if best is None:
                    logger.debug(
                        "No available chair for ride %d (%d active)",
                        ride.id,
                        len(candidates),
                    )
                    return MatchResult(
                        MatchOutcome.NO_AVAILABLE_CHAIR,
                        state=state,
                        ride_id=ride.id,
                    )

                # 4. Commit the pair
                state = MatcherState.COMMITTING
                await ride_repo.assign_chair(ride.id, best.chair.id)

        logger.info(
            "Ride %d assigned to chair %d (eta=%.3f)",
            ride.id,
            best.chair.id,
            best.eta,
        )
        return MatchResult(
            MatchOutcome.ASSIGNED,
            state=MatcherState.DONE,
            ride_id=ride.id,
            chair_id=best.chair.id,
            eta=best.eta,
        )
    except InvalidRideData as exc:
        logger.warning("Matching aborted: %s", exc)
        return MatchResult(
            MatchOutcome.ERROR, state=state, ride_id=exc.ride_id, error=exc
        )
    except MatchingError as exc:
        logger.warning("Matching rolled back: %s", exc)
        return MatchResult(MatchOutcome.ERROR, state=state, error=exc)
    except SQLAlchemyError as exc:
        logger.exception("Storage error in matching cycle")
        error = StorageError(str(exc))
        error.__cause__ = exc
        return MatchResult(MatchOutcome.ERROR, state=state, error=error)


async def start_matching_loop() -> None:
    global _task, _stop_event
    _stop_event = asyncio.Event()
    _task = asyncio.create_task(_loop())
    logger.info(
        "Matching worker started (interval=%.3fs)",
        settings.matching_interval_seconds,
    )


async def stop_matching_loop() -> None:
    if _stop_event:
        _stop_event.set()
    if _task:
        _task.cancel()
        try:
            await _task
        except asyncio.CancelledError:
            pass
    logger.info("Matching worker stopped")


# ── Internals ─────────────────────────────────────────────────────────


async def _loop() -> None:
    """Periodic loop: run a tick then sleep."""
    assert _stop_event is not None
    while not _stop_event.is_set():
        try:
            await run_tick()
        except Exception:
            logger.exception("Unhandled error in matching tick")
        # Wait for the interval or until stop is signalled
        try:
            await asyncio.wait_for(
                _stop_event.wait(), timeout=settings.matching_interval_seconds
            )
            break
        except asyncio.TimeoutError:
            pass  # next tick


async def run_tick() -> MatchResult | None:
    """One scheduled invocation.  ``None`` when another process holds the tick."""
    if not settings.matching_single_flight:
        return await run_matching_cycle()

    redis = await get_redis()
    lock = DistributedLock(
        redis, "chair_matching", ttl_seconds=settings.matching_lock_ttl_seconds
    )
    if not await lock.acquire():
        logger.debug("Tick lock held by another worker – skipping")
        return None
    try:
        return await run_matching_cycle()
    finally:
        await lock.release()
