"""
Domain entities and errors for the matcher.

Entities are plain dataclasses decoupled from the ORM: repositories map
rows onto them so the ranking logic can be tested without a database.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .enums import MatcherState, MatchOutcome


# ── Errors ────────────────────────────────────────────────────────────


class MatchingError(Exception):
    """Base class for failures that abort a matching cycle."""

    transient = False


class InvalidRideData(MatchingError):
    """Raised when a ride cannot be matched because its data is incomplete."""

    def __init__(self, ride_id: int, reason: str):
        super().__init__(f"Ride {ride_id}: {reason}")
        self.ride_id = ride_id
        self.reason = reason


class AssignmentConflict(MatchingError):
    """Raised when the selected ride was assigned by someone else."""

    transient = True

    def __init__(self, ride_id: int):
        super().__init__(f"Ride {ride_id} is no longer unassigned")
        self.ride_id = ride_id


class StorageError(MatchingError):
    """Lock timeout, lost connection or serialization failure."""

    transient = True


# ── Value Object ──────────────────────────────────────────────────────


@dataclass(frozen=True)
class Location:
    latitude: int
    longitude: int


# ── Entities ──────────────────────────────────────────────────────────


@dataclass
class Ride:
    id: int
    pickup: Optional[Location] = None
    destination: Optional[Location] = None
    chair_id: Optional[int] = None
    created_at: Optional[datetime] = None

    def require_destination(self) -> Location:
        """Return the destination or raise ``InvalidRideData``."""
        if self.destination is None:
            raise InvalidRideData(
                self.id, "Ride destination coordinates are missing"
            )
        return self.destination


@dataclass
class ChairCandidate:
    id: int
    name: str
    model: str
    speed: Optional[int] = None
    location: Optional[Location] = None
    is_active: bool = True
    is_available: bool = True

    @property
    def is_rankable(self) -> bool:
        """Active, free, located and with a usable speed."""
        return (
            self.is_active
            and self.is_available
            and self.location is not None
            and self.speed is not None
            and self.speed > 0
        )


@dataclass
class MatchResult:
    outcome: MatchOutcome
    state: MatcherState = MatcherState.DONE
    ride_id: Optional[int] = None
    chair_id: Optional[int] = None
    eta: Optional[float] = None
    error: Optional[MatchingError] = None

    @property
    def assigned(self) -> bool:
        return self.outcome == MatchOutcome.ASSIGNED
