"""Domain enumerations and lifecycle constants."""

import enum


class RideStatus(str, enum.Enum):
    MATCHING = "MATCHING"
    ENROUTE = "ENROUTE"
    PICKUP = "PICKUP"
    CARRYING = "CARRYING"
    ARRIVED = "ARRIVED"
    COMPLETED = "COMPLETED"


# A ride is closed once every stage has been sent to its chair.
# Must stay equal to the number of lifecycle stages above.
RIDE_STATUS_STAGES: int = len(RideStatus)


class MatchOutcome(str, enum.Enum):
    ASSIGNED = "assigned"
    NO_RIDE = "no-ride"
    NO_AVAILABLE_CHAIR = "no-available-chair"
    ERROR = "error"


class MatcherState(str, enum.Enum):
    IDLE = "idle"
    SELECTING = "selecting"
    RESOLVING_AVAILABILITY = "resolving-availability"
    RANKING = "ranking"
    COMMITTING = "committing"
    DONE = "done"
