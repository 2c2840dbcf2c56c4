"""
Distance and ETA on a flat grid.

Assumption
----------
Coordinates are treated as an axis-aligned plane and distance is the
Manhattan metric ``|dlat| + |dlng|``.  There is no geocoding or routing
engine behind it; it is good enough for short urban trips on the grid
the chairs report positions on.

Complexity: O(1) per call.
"""

from __future__ import annotations

from .entities import Location


def manhattan_distance(a: Location, b: Location) -> int:
    """Return ``|a.lat - b.lat| + |a.lng - b.lng|`` (never negative)."""
    return abs(a.latitude - b.latitude) + abs(a.longitude - b.longitude)


def eta(distance: float, speed: float) -> float:
    """Time to cover *distance* at *speed*.  Lower is better.

    *speed* must be strictly positive; chairs without a usable speed are
    filtered out before ranking.
    """
    if speed is None or speed <= 0:
        raise ValueError(f"speed must be positive, got {speed!r}")
    return distance / speed


def eta_between(origin: Location, target: Location, speed: float) -> float:
    return eta(manhattan_distance(origin, target), speed)
