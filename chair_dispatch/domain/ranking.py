"""
Fastest-ETA Chair Ranking
=========================

1. **Filter**  -- keep chairs that are active, available, located and
   rated with a positive speed.
2. **Score**   -- ETA from the chair's latest location to the ride's
   destination (``manhattan_distance / speed``).
3. **Select**  -- strictly minimal ETA wins; on a tie the chair seen
   first keeps the slot, so the result depends only on input order.

Note on the target point
------------------------
Chairs are ranked against the ride's *destination*, not its pickup
point.  A dispatcher would normally minimise time to the passenger;
the destination target is kept as the established behaviour of the
service and is covered by tests.

Complexity
----------
O(C) for C candidate chairs, single pass.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional

from .entities import ChairCandidate, Location
from .eta import eta_between


@dataclass(frozen=True)
class RankedChair:
    chair: ChairCandidate
    eta: float


def rankable(candidates: Iterable[ChairCandidate]) -> list[ChairCandidate]:
    """Drop chairs that cannot produce a valid ETA or are busy."""
    return [c for c in candidates if c.is_rankable]


def pick_fastest(
    candidates: Iterable[ChairCandidate], target: Location
) -> Optional[RankedChair]:
    """Return the chair with the lowest ETA to *target*, or ``None``."""
    best: Optional[RankedChair] = None
    min_eta = math.inf

    for chair in rankable(candidates):
        t = eta_between(chair.location, target, chair.speed)
        if t < min_eta:
            min_eta = t
            best = RankedChair(chair=chair, eta=t)

    return best
