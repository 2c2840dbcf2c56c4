"""Unit tests for the ETA calculator and fastest-chair ranking."""

import pytest

from chair_dispatch.domain.entities import ChairCandidate, Location
from chair_dispatch.domain.eta import eta, eta_between, manhattan_distance
from chair_dispatch.domain.ranking import pick_fastest, rankable


def _chair(id, at=(0, 0), speed=1, **kw):
    return ChairCandidate(
        id=id,
        name=f"c{id}",
        model="m",
        speed=speed,
        location=Location(*at) if at is not None else None,
        **kw,
    )


class TestManhattanDistance:
    def test_same_point_is_zero(self):
        assert manhattan_distance(Location(3, 4), Location(3, 4)) == 0

    def test_sums_axis_differences(self):
        assert manhattan_distance(Location(0, 0), Location(3, -4)) == 7

    def test_symmetric(self):
        a, b = Location(-5, 12), Location(7, -1)
        assert manhattan_distance(a, b) == manhattan_distance(b, a)


class TestEta:
    def test_distance_over_speed(self):
        assert eta(10, 2) == 5.0

    def test_zero_distance(self):
        assert eta(0, 3) == 0.0

    @pytest.mark.parametrize("speed", [0, -1, None])
    def test_non_positive_speed_rejected(self, speed):
        with pytest.raises(ValueError):
            eta(10, speed)

    def test_between_points(self):
        assert eta_between(Location(0, 0), Location(6, 3), 3) == 3.0


class TestRankable:
    def test_filters_unusable_chairs(self):
        chairs = [
            _chair(1),
            _chair(2, at=None),
            _chair(3, speed=None),
            _chair(4, speed=0),
            _chair(5, is_available=False),
            _chair(6, is_active=False),
        ]
        assert [c.id for c in rankable(chairs)] == [1]


class TestPickFastest:
    def test_lowest_eta_wins(self):
        # C1: distance 10 at speed 2 -> 5; C2: distance 3 at speed 1 -> 3
        chairs = [_chair(1, at=(10, 0), speed=2), _chair(2, at=(3, 0), speed=1)]
        best = pick_fastest(chairs, Location(0, 0))
        assert best.chair.id == 2
        assert best.eta == 3.0

    def test_speed_beats_proximity(self):
        chairs = [_chair(1, at=(4, 0), speed=1), _chair(2, at=(10, 0), speed=5)]
        assert pick_fastest(chairs, Location(0, 0)).chair.id == 2

    def test_tie_keeps_first_seen(self):
        chairs = [_chair(7, at=(4, 0), speed=2), _chair(3, at=(0, 2), speed=1)]
        assert pick_fastest(chairs, Location(0, 0)).chair.id == 7
        assert pick_fastest(list(reversed(chairs)), Location(0, 0)).chair.id == 3

    def test_busy_chair_never_chosen(self):
        chairs = [
            _chair(1, at=(0, 0), speed=9, is_available=False),
            _chair(2, at=(50, 50), speed=1),
        ]
        assert pick_fastest(chairs, Location(0, 0)).chair.id == 2

    def test_empty_returns_none(self):
        assert pick_fastest([], Location(0, 0)) is None

    def test_only_unusable_returns_none(self):
        chairs = [_chair(1, at=None), _chair(2, speed=0)]
        assert pick_fastest(chairs, Location(0, 0)) is None

    def test_unusable_chairs_ahead_are_skipped(self):
        chairs = [_chair(1, at=None), _chair(2, speed=None), _chair(3, at=(6, 0), speed=2)]
        best = pick_fastest(chairs, Location(0, 0))
        assert (best.chair.id, best.eta) == (3, 3.0)

    def test_deterministic(self):
        chairs = [_chair(i, at=(i * 3 % 7, i), speed=i % 3 + 1) for i in range(1, 20)]
        first = pick_fastest(chairs, Location(2, 2))
        for _ in range(5):
            assert pick_fastest(chairs, Location(2, 2)) == first
