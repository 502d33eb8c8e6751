"""Tests for the segment-to-box property checker."""

from __future__ import annotations

import pytest

from common.types import Box, GeoPoint, Segment
from segment_box.below_of_box import SegmentBelowOfBoxDistance
from validation.property_checks import SegmentBoxPropertyChecker

P = GeoPoint.from_degrees

BELOW_CASES = [
    (Segment(P(-10, 10), P(10, 10)), Box.from_degrees(-5, 12, 5, 20)),
    (Segment(P(-10, 10), P(10, 10)), Box.from_degrees(5, 10.14, 15, 20)),
    (Segment(P(20, 10), P(30, 10)), Box.from_degrees(0, 15, 10, 20)),
]


class _NegativeDistance:
    """Stand-in strategy that violates non-negativity."""

    strategies = None

    def apply_geometries(self, segment, box):
        return -1.0


class TestSegmentBoxPropertyChecker:
    @pytest.mark.parametrize("segment, box", BELOW_CASES)
    def test_spherical_properties_hold(self, spherical, segment, box):
        checker = SegmentBoxPropertyChecker(SegmentBelowOfBoxDistance(spherical))
        results = checker.check_all(segment, box)
        assert [r.test_name for r in results] == [
            "non_negativity",
            "intersection",
            "endpoint_symmetry",
            "monotonic_separation",
            "degenerate_segment",
        ]
        failed = [r for r in results if not r.passed]
        assert not failed, failed

    def test_geographic_properties_hold(self, geographic):
        checker = SegmentBoxPropertyChecker(
            SegmentBelowOfBoxDistance(geographic), tolerance_m=1e-3
        )
        segment, box = BELOW_CASES[0]
        assert all(r.passed for r in checker.check_all(segment, box))

    def test_intersecting_pair(self, spherical):
        checker = SegmentBoxPropertyChecker(SegmentBelowOfBoxDistance(spherical))
        result = checker.check_intersection(
            Segment(P(-10, 0), P(10, 0)), Box.from_degrees(-5, -2, 5, 2)
        )
        assert result.passed
        assert result.details['outcome'] == "INTERSECTING"
        assert result.details['distance_m'] == 0.0

    def test_monotonic_details(self, spherical):
        checker = SegmentBoxPropertyChecker(SegmentBelowOfBoxDistance(spherical))
        segment, box = BELOW_CASES[0]
        result = checker.check_monotonic_separation(segment, box, fractions=(0.0, 0.5, 1.0))
        assert len(result.details['distances_m']) == 3
        assert result.details['distances_m'][0] < result.details['distances_m'][-1]

    def test_violation_is_logged(self, caplog):
        checker = SegmentBoxPropertyChecker(_NegativeDistance())
        segment, box = BELOW_CASES[0]
        result = checker.check_non_negativity(segment, box)
        assert not result.passed
        assert "PROPERTY CHECK | non_negativity | FAIL" in caplog.text

    def test_strict_mode_raises(self):
        checker = SegmentBoxPropertyChecker(_NegativeDistance(), strict_mode=True)
        segment, box = BELOW_CASES[0]
        with pytest.raises(RuntimeError, match="non_negativity"):
            checker.check_non_negativity(segment, box)
