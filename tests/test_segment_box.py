"""Tests for the disjointness test and the segment-below-of-box distance."""

from __future__ import annotations

import math

import pytest

from common.constants import PhysicalConstants
from common.types import Box, GeoPoint, Segment
from segment_box.below_of_box import (
    LongitudeOrder,
    SegmentBelowOfBoxDistance,
    segment_above_of_box_distance,
    segment_below_of_box_distance,
)
from segment_box.disjoint import DisjointOutcome, classify_segment_box

P = GeoPoint.from_degrees
R = math.radians
EARTH_R = PhysicalConstants.EARTH_MEAN_RADIUS.value

# Northern vertex latitude of the great circle through (-10, 10) and (10, 10)
VERTEX_LAT = math.atan(math.tan(R(10)) / math.cos(R(10)))

ARC = Segment(P(-10, 10), P(10, 10))


def distance(strategies, segment, box, order=LongitudeOrder.DESCENDING):
    return SegmentBelowOfBoxDistance(strategies, order).apply_geometries(segment, box)


# ---------------------------------------------------------------------------
# Disjointness test
# ---------------------------------------------------------------------------

class TestClassifySegmentBox:
    def test_endpoint_inside_box(self, spherical):
        result = classify_segment_box(
            Segment(P(0, 0), P(20, 0)), Box.from_degrees(-1, -1, 1, 1),
            spherical.azimuth_strategy
        )
        assert result.outcome is DisjointOutcome.INTERSECTING
        assert not result.is_disjoint

    def test_disjoint_envelope_leaves_vertex_unknown(self, spherical):
        result = classify_segment_box(
            ARC, Box.from_degrees(-5, 12, 5, 20), spherical.azimuth_strategy
        )
        assert result.outcome is DisjointOutcome.DISJOINT_VERTEX_UNKNOWN
        assert result.p_max is None
        assert result.is_disjoint

    def test_corners_on_both_sides(self, spherical):
        result = classify_segment_box(
            Segment(P(-10, 0), P(10, 0)), Box.from_degrees(-5, -2, 5, 2),
            spherical.azimuth_strategy
        )
        assert result.outcome is DisjointOutcome.INTERSECTING

    def test_vertex_reaches_into_box(self, spherical):
        result = classify_segment_box(
            ARC, Box.from_degrees(-1, 10.15, 1, 20), spherical.azimuth_strategy
        )
        assert result.outcome is DisjointOutcome.INTERSECTING

    def test_vertex_known_outside_box(self, spherical):
        result = classify_segment_box(
            ARC, Box.from_degrees(5, 10.14, 15, 20), spherical.azimuth_strategy
        )
        assert result.outcome is DisjointOutcome.DISJOINT_VERTEX_KNOWN
        assert result.p_max.longitude == pytest.approx(0.0, abs=1e-12)
        assert result.p_max.latitude == pytest.approx(VERTEX_LAT, abs=1e-12)

    def test_southern_vertex_known(self, spherical):
        result = classify_segment_box(
            Segment(P(-10, -10), P(10, -10)), Box.from_degrees(5, -20, 15, -10.14),
            spherical.azimuth_strategy
        )
        assert result.outcome is DisjointOutcome.DISJOINT_VERTEX_KNOWN
        assert result.p_max.latitude == pytest.approx(-VERTEX_LAT, abs=1e-12)

    def test_southern_vertex_reaches_into_box(self, spherical):
        result = classify_segment_box(
            Segment(P(-10, -10), P(10, -10)), Box.from_degrees(-1, -20, 1, -10.15),
            spherical.azimuth_strategy
        )
        assert result.outcome is DisjointOutcome.INTERSECTING

    def test_endpoint_order_irrelevant(self, spherical):
        box = Box.from_degrees(5, 10.14, 15, 20)
        forward = classify_segment_box(ARC, box, spherical.azimuth_strategy)
        backward = classify_segment_box(ARC.reversed(), box, spherical.azimuth_strategy)
        assert forward.outcome is backward.outcome
        assert forward.p_max.latitude == pytest.approx(backward.p_max.latitude, abs=1e-12)

    def test_geographic_vertex_known(self, geographic):
        result = classify_segment_box(
            ARC, Box.from_degrees(5, 10.14, 15, 20), geographic.azimuth_strategy
        )
        assert result.outcome is DisjointOutcome.DISJOINT_VERTEX_KNOWN
        assert result.p_max.longitude == pytest.approx(0.0, abs=1e-7)


# ---------------------------------------------------------------------------
# Longitude ordering
# ---------------------------------------------------------------------------

class TestLongitudeOrder:
    def test_relations_are_inclusive(self):
        assert LongitudeOrder.ASCENDING.precedes_or_equal(1.0, 1.0)
        assert LongitudeOrder.DESCENDING.precedes_or_equal(1.0, 1.0)
        assert LongitudeOrder.ASCENDING.precedes_or_equal(0.0, 1.0)
        assert not LongitudeOrder.DESCENDING.precedes_or_equal(0.0, 1.0)

    def test_inverted(self):
        assert LongitudeOrder.ASCENDING.inverted() is LongitudeOrder.DESCENDING
        assert LongitudeOrder.DESCENDING.inverted() is LongitudeOrder.ASCENDING


# ---------------------------------------------------------------------------
# Segment below of box
# ---------------------------------------------------------------------------

class TestSegmentBelowOfBoxDistance:
    def test_intersecting_is_zero(self, spherical):
        assert distance(
            spherical, Segment(P(-10, 0), P(10, 0)), Box.from_degrees(-5, -2, 5, 2)
        ) == 0.0

    def test_touching_endpoint_is_zero(self, spherical):
        assert distance(
            spherical, Segment(P(0, -10), P(0, 0)), Box.from_degrees(-5, 0, 5, 5)
        ) == 0.0

    def test_vertex_in_longitude_band(self, spherical):
        d = distance(spherical, ARC, Box.from_degrees(-5, 12, 5, 20))
        assert d == pytest.approx(EARTH_R * (R(12) - VERTEX_LAT), rel=1e-9)

    def test_separation_grows_with_box_bottom(self, spherical):
        distances = [
            distance(spherical, ARC, Box.from_degrees(-5, bottom, 5, 20))
            for bottom in (11, 12, 13, 14)
        ]
        assert distances == sorted(distances)
        assert distances[0] > 0

    def test_vertex_known_uses_near_corner(self, spherical):
        box = Box.from_degrees(5, 10.14, 15, 20)
        d = distance(spherical, ARC, box)
        expected = spherical.point_segment.apply(box.bottom_left, ARC.p0, ARC.p1)
        assert d == pytest.approx(expected)
        assert 0 < d < EARTH_R * R(0.03)

    def test_segment_east_of_box_uses_far_corner(self, spherical):
        segment = Segment(P(20, 10), P(30, 10))
        box = Box.from_degrees(0, 15, 10, 20)
        expected = spherical.point_segment.apply(P(10, 15), segment.p0, segment.p1)
        assert distance(spherical, segment, box) == pytest.approx(expected)

    def test_meridian_west_of_box(self, spherical):
        d = distance(spherical, Segment(P(0, 10), P(0, -10)), Box.from_degrees(5, -5, 15, 5))
        expected = EARTH_R * math.asin(math.cos(R(5)) * math.sin(R(5)))
        assert d == pytest.approx(expected)

    def test_ascending_order_picks_other_corner(self, spherical):
        d = distance(
            spherical, Segment(P(0, 10), P(0, -10)), Box.from_degrees(5, -5, 15, 5),
            LongitudeOrder.ASCENDING
        )
        expected = EARTH_R * math.asin(math.cos(R(5)) * math.sin(R(15)))
        assert d == pytest.approx(expected)

    @pytest.mark.parametrize("order", list(LongitudeOrder))
    def test_equal_longitudes_pick_bottom_left(self, spherical, order):
        d = distance(
            spherical, Segment(P(0, -30), P(0, -20)), Box.from_degrees(0, -5, 10, 5), order
        )
        assert d == pytest.approx(EARTH_R * R(15))

    def test_degenerate_segment_is_point_distance(self, spherical):
        box = Box.from_degrees(0, -5, 10, 5)
        assert distance(spherical, Segment(P(0, -20), P(0, -20)), box) == pytest.approx(
            EARTH_R * R(15)
        )
        assert distance(spherical, Segment(P(3, 0), P(3, 0)), box) == 0.0

    def test_endpoint_symmetry(self, spherical):
        for box in (Box.from_degrees(-5, 12, 5, 20), Box.from_degrees(5, 10.14, 15, 20)):
            assert distance(spherical, ARC, box) == pytest.approx(
                distance(spherical, ARC.reversed(), box), abs=1e-6
            )

    def test_unusable_vertex_falls_back_to_endpoint(self, spherical, monkeypatch, caplog):
        monkeypatch.setattr(
            "segment_box.below_of_box.vertex_longitude",
            lambda *args, **kwargs: float("nan")
        )
        d = distance(spherical, Segment(P(0, 10), P(0, -10)), Box.from_degrees(5, -5, 15, 5))
        expected = EARTH_R * math.asin(math.cos(R(5)) * math.sin(R(5)))
        assert d == pytest.approx(expected)
        assert "falling back" in caplog.text

    def test_explicit_bottom_right(self, spherical):
        bl, tr = P(-5, 12), P(5, 20)
        br = GeoPoint(tr.longitude, bl.latitude)
        d = segment_below_of_box_distance(
            ARC.p0, ARC.p1, tr, bl, br,
            spherical.point_point, spherical.point_segment
        )
        assert d == pytest.approx(EARTH_R * (R(12) - VERTEX_LAT), rel=1e-9)

    def test_mismatched_bottom_right_rejected(self, spherical):
        with pytest.raises(ValueError, match="bottom_right"):
            segment_below_of_box_distance(
                ARC.p0, ARC.p1, P(5, 20), P(-5, 12), P(6, 12),
                spherical.point_point, spherical.point_segment
            )

    def test_inverted_box_rejected(self, spherical):
        with pytest.raises(ValueError):
            SegmentBelowOfBoxDistance(spherical).apply(ARC.p0, ARC.p1, P(5, 0), P(-5, 10))

    def test_antimeridian_box_rejected(self, spherical):
        with pytest.raises(ValueError, match="antimeridian"):
            SegmentBelowOfBoxDistance(spherical).apply(ARC.p0, ARC.p1, P(-170, 10), P(170, 0))

    @pytest.mark.parametrize("segment", [
        Segment(P(-90, 0), P(90, 0.0001)),
        Segment(P(-90, 10), P(90, 10)),
    ])
    def test_pole_passing_segment_rejected(self, spherical, geographic, segment):
        box = Box.from_degrees(-5, 20, 5, 30)
        for strategies in (spherical, geographic):
            with pytest.raises(ValueError, match="pole"):
                distance(strategies, segment, box)

    def test_wrong_geometry_kinds_rejected(self, spherical):
        with pytest.raises(TypeError):
            SegmentBelowOfBoxDistance(spherical).apply_geometries(
                Box.from_degrees(-5, 12, 5, 20), ARC
            )

    def test_default_order(self, spherical):
        assert SegmentBelowOfBoxDistance(spherical).order is LongitudeOrder.DESCENDING


class TestSegmentAboveOfBoxDistance:
    def test_vertex_between_corners_uses_parallel(self, spherical):
        p_max = GeoPoint(0.0, VERTEX_LAT)
        d = segment_above_of_box_distance(
            ARC.p1, ARC.p0, p_max, P(5, 12),
            spherical.point_point, spherical.point_segment, LongitudeOrder.ASCENDING
        )
        assert d == pytest.approx(EARTH_R * (R(12) - VERTEX_LAT), rel=1e-9)

    def test_vertex_beyond_corner_uses_corner(self, spherical):
        p_max = GeoPoint(0.0, VERTEX_LAT)
        d = segment_above_of_box_distance(
            ARC.p1, ARC.p0, p_max, P(-5, 12),
            spherical.point_point, spherical.point_segment, LongitudeOrder.ASCENDING
        )
        assert d == pytest.approx(spherical.point_segment.apply(P(-5, 12), ARC.p1, ARC.p0))


class TestGeographicBelowOfBox:
    def test_close_to_sphere(self, spherical, geographic):
        box = Box.from_degrees(-5, 12, 5, 20)
        assert distance(geographic, ARC, box) == pytest.approx(
            distance(spherical, ARC, box), rel=0.02
        )

    def test_endpoint_symmetry(self, geographic):
        box = Box.from_degrees(-5, 12, 5, 20)
        assert distance(geographic, ARC, box) == pytest.approx(
            distance(geographic, ARC.reversed(), box), abs=1e-3
        )

    def test_intersecting_is_zero(self, geographic):
        assert distance(
            geographic, Segment(P(-10, 0), P(10, 0)), Box.from_degrees(-5, -2, 5, 2)
        ) == 0.0
