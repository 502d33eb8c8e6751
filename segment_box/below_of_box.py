"""
Distance between a Segment and a Box Lying above It.

A segment "below" a box approaches the box through the box's bottom side.
Its nearest box feature is then one of:

- the near bottom corner, when the segment's extremal point (vertex) lies
  at or beyond that corner in longitude;
- the far bottom corner, when the vertex lies at or beyond the far corner;
- the bottom side itself, directly above the vertex, when the vertex lies
  strictly inside the box's longitude band.

Which corner is "near" depends on which side the segment comes from. The
longitude ordering is therefore injected as a ``LongitudeOrder``: the same
code serves segments coming from the west and from the east, and the
mirrored "above of box" case is the same routine with the ordering
inverted and the other corner.

All longitudes and latitudes are in radians, distances in meters.
"""

from enum import Enum
from typing import Optional
import numpy as np

from common.logging_config import get_logger
from common.types import (
    Box,
    GeometryKind,
    GeoPoint,
    Segment,
    box_corners,
    geometry_kind,
)
from geospatial.distance_calculations import (
    PointPointStrategy,
    PointSegmentStrategy,
    point_box_distance,
)
from geospatial.envelope import segment_envelope
from geospatial.strategies import DistanceStrategies
from geospatial.vertex import vertex_longitude
from segment_box.disjoint import DisjointOutcome, classify_segment_box

logger = get_logger(__name__)


class LongitudeOrder(Enum):
    """Longitude ordering used for the corner tie-break.

    ASCENDING orders west to east (``a <= b``); DESCENDING orders east to
    west (``a >= b``). Both relations are inclusive.
    """
    ASCENDING = "ascending"
    DESCENDING = "descending"

    def precedes_or_equal(self, a: float, b: float) -> bool:
        if self is LongitudeOrder.ASCENDING:
            return a <= b
        return a >= b

    def inverted(self) -> 'LongitudeOrder':
        if self is LongitudeOrder.ASCENDING:
            return LongitudeOrder.DESCENDING
        return LongitudeOrder.ASCENDING


def segment_below_of_box_distance(
    p0: GeoPoint,
    p1: GeoPoint,
    top_right: GeoPoint,
    bottom_left: GeoPoint,
    bottom_right: Optional[GeoPoint],
    point_point_strategy: PointPointStrategy,
    point_segment_strategy: PointSegmentStrategy,
    order: LongitudeOrder = LongitudeOrder.DESCENDING
) -> float:
    """Minimum distance between a segment and a box lying above it.

    Parameters
    ----------
    p0, p1 : GeoPoint
        Segment endpoints.
    top_right, bottom_left : GeoPoint
        Defining corners of the box.
    bottom_right : GeoPoint, optional
        Derived from the defining corners when None.
    point_point_strategy, point_segment_strategy : strategies
        Distance primitives on the active surface. The azimuth strategy is
        taken from the point-segment strategy.
    order : LongitudeOrder
        Ordering under which ``bottom_left`` is the near corner when it
        precedes (or equals) the segment's extremal longitude. The default
        DESCENDING fits a segment approaching from the west.

    Returns
    -------
    float
        Distance in meters; exactly 0.0 when the segment and the box
        intersect or touch.

    Raises
    ------
    ValueError
        If the box is invalid (inverted latitudes, antimeridian crossing),
        if ``bottom_right`` is not the box's bottom-right corner, or if the
        segment spans π or more in longitude.

    Notes
    -----
    When the disjointness test leaves the extremal point unknown, its
    latitude is taken from the envelope top if ``p0.lat + p1.lat > 0`` and
    from the envelope bottom otherwise, regardless of where the box lies.
    A segment mostly in the southern hemisphere therefore gets its
    southern vertex, which is not the point nearest a box above it.
    Callers must mirror such configurations across the equator (negate
    all latitudes and swap the box's top and bottom) before calling.
    """
    box = Box(bottom_left, top_right)
    derived_bottom_right = box_corners(bottom_left, top_right).bottom_right
    if bottom_right is None:
        bottom_right = derived_bottom_right
    elif bottom_right != derived_bottom_right:
        raise ValueError(
            f"bottom_right {bottom_right} does not match the box corners "
            f"{bottom_left} / {top_right}"
        )

    segment = Segment(p0, p1)
    if segment.is_degenerate:
        return point_box_distance(p0, box, point_point_strategy, point_segment_strategy)

    azimuth_strategy = point_segment_strategy.azimuth_strategy
    disjoint = classify_segment_box(segment, box, azimuth_strategy)

    if disjoint.outcome is DisjointOutcome.INTERSECTING:
        return 0.0

    if disjoint.outcome is DisjointOutcome.DISJOINT_VERTEX_KNOWN:
        p_max = disjoint.p_max
    else:
        p_max = _extremal_point(segment, bottom_left, point_point_strategy, azimuth_strategy)

    if order.precedes_or_equal(bottom_left.longitude, p_max.longitude):
        logger.debug("Extremal point at or beyond the near corner, using bottom_left")
        return point_segment_strategy.apply(bottom_left, p0, p1)

    return segment_above_of_box_distance(
        p1, p0, p_max, bottom_right,
        point_point_strategy, point_segment_strategy,
        order.inverted()
    )


def segment_above_of_box_distance(
    p0: GeoPoint,
    p1: GeoPoint,
    p_max: GeoPoint,
    corner: GeoPoint,
    point_point_strategy: PointPointStrategy,
    point_segment_strategy: PointSegmentStrategy,
    order: LongitudeOrder
) -> float:
    """Distance from a box side to a disjoint segment with known vertex.

    Parameters
    ----------
    p0, p1 : GeoPoint
        Segment endpoints.
    p_max : GeoPoint
        Extremal point of the segment towards the box.
    corner : GeoPoint
        Corner of the box side facing the segment.
    point_point_strategy, point_segment_strategy : strategies
        Distance primitives on the active surface.
    order : LongitudeOrder
        Ordering under which ``corner`` is nearest when it precedes (or
        equals) the extremal longitude.

    Returns
    -------
    float
        Distance in meters.
    """
    if order.precedes_or_equal(corner.longitude, p_max.longitude):
        logger.debug("Extremal point at or beyond the far corner")
        return point_segment_strategy.apply(corner, p0, p1)

    # The vertex lies inside the box's longitude band; the nearest box point
    # is on the corner's parallel at the vertex longitude
    edge_point = GeoPoint(p_max.longitude, corner.latitude)
    return point_point_strategy.apply(p_max, edge_point)


def _extremal_point(
    segment: Segment,
    bottom_left: GeoPoint,
    point_point_strategy: PointPointStrategy,
    azimuth_strategy
) -> GeoPoint:
    """Compute the segment vertex left unknown by the disjointness test."""
    p0, p1 = segment.p0, segment.p1
    envelope = segment_envelope(p0, p1, azimuth_strategy)

    if p0.latitude + p1.latitude > 0:
        vertex_lat = envelope.lat_max
    else:
        vertex_lat = envelope.lat_min

    alp1 = azimuth_strategy.apply_points(p0, p1)
    vertex_lon = vertex_longitude(
        p0.longitude, p0.latitude,
        p1.longitude, p1.latitude,
        vertex_lat, alp1, azimuth_strategy
    )

    if (np.isfinite(vertex_lon) and np.isfinite(vertex_lat)
            and abs(vertex_lon) <= np.pi and abs(vertex_lat) <= np.pi / 2):
        return GeoPoint(vertex_lon, vertex_lat)

    nearer = min(
        (p0, p1),
        key=lambda p: point_point_strategy.apply(bottom_left, p)
    )
    logger.warning(
        f"Vertex ({vertex_lon}, {vertex_lat}) unusable, "
        f"falling back to endpoint {nearer.to_degrees()}"
    )
    return nearer


class SegmentBelowOfBoxDistance:
    """Stateless, reusable form of ``segment_below_of_box_distance``.

    Parameters
    ----------
    strategies : DistanceStrategies
        Distance primitives for one coordinate system.
    order : LongitudeOrder
        Corner ordering, see ``segment_below_of_box_distance``.

    Examples
    --------
    >>> from geospatial.strategies import make_strategies
    >>> distance = SegmentBelowOfBoxDistance(make_strategies())
    >>> distance.apply(
    ...     GeoPoint.from_degrees(-10, 10), GeoPoint.from_degrees(10, 10),
    ...     GeoPoint.from_degrees(5, 20), GeoPoint.from_degrees(-5, 12)
    ... ) > 0
    True
    """

    def __init__(
        self,
        strategies: DistanceStrategies,
        order: LongitudeOrder = LongitudeOrder.DESCENDING
    ):
        self.strategies = strategies
        self.order = order

    def apply(
        self,
        p0: GeoPoint,
        p1: GeoPoint,
        top_right: GeoPoint,
        bottom_left: GeoPoint,
        bottom_right: Optional[GeoPoint] = None
    ) -> float:
        return segment_below_of_box_distance(
            p0, p1, top_right, bottom_left, bottom_right,
            self.strategies.point_point,
            self.strategies.point_segment,
            self.order
        )

    def apply_geometries(self, segment: Segment, box: Box) -> float:
        """Distance between a ``Segment`` and a ``Box`` value.

        Raises
        ------
        TypeError
            If the arguments are not a segment and a box, in that order.
        """
        kinds = (geometry_kind(segment), geometry_kind(box))
        if kinds != (GeometryKind.SEGMENT, GeometryKind.BOX):
            raise TypeError(
                f"Expected (segment, box), got ({kinds[0].value}, {kinds[1].value})"
            )
        return self.apply(segment.p0, segment.p1, box.top_right, box.bottom_left)
