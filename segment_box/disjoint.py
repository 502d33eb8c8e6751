"""
Disjointness Test between a Curved Segment and a Latitude/Longitude Box.

The test runs from cheapest to most expensive and stops at the first
conclusive step:

1. An endpoint lies in the box: the two intersect.
2. The segment envelope and the box are disjoint: so are the segment and
   the box. The point of the segment nearest the box is left to the caller.
3. The box corners lie on both sides of the curve: the two intersect.
4. All corners lie on the pole side of the curve and the curve bulges
   towards the box: the segment vertex decides. The vertex becomes the
   extremal point reported to the caller.

Sides are decided by comparing the segment bearing with the bearings from
its western endpoint to the four corners.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional
import numpy as np

from common.logging_config import get_logger
from common.types import Box, GeoPoint, Segment
from geospatial.azimuth import AzimuthStrategy
from geospatial.coordinate_models import wrap_angle
from geospatial.envelope import segment_envelope
from geospatial.vertex import vertex_longitude

logger = get_logger(__name__)


class DisjointOutcome(IntEnum):
    """Outcome of the segment/box disjointness test."""
    INTERSECTING = 0
    DISJOINT_VERTEX_UNKNOWN = 1
    DISJOINT_VERTEX_KNOWN = 2


@dataclass(frozen=True)
class DisjointResult:
    """Result of ``classify_segment_box``.

    Attributes
    ----------
    outcome : DisjointOutcome
        Whether the segment and box intersect, and if not, whether the
        extremal point was computed.
    p_max : GeoPoint, optional
        Extremal (vertex) point of the segment; set only for
        ``DISJOINT_VERTEX_KNOWN``.
    """
    outcome: DisjointOutcome
    p_max: Optional[GeoPoint] = None

    @property
    def is_disjoint(self) -> bool:
        return self.outcome is not DisjointOutcome.INTERSECTING


def classify_segment_box(
    segment: Segment,
    box: Box,
    azimuth_strategy: AzimuthStrategy
) -> DisjointResult:
    """Decide whether a segment and a box are disjoint.

    Parameters
    ----------
    segment : Segment
        The curved segment (great-circle arc or geodesic).
    box : Box
        The latitude/longitude box.
    azimuth_strategy : AzimuthStrategy
        Bearing computation on the active surface.

    Returns
    -------
    DisjointResult
        The outcome and, when it was computed, the segment vertex.
    """
    if box.contains(segment.p0) or box.contains(segment.p1):
        return DisjointResult(DisjointOutcome.INTERSECTING)

    # Work from the western endpoint
    p0, p1 = segment.p0, segment.p1
    if p0.longitude > p1.longitude:
        p0, p1 = p1, p0
    lon1, lat1 = p0.longitude, p0.latitude
    lon2, lat2 = p1.longitude, p1.latitude

    envelope = segment_envelope(p0, p1, azimuth_strategy)
    if box.is_disjoint_from(envelope):
        return DisjointResult(DisjointOutcome.DISJOINT_VERTEX_UNKNOWN)

    alp1 = azimuth_strategy.apply(lon1, lat1, lon2, lat2)
    corners = box.corners()
    left_of_curve = [
        wrap_angle(azimuth_strategy.apply(lon1, lat1, c.longitude, c.latitude) - alp1) < 0
        for c in (corners.bottom_left, corners.bottom_right,
                  corners.top_left, corners.top_right)
    ]
    if any(left_of_curve) and not all(left_of_curve):
        return DisjointResult(DisjointOutcome.INTERSECTING)

    lat_sum = lat1 + lat2
    if (lat1 < box.lat_min and lat_sum > 0) or (lat1 > box.lat_max and lat_sum < 0):
        if lat_sum > 0:
            vertex_lat = envelope.lat_max
            box_lat_towards_equator = box.lat_min
        else:
            vertex_lat = envelope.lat_min
            box_lat_towards_equator = box.lat_max

        vertex_lon = vertex_longitude(
            lon1, lat1, lon2, lat2, vertex_lat, alp1, azimuth_strategy
        )
        if not np.isfinite(vertex_lon):
            logger.debug("Vertex longitude unavailable, leaving it to the caller")
            return DisjointResult(DisjointOutcome.DISJOINT_VERTEX_UNKNOWN)

        if (box.lon_min <= vertex_lon <= box.lon_max
                and abs(vertex_lat) >= abs(box_lat_towards_equator)):
            return DisjointResult(DisjointOutcome.INTERSECTING)

        return DisjointResult(
            DisjointOutcome.DISJOINT_VERTEX_KNOWN,
            GeoPoint(vertex_lon, vertex_lat)
        )

    return DisjointResult(DisjointOutcome.DISJOINT_VERTEX_UNKNOWN)
