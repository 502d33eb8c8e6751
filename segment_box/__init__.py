"""
Segment-to-Box Distance on Curved Surfaces.

This module provides:
- The segment/box disjointness test with extremal-point detection
- The segment-below-of-box distance strategy and its mirrored
  above-of-box fallback, parameterized by a longitude ordering
"""

from segment_box.disjoint import (
    DisjointOutcome,
    DisjointResult,
    classify_segment_box,
)

from segment_box.below_of_box import (
    LongitudeOrder,
    SegmentBelowOfBoxDistance,
    segment_below_of_box_distance,
    segment_above_of_box_distance,
)

__all__ = [
    "DisjointOutcome",
    "DisjointResult",
    "classify_segment_box",
    "LongitudeOrder",
    "SegmentBelowOfBoxDistance",
    "segment_below_of_box_distance",
    "segment_above_of_box_distance",
]
