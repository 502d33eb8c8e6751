"""
Geospatial Module for the Segment-to-Box Distance Strategies.

All Earth-surface calculations originate from this module. The segment/box
algorithms in ``segment_box`` are written only against the strategies
defined here.

This module provides:
- Spherical and WGS84 ellipsoidal coordinate models
- Azimuth strategies (great circle and geodesic)
- Vertex (extremal latitude) formulas
- Segment envelopes
- Point-to-point, point-to-segment and point-to-box distances
"""

from geospatial.coordinate_models import (
    CoordinateSystem,
    EllipsoidParameters,
    WGS84Ellipsoid,
)

from geospatial.azimuth import (
    AzimuthStrategy,
    SphericalAzimuth,
    GeographicAzimuth,
)

from geospatial.vertex import (
    vertex_latitude,
    vertex_longitude,
)

from geospatial.envelope import segment_envelope

from geospatial.distance_calculations import (
    PointPointStrategy,
    PointSegmentStrategy,
    SphericalPointPoint,
    GeodesicPointPoint,
    SphericalCrossTrack,
    GeodesicCrossTrack,
    point_box_distance,
)

from geospatial.strategies import (
    StrategyConfig,
    DistanceStrategies,
    make_strategies,
)

__all__ = [
    # Coordinate models
    "CoordinateSystem",
    "EllipsoidParameters",
    "WGS84Ellipsoid",
    # Azimuth
    "AzimuthStrategy",
    "SphericalAzimuth",
    "GeographicAzimuth",
    # Vertex
    "vertex_latitude",
    "vertex_longitude",
    # Envelope
    "segment_envelope",
    # Distance calculations
    "PointPointStrategy",
    "PointSegmentStrategy",
    "SphericalPointPoint",
    "GeodesicPointPoint",
    "SphericalCrossTrack",
    "GeodesicCrossTrack",
    "point_box_distance",
    # Strategies
    "StrategyConfig",
    "DistanceStrategies",
    "make_strategies",
]
