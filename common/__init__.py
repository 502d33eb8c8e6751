"""
Common utilities and infrastructure for the segment-to-box distance strategies.

This package provides foundational components used across all modules:
- Physical constants with uncertainty bounds
- Angular unit conversion at the system boundary
- Immutable geometry value types
- Logging infrastructure
"""

from common.constants import PhysicalConstants
from common.units import ureg, Q_, angle_to_radians, angle_from_radians
from common.types import (
    GeometryKind,
    GeoPoint,
    Segment,
    Box,
    BoxCorners,
    box_corners,
    geometry_kind,
)
from common.logging_config import get_logger

__all__ = [
    "PhysicalConstants",
    "ureg",
    "Q_",
    "angle_to_radians",
    "angle_from_radians",
    "GeometryKind",
    "GeoPoint",
    "Segment",
    "Box",
    "BoxCorners",
    "box_corners",
    "geometry_kind",
    "get_logger",
]
