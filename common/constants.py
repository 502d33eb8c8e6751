"""
Physical Constants for Curved-Surface Distance Calculations.

This module provides physical constants with their uncertainty bounds and sources.
All constants are defined with SI units and traceable to authoritative sources.

References
----------
- WGS84 parameters: NIMA TR8350.2, Third Edition, 2000
- Mean Earth radius: IUGG, Moritz (2000) Geodetic Reference System 1980
"""

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True)
class Constant:
    """A physical constant with uncertainty and provenance.

    Attributes
    ----------
    value : float
        The nominal value of the constant.
    uncertainty : float
        The standard uncertainty (1-sigma) of the constant.
    unit : str
        The SI unit of the constant.
    source : str
        Reference for the constant value.
    description : str
        Human-readable description of the constant.
    """
    value: float
    uncertainty: float
    unit: str
    source: str
    description: str


class PhysicalConstants:
    """Registry of physical constants used throughout the system.

    All constants are class attributes with full metadata including
    uncertainty bounds and authoritative sources.

    Earth Geometry (WGS84)
    ----------------------
    These constants define the reference ellipsoid used for the
    geographic (ellipsoidal) strategies. The mean radius is the
    default for the spherical-equatorial strategies.
    """

    # =========================================================================
    # WGS84 Ellipsoid Parameters
    # Reference: NIMA TR8350.2, Third Edition, 2000
    # =========================================================================

    EARTH_SEMI_MAJOR_AXIS: Final[Constant] = Constant(
        value=6_378_137.0,
        uncertainty=0.0,  # Defined exactly
        unit="m",
        source="WGS84, NIMA TR8350.2",
        description="Semi-major axis (equatorial radius) of WGS84 ellipsoid"
    )

    EARTH_SEMI_MINOR_AXIS: Final[Constant] = Constant(
        value=6_356_752.314245,
        uncertainty=0.0001,
        unit="m",
        source="WGS84, NIMA TR8350.2",
        description="Semi-minor axis (polar radius) of WGS84 ellipsoid"
    )

    EARTH_FLATTENING: Final[Constant] = Constant(
        value=1.0 / 298.257223563,
        uncertainty=0.0,  # Defined exactly
        unit="dimensionless",
        source="WGS84, NIMA TR8350.2",
        description="Flattening of WGS84 ellipsoid: f = (a - b) / a"
    )

    EARTH_MEAN_RADIUS: Final[Constant] = Constant(
        value=6_371_008.8,
        uncertainty=0.1,
        unit="m",
        source="IUGG mean radius",
        description="Mean radius of Earth, radius of the default sphere"
    )

    # =========================================================================
    # Numerical tolerances
    # =========================================================================

    ANGLE_EPSILON: Final[Constant] = Constant(
        value=1e-12,
        uncertainty=0.0,
        unit="rad",
        source="IEEE 754 double precision, ~1e4 ulp at pi",
        description="Tolerance for comparing latitudes and longitudes"
    )
