"""
Vertex Formulas for Great Circles and Geodesics.

The vertex of a great circle or geodesic is its point of extremal latitude.
Every such curve (except a meridian) has exactly two vertices, a northern
one and a southern one, half a revolution apart.

Scientific Context
------------------
Clairaut's relation states that along a geodesic on a surface of revolution
the product cos(β) sin(α) is constant, where β is the reduced latitude and
α the azimuth. At a vertex the azimuth is ±90°, so

    cos(β_vertex) = |sin(α₁)| cos(β₁)

On the sphere β is the ordinary latitude and the vertex longitude follows in
closed form from Napier's rules for the right spherical triangle formed by
the pole, the start point and the vertex:

    tan(λ_vertex - λ₁) = cos(α₁) / (sin(α₁) sin(φ₁))

On the ellipsoid the longitude is located numerically: the geodesic is
followed with pyproj's direct solver until the azimuth crosses east/west.

References
----------
- Karney, C.F.F. (2013). Algorithms for geodesics. Journal of Geodesy, 87(1), 43-55.
- Todhunter, I. (1886). Spherical Trigonometry, §§ 62-68.
"""

import numpy as np

from common.constants import PhysicalConstants
from common.logging_config import get_logger
from geospatial.azimuth import AzimuthStrategy
from geospatial.coordinate_models import (
    CoordinateSystem,
    geodetic_latitude,
    normalize_longitude,
    reduced_latitude,
)

logger = get_logger(__name__)

ANGLE_EPSILON = PhysicalConstants.ANGLE_EPSILON.value

# Stopping width of the geodesic vertex bisection, in meters
VERTEX_SEARCH_TOLERANCE_M = 1e-4


def vertex_latitude(
    lat1_rad: float,
    azimuth_rad: float,
    azimuth_strategy: AzimuthStrategy
) -> float:
    """Latitude of the northern vertex of the curve through a point.

    Parameters
    ----------
    lat1_rad : float
        Latitude of a point on the curve, in radians.
    azimuth_rad : float
        Bearing of the curve at that point, in radians.
    azimuth_strategy : AzimuthStrategy
        Selects the surface model.

    Returns
    -------
    float
        Northern vertex latitude in [0, π/2]. The southern vertex lies at
        the negated latitude.
    """
    sin_alp = abs(np.sin(azimuth_rad))

    if azimuth_strategy.coordinate_system is CoordinateSystem.GEOGRAPHIC:
        ellipsoid = azimuth_strategy.ellipsoid
        beta1 = reduced_latitude(lat1_rad, ellipsoid)
        beta0 = np.arccos(np.clip(sin_alp * np.cos(beta1), 0.0, 1.0))
        return geodetic_latitude(beta0, ellipsoid)

    return float(np.arccos(np.clip(sin_alp * np.cos(lat1_rad), 0.0, 1.0)))


def vertex_longitude(
    lon1_rad: float,
    lat1_rad: float,
    lon2_rad: float,
    lat2_rad: float,
    vertex_lat_rad: float,
    azimuth_rad: float,
    azimuth_strategy: AzimuthStrategy
) -> float:
    """Longitude at which the curve through two points reaches a latitude.

    The target latitude is expected to be an extremal latitude of the
    segment, i.e. either one of its endpoint latitudes or a vertex
    latitude of the curve.

    Parameters
    ----------
    lon1_rad, lat1_rad : float
        First endpoint in radians.
    lon2_rad, lat2_rad : float
        Second endpoint in radians.
    vertex_lat_rad : float
        Target latitude in radians.
    azimuth_rad : float
        Bearing of the curve at the first endpoint, in radians.
    azimuth_strategy : AzimuthStrategy
        Selects the surface model.

    Returns
    -------
    float
        Longitude in radians. NaN if the curve never reaches the target
        latitude; callers must treat NaN as unusable.
    """
    if abs(vertex_lat_rad - lat1_rad) <= ANGLE_EPSILON:
        return lon1_rad
    if abs(vertex_lat_rad - lat2_rad) <= ANGLE_EPSILON:
        return lon2_rad

    # Meridian: the vertex is a pole
    if abs(np.sin(azimuth_rad)) <= ANGLE_EPSILON:
        return lon1_rad

    reachable = vertex_latitude(lat1_rad, azimuth_rad, azimuth_strategy)
    if abs(vertex_lat_rad) > reachable + ANGLE_EPSILON:
        logger.debug(
            f"Latitude {vertex_lat_rad:.12f} rad unreachable "
            f"(vertex at ±{reachable:.12f} rad)"
        )
        return float("nan")

    northern = not vertex_lat_rad < min(lat1_rad, lat2_rad)

    if azimuth_strategy.coordinate_system is CoordinateSystem.GEOGRAPHIC:
        return _geographic_vertex_longitude(
            lon1_rad, lat1_rad, azimuth_rad, northern, azimuth_strategy
        )
    return _spherical_vertex_longitude(lon1_rad, lat1_rad, azimuth_rad, northern)


def _spherical_vertex_longitude(
    lon1_rad: float,
    lat1_rad: float,
    azimuth_rad: float,
    northern: bool
) -> float:
    sin_alp = np.sin(azimuth_rad)
    cos_alp = np.cos(azimuth_rad)

    # Multiplying both atan2 arguments by sin(α) selects the northern vertex
    dlon = np.arctan2(sin_alp * cos_alp, sin_alp * sin_alp * np.sin(lat1_rad))
    if not northern:
        dlon += np.pi

    return _in_longitude_range(lon1_rad + dlon)


def _geographic_vertex_longitude(
    lon1_rad: float,
    lat1_rad: float,
    azimuth_rad: float,
    northern: bool,
    azimuth_strategy: AzimuthStrategy,
    tolerance_m: float = VERTEX_SEARCH_TOLERANCE_M
) -> float:
    geod = azimuth_strategy.geod

    # Head towards the requested vertex: latitude changes monotonically
    # until the azimuth crosses east/west
    heading_rad = azimuth_rad
    if (np.cos(azimuth_rad) >= 0) != northern:
        heading_rad = azimuth_rad + np.pi

    lon1_deg = np.degrees(lon1_rad)
    lat1_deg = np.degrees(lat1_rad)
    heading_deg = np.degrees(heading_rad)

    # No vertex lies further than half a revolution away
    lo, hi = 0.0, np.pi * azimuth_strategy.ellipsoid.a
    while hi - lo > tolerance_m:
        mid = 0.5 * (lo + hi)
        _, _, back_az_deg = geod.fwd(lon1_deg, lat1_deg, heading_deg, mid)
        # Forward azimuth at ``mid`` is the back azimuth reversed
        cos_forward = -np.cos(np.radians(back_az_deg))
        approaching = cos_forward > 0 if northern else cos_forward < 0
        if approaching:
            lo = mid
        else:
            hi = mid

    lon_deg, _, _ = geod.fwd(lon1_deg, lat1_deg, heading_deg, 0.5 * (lo + hi))
    return _in_longitude_range(np.radians(lon_deg))


def _in_longitude_range(lon_rad: float) -> float:
    if -np.pi <= lon_rad <= np.pi:
        return float(lon_rad)
    return normalize_longitude(lon_rad)
