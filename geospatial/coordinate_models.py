"""
Coordinate Models for Spherical and Ellipsoidal Earth Geometry.

This module defines the two surface models supported by the distance
strategies and the coordinate conversions their formulas rely on.

Scientific Context
------------------
Domain: Geodesy, Earth geometry
Models:
- Spherical-equatorial: great circles on a sphere of given radius.
- Geographic: geodesics on an ellipsoid of revolution (WGS84 by default).

On the sphere, great circles are handled in Cartesian unit vectors. On the
ellipsoid, Clairaut's relation holds exactly in reduced (parametric)
latitude, which is the only conversion the geographic vertex formulas need.

References
----------
- NIMA TR8350.2: WGS84 parameters
- Karney, C.F.F. (2013). Algorithms for geodesics. Journal of Geodesy, 87(1), 43-55.
"""

from dataclasses import dataclass
from enum import Enum
import numpy as np
from numpy.typing import NDArray

from common.constants import PhysicalConstants


class CoordinateSystem(Enum):
    """Surface model selecting the azimuth, vertex and distance formulas."""
    SPHERICAL_EQUATORIAL = "spherical_equatorial"
    GEOGRAPHIC = "geographic"


@dataclass(frozen=True)
class EllipsoidParameters:
    """Parameters defining a reference ellipsoid.

    Attributes
    ----------
    a : float
        Semi-major axis (equatorial radius) in meters.
    f : float
        Flattening: f = (a - b) / a
    name : str
        Identifier for the ellipsoid.

    Derived Parameters
    ------------------
    b : float
        Semi-minor axis (polar radius) in meters.
    e2 : float
        First eccentricity squared: e² = (a² - b²) / a²
    """
    a: float
    f: float
    name: str

    @property
    def b(self) -> float:
        """Semi-minor axis in meters."""
        return self.a * (1 - self.f)

    @property
    def e2(self) -> float:
        """First eccentricity squared."""
        return self.f * (2 - self.f)


# WGS84 ellipsoid - the default for geographic strategies
WGS84Ellipsoid = EllipsoidParameters(
    a=PhysicalConstants.EARTH_SEMI_MAJOR_AXIS.value,
    f=PhysicalConstants.EARTH_FLATTENING.value,
    name="WGS84"
)


def to_unit_vector(lon_rad: float, lat_rad: float) -> NDArray[np.float64]:
    """Convert spherical coordinates to a Cartesian unit vector.

    Parameters
    ----------
    lon_rad, lat_rad : float
        Longitude and latitude in radians.

    Returns
    -------
    ndarray
        (x, y, z) with x towards (0, 0), y towards (π/2, 0), z towards
        the north pole.
    """
    cos_lat = np.cos(lat_rad)
    return np.array([
        cos_lat * np.cos(lon_rad),
        cos_lat * np.sin(lon_rad),
        np.sin(lat_rad)
    ])


def central_angle(u: NDArray[np.float64], v: NDArray[np.float64]) -> float:
    """Angle in radians between two unit vectors.

    Uses atan2 of the cross and dot products, which stays accurate for
    both tiny and near-antipodal separations.
    """
    return float(np.arctan2(np.linalg.norm(np.cross(u, v)), np.dot(u, v)))


def reduced_latitude(
    latitude_rad: float,
    ellipsoid: EllipsoidParameters = WGS84Ellipsoid
) -> float:
    """Convert geodetic latitude to reduced (parametric) latitude.

    Notes
    -----
    tan β = (1 - f) tan φ
    """
    return float(np.arctan2((1 - ellipsoid.f) * np.sin(latitude_rad),
                            np.cos(latitude_rad)))


def geodetic_latitude(
    reduced_latitude_rad: float,
    ellipsoid: EllipsoidParameters = WGS84Ellipsoid
) -> float:
    """Convert reduced (parametric) latitude back to geodetic latitude."""
    return float(np.arctan2(np.sin(reduced_latitude_rad),
                            (1 - ellipsoid.f) * np.cos(reduced_latitude_rad)))


def normalize_longitude(lon_rad: float) -> float:
    """Wrap a longitude into [-π, π]."""
    return float(np.arctan2(np.sin(lon_rad), np.cos(lon_rad)))


def wrap_angle(angle_rad: float) -> float:
    """Wrap an angle difference into (-π, π]."""
    wrapped = (angle_rad + np.pi) % (2 * np.pi) - np.pi
    if wrapped == -np.pi:
        return float(np.pi)
    return float(wrapped)
