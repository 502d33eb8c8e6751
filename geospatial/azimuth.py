"""
Azimuth Strategies for Great Circles and Geodesics.

An azimuth strategy returns the initial bearing of the shortest surface
curve joining two points. It is the one surface-dependent primitive the
disjointness test and the vertex formulas are built on, so each strategy
also carries the surface description (coordinate system, radius or
ellipsoid) those formulas need.

Conventions
-----------
- Inputs and outputs are in RADIANS.
- Bearings are measured clockwise from north and returned in [-π, π].
- Coincident points yield a bearing of 0.
"""

from abc import ABC, abstractmethod
import numpy as np

from pyproj import Geod

from common.constants import PhysicalConstants
from geospatial.coordinate_models import (
    CoordinateSystem,
    EllipsoidParameters,
    WGS84Ellipsoid,
)


class AzimuthStrategy(ABC):
    """Abstract base class for azimuth (initial bearing) computations."""

    coordinate_system: CoordinateSystem

    @abstractmethod
    def apply(
        self,
        lon1_rad: float,
        lat1_rad: float,
        lon2_rad: float,
        lat2_rad: float
    ) -> float:
        """Initial bearing from point 1 towards point 2.

        Parameters
        ----------
        lon1_rad, lat1_rad : float
            First point in radians.
        lon2_rad, lat2_rad : float
            Second point in radians.

        Returns
        -------
        float
            Bearing in radians, clockwise from north, in [-π, π].
        """
        pass

    def apply_points(self, p, q) -> float:
        """Bearing between two ``GeoPoint`` instances."""
        return self.apply(p.longitude, p.latitude, q.longitude, q.latitude)


class SphericalAzimuth(AzimuthStrategy):
    """Great-circle azimuth on a sphere.

    Parameters
    ----------
    radius_m : float
        Sphere radius in meters. It does not affect bearings but is carried
        so that the distance strategies built on this azimuth agree on the
        surface.

    Notes
    -----
    tan α = sin Δλ cos φ₂ / (cos φ₁ sin φ₂ - sin φ₁ cos φ₂ cos Δλ)
    """

    coordinate_system = CoordinateSystem.SPHERICAL_EQUATORIAL

    def __init__(self, radius_m: float = PhysicalConstants.EARTH_MEAN_RADIUS.value):
        self.radius_m = radius_m

    def apply(self, lon1_rad, lat1_rad, lon2_rad, lat2_rad) -> float:
        dlon = lon2_rad - lon1_rad
        cos_lat2 = np.cos(lat2_rad)
        y = np.sin(dlon) * cos_lat2
        x = (np.cos(lat1_rad) * np.sin(lat2_rad)
             - np.sin(lat1_rad) * cos_lat2 * np.cos(dlon))
        return float(np.arctan2(y, x))

    def __repr__(self) -> str:
        return f"SphericalAzimuth(radius_m={self.radius_m})"


class GeographicAzimuth(AzimuthStrategy):
    """Geodesic azimuth on an ellipsoid of revolution.

    This wraps the `pyproj` library, which uses the GeographicLib
    algorithms by Charles Karney (full double precision, convergent for
    all point configurations including nearly antipodal ones).

    Parameters
    ----------
    ellipsoid : EllipsoidParameters
        Reference ellipsoid (default: WGS84).
    """

    coordinate_system = CoordinateSystem.GEOGRAPHIC

    def __init__(self, ellipsoid: EllipsoidParameters = WGS84Ellipsoid):
        self.ellipsoid = ellipsoid
        self.geod = Geod(a=ellipsoid.a, f=ellipsoid.f)

    def apply(self, lon1_rad, lat1_rad, lon2_rad, lat2_rad) -> float:
        az_forward_deg, _, _ = self.geod.inv(
            np.degrees(lon1_rad), np.degrees(lat1_rad),
            np.degrees(lon2_rad), np.degrees(lat2_rad)
        )
        return float(np.radians(az_forward_deg))

    def __repr__(self) -> str:
        return f"GeographicAzimuth(ellipsoid={self.ellipsoid.name})"
