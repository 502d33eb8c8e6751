"""
Point Distance Primitives on the Sphere and on the Ellipsoid.

This module provides the closed-form (sphere) and geodesic (ellipsoid)
minimum-distance computations the segment-to-box strategies are composed
of:

- point to point
- point to segment ("cross-track" distance)
- point to latitude/longitude box

Scientific Context
------------------
Domain: Geodesy, differential geometry on curved surfaces

On the sphere, the distance from a point to a great-circle arc is either
the perpendicular (cross-track) distance, when the foot of the
perpendicular falls inside the arc, or the distance to the nearer endpoint.

On the ellipsoid there is no closed form. The geodesic segment is sampled
with pyproj's direct solver and the nearest sample is refined with a
golden-section search; pyproj wraps the GeographicLib algorithms by Charles
Karney, accurate to better than 15 nm for any pair of points.

References
----------
- Karney, C.F.F. (2013). Algorithms for geodesics. Journal of Geodesy, 87(1), 43-55.
- GeographicLib: https://geographiclib.sourceforge.io/
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Tuple
import numpy as np
from numpy.typing import NDArray

from pyproj import Geod

from common.constants import PhysicalConstants
from common.types import Box, GeoPoint
from geospatial.azimuth import AzimuthStrategy, GeographicAzimuth, SphericalAzimuth
from geospatial.coordinate_models import (
    EllipsoidParameters,
    WGS84Ellipsoid,
    central_angle,
    to_unit_vector,
)

_GOLDEN_RATIO = (np.sqrt(5.0) - 1.0) / 2.0

# Vectors shorter than this are treated as zero
_VECTOR_EPSILON = 1e-15


@dataclass
class GeodesicResult:
    """Result of an inverse geodesic calculation.

    Attributes
    ----------
    distance_m : float
        Geodesic (shortest path) distance in meters.
    azimuth_forward_rad : float
        Forward azimuth (direction from point 1 to point 2) in radians,
        measured clockwise from north.
    azimuth_back_rad : float
        Back azimuth (direction from point 2 to point 1) in radians,
        measured clockwise from north.
    """
    distance_m: float
    azimuth_forward_rad: float
    azimuth_back_rad: float


def geodesic_inverse(
    geod: Geod,
    lon1_rad: float,
    lat1_rad: float,
    lon2_rad: float,
    lat2_rad: float
) -> GeodesicResult:
    """Solve the inverse geodesic problem.

    Given two points, find the distance and azimuths between them.

    Parameters
    ----------
    geod : pyproj.Geod
        Geodesic calculator for the reference ellipsoid.
    lon1_rad, lat1_rad : float
        First point in radians.
    lon2_rad, lat2_rad : float
        Second point in radians.

    Returns
    -------
    GeodesicResult
        Distance in meters, forward and back azimuths in radians.
    """
    az_forward_deg, az_back_deg, distance_m = geod.inv(
        np.degrees(lon1_rad), np.degrees(lat1_rad),
        np.degrees(lon2_rad), np.degrees(lat2_rad)
    )

    return GeodesicResult(
        distance_m=float(distance_m),
        azimuth_forward_rad=float(np.radians(az_forward_deg)),
        azimuth_back_rad=float(np.radians(az_back_deg))
    )


def geodesic_direct(
    geod: Geod,
    lon1_rad: float,
    lat1_rad: float,
    azimuth_rad: float,
    distance_m: NDArray[np.float64]
) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Solve the direct geodesic problem for one or many distances.

    Parameters
    ----------
    geod : pyproj.Geod
        Geodesic calculator for the reference ellipsoid.
    lon1_rad, lat1_rad : float
        Starting point in radians.
    azimuth_rad : float
        Forward azimuth in radians (clockwise from north).
    distance_m : ndarray
        Distances to travel in meters.

    Returns
    -------
    Tuple[ndarray, ndarray]
        (lon_deg, lat_deg) of the endpoints, in DEGREES, ready to be fed
        back into pyproj.
    """
    distance_m = np.atleast_1d(np.asarray(distance_m, dtype=np.float64))
    n = distance_m.shape[0]
    lon_deg, lat_deg, _ = geod.fwd(
        np.full(n, np.degrees(lon1_rad)),
        np.full(n, np.degrees(lat1_rad)),
        np.full(n, np.degrees(azimuth_rad)),
        distance_m
    )
    return np.asarray(lon_deg), np.asarray(lat_deg)


class PointPointStrategy(ABC):
    """Abstract base class for point-to-point surface distances."""

    @abstractmethod
    def apply(self, p: GeoPoint, q: GeoPoint) -> float:
        """Distance between two points in meters."""
        pass


class SphericalPointPoint(PointPointStrategy):
    """Great-circle distance on a sphere of given radius."""

    def __init__(self, radius_m: float = PhysicalConstants.EARTH_MEAN_RADIUS.value):
        self.radius_m = radius_m

    def apply(self, p: GeoPoint, q: GeoPoint) -> float:
        angle = central_angle(
            to_unit_vector(p.longitude, p.latitude),
            to_unit_vector(q.longitude, q.latitude)
        )
        return self.radius_m * angle


class GeodesicPointPoint(PointPointStrategy):
    """Geodesic distance on an ellipsoid of revolution."""

    def __init__(self, ellipsoid: EllipsoidParameters = WGS84Ellipsoid):
        self.ellipsoid = ellipsoid
        self.geod = Geod(a=ellipsoid.a, f=ellipsoid.f)

    def apply(self, p: GeoPoint, q: GeoPoint) -> float:
        if p == q:
            return 0.0
        return geodesic_inverse(
            self.geod, p.longitude, p.latitude, q.longitude, q.latitude
        ).distance_m


class PointSegmentStrategy(ABC):
    """Abstract base class for point-to-segment surface distances.

    Attributes
    ----------
    azimuth_strategy : AzimuthStrategy
        Bearing computation on the same surface; consumed by the
        disjointness test and the vertex formulas.
    point_point : PointPointStrategy
        Point distance on the same surface.
    """

    azimuth_strategy: AzimuthStrategy
    point_point: PointPointStrategy

    @abstractmethod
    def apply(self, point: GeoPoint, p0: GeoPoint, p1: GeoPoint) -> float:
        """Minimum distance in meters from ``point`` to segment (p0, p1).

        A zero-length segment is handled as a point.
        """
        pass


class SphericalCrossTrack(PointSegmentStrategy):
    """Point-to-great-circle-arc distance on a sphere.

    Parameters
    ----------
    radius_m : float
        Sphere radius in meters (default: IUGG mean Earth radius).
    """

    def __init__(self, radius_m: float = PhysicalConstants.EARTH_MEAN_RADIUS.value):
        self.radius_m = radius_m
        self.azimuth_strategy = SphericalAzimuth(radius_m)
        self.point_point = SphericalPointPoint(radius_m)

    def apply(self, point: GeoPoint, p0: GeoPoint, p1: GeoPoint) -> float:
        a = to_unit_vector(p0.longitude, p0.latitude)
        b = to_unit_vector(p1.longitude, p1.latitude)
        p = to_unit_vector(point.longitude, point.latitude)

        endpoint_distance = self.radius_m * min(central_angle(p, a), central_angle(p, b))

        normal = np.cross(a, b)
        normal_norm = np.linalg.norm(normal)
        if normal_norm < _VECTOR_EPSILON:
            # Zero-length (or antipodal) segment
            return endpoint_distance
        normal /= normal_norm

        offset = np.dot(p, normal)
        foot = p - offset * normal
        foot_norm = np.linalg.norm(foot)
        if foot_norm < _VECTOR_EPSILON:
            # Point is a pole of the great circle, every arc point is π/2 away
            return endpoint_distance
        foot /= foot_norm

        # Foot of the perpendicular lies between a and b
        if (np.dot(np.cross(a, foot), normal) >= 0
                and np.dot(np.cross(foot, b), normal) >= 0):
            cross_track = self.radius_m * np.arcsin(np.clip(abs(offset), 0.0, 1.0))
            return float(min(cross_track, endpoint_distance))

        return endpoint_distance

    def __repr__(self) -> str:
        return f"SphericalCrossTrack(radius_m={self.radius_m})"


class GeodesicCrossTrack(PointSegmentStrategy):
    """Point-to-geodesic-segment distance on an ellipsoid.

    Parameters
    ----------
    ellipsoid : EllipsoidParameters
        Reference ellipsoid (default: WGS84).
    samples : int
        Number of points sampled along the segment before refinement.
    tolerance_m : float
        Width, in meters along the segment, at which the golden-section
        refinement stops.
    """

    def __init__(
        self,
        ellipsoid: EllipsoidParameters = WGS84Ellipsoid,
        samples: int = 32,
        tolerance_m: float = 1e-3
    ):
        if samples < 3:
            raise ValueError(f"At least 3 samples are required, got {samples}")
        self.ellipsoid = ellipsoid
        self.samples = samples
        self.tolerance_m = tolerance_m
        self.azimuth_strategy = GeographicAzimuth(ellipsoid)
        self.point_point = GeodesicPointPoint(ellipsoid)
        self.geod = self.point_point.geod

    def apply(self, point: GeoPoint, p0: GeoPoint, p1: GeoPoint) -> float:
        endpoint_distance = min(
            self.point_point.apply(point, p0),
            self.point_point.apply(point, p1)
        )

        line = geodesic_inverse(
            self.geod, p0.longitude, p0.latitude, p1.longitude, p1.latitude
        )
        if line.distance_m <= self.tolerance_m:
            return endpoint_distance

        lon_p_deg = np.degrees(point.longitude)
        lat_p_deg = np.degrees(point.latitude)

        def distance_at(s: NDArray[np.float64]) -> NDArray[np.float64]:
            lon_deg, lat_deg = geodesic_direct(
                self.geod, p0.longitude, p0.latitude, line.azimuth_forward_rad, s
            )
            _, _, dist = self.geod.inv(
                np.full(lon_deg.shape, lon_p_deg),
                np.full(lat_deg.shape, lat_p_deg),
                lon_deg,
                lat_deg
            )
            return np.asarray(dist, dtype=np.float64)

        stations = np.linspace(0.0, line.distance_m, self.samples)
        sampled = distance_at(stations)
        i = int(np.argmin(sampled))

        lo = stations[max(i - 1, 0)]
        hi = stations[min(i + 1, self.samples - 1)]
        best = float(sampled[i])

        # Golden-section refinement inside the bracket around the best sample
        x1 = hi - _GOLDEN_RATIO * (hi - lo)
        x2 = lo + _GOLDEN_RATIO * (hi - lo)
        f1, f2 = distance_at(np.array([x1, x2]))
        while hi - lo > self.tolerance_m:
            if f1 < f2:
                hi, x2, f2 = x2, x1, f1
                x1 = hi - _GOLDEN_RATIO * (hi - lo)
                f1 = distance_at(np.array([x1]))[0]
            else:
                lo, x1, f1 = x1, x2, f2
                x2 = lo + _GOLDEN_RATIO * (hi - lo)
                f2 = distance_at(np.array([x2]))[0]
            best = min(best, f1, f2)

        return float(min(best, endpoint_distance))

    def __repr__(self) -> str:
        return (
            f"GeodesicCrossTrack(ellipsoid={self.ellipsoid.name}, "
            f"samples={self.samples}, tolerance_m={self.tolerance_m})"
        )


def point_box_distance(
    point: GeoPoint,
    box: Box,
    point_point: PointPointStrategy,
    point_segment: PointSegmentStrategy
) -> float:
    """Minimum distance from a point to a latitude/longitude box.

    Parameters
    ----------
    point : GeoPoint
        The point.
    box : Box
        The box; its top and bottom sides are parallels, its east and west
        sides are meridians.
    point_point, point_segment : strategies
        Distance primitives on the active surface.

    Returns
    -------
    float
        Distance in meters, 0 if the point lies in the closed box.

    Notes
    -----
    Inside the box's longitude band the nearest box point lies on the same
    meridian as the point, at the nearer of the two edge latitudes. Outside
    the band the nearest box point lies on the nearer meridian side, which
    is a geodesic segment.
    """
    if box.lon_min <= point.longitude <= box.lon_max:
        if box.lat_min <= point.latitude <= box.lat_max:
            return 0.0
        edge_lat = box.lat_max if point.latitude > box.lat_max else box.lat_min
        return point_point.apply(point, GeoPoint(point.longitude, edge_lat))

    side_lon = box.lon_min if point.longitude < box.lon_min else box.lon_max
    return point_segment.apply(
        point,
        GeoPoint(side_lon, box.lat_min),
        GeoPoint(side_lon, box.lat_max)
    )
