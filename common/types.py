"""
Geometry Value Types for Curved-Surface Distance Calculations.

This module defines the immutable value objects exchanged between the
azimuth, envelope, disjointness and distance components. Coordinates are
stored in RADIANS; conversions from other angular units happen once, in
the constructors below.

Design Rationale
----------------
Using frozen dataclasses instead of raw tuples provides:
1. Self-documenting code - field names describe the data
2. Validation at construction - invalid boxes fail fast
3. Safe sharing across threads - nothing can be mutated after creation
4. A closed set of geometry kinds for dispatch (see ``GeometryKind``)
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Tuple, Union
import numpy as np

from common.units import AngleLike, angle_from_radians, angle_to_radians


class GeometryKind(Enum):
    """Closed set of geometry variants understood by the strategies."""
    POINT = "point"
    SEGMENT = "segment"
    BOX = "box"


@dataclass(frozen=True)
class GeoPoint:
    """A point on a sphere or ellipsoid of revolution.

    Attributes
    ----------
    longitude : float
        Longitude in RADIANS. Range: [-π, π].
    latitude : float
        Latitude in RADIANS (geodetic on the ellipsoid). Range: [-π/2, π/2].

    Notes
    -----
    - Latitude is positive north, negative south.
    - Longitude is positive east, negative west.
    - Longitudes are not normalized: a value that is already in range is
      kept bit-for-bit.

    Examples
    --------
    >>> p = GeoPoint.from_degrees(-80.1918, 25.7617)
    >>> round(p.latitude_in('degree'), 4)
    25.7617
    """
    longitude: float  # radians
    latitude: float  # radians

    kind: ClassVar[GeometryKind] = GeometryKind.POINT

    def __post_init__(self):
        """Validate coordinate ranges."""
        if not (np.isfinite(self.longitude) and np.isfinite(self.latitude)):
            raise ValueError(
                f"Coordinates must be finite, got ({self.longitude}, {self.latitude})"
            )
        if not -np.pi / 2 <= self.latitude <= np.pi / 2:
            raise ValueError(
                f"Latitude {self.latitude} rad out of range [-π/2, π/2]. "
                f"Did you pass degrees instead of radians?"
            )
        if not -np.pi <= self.longitude <= np.pi:
            raise ValueError(
                f"Longitude {self.longitude} rad out of range [-π, π]. "
                f"Did you pass degrees instead of radians?"
            )

    @classmethod
    def from_degrees(cls, lon_deg: float, lat_deg: float) -> 'GeoPoint':
        """Create a point from degrees (convenience constructor)."""
        return cls.from_quantities(lon_deg, lat_deg, unit="degree")

    @classmethod
    def from_quantities(
        cls,
        longitude: AngleLike,
        latitude: AngleLike,
        unit: str = "radian"
    ) -> 'GeoPoint':
        """Create a point from pint quantities or bare numbers in ``unit``.

        Parameters
        ----------
        longitude, latitude : float or pint.Quantity
            Coordinates. Quantities carry their own unit.
        unit : str
            Unit applied to bare numbers.

        Returns
        -------
        GeoPoint
            Point with internally stored radians.
        """
        return cls(
            longitude=angle_to_radians(longitude, unit),
            latitude=angle_to_radians(latitude, unit)
        )

    def longitude_in(self, unit: str = "degree") -> float:
        """Longitude expressed in ``unit``."""
        return angle_from_radians(self.longitude, unit)

    def latitude_in(self, unit: str = "degree") -> float:
        """Latitude expressed in ``unit``."""
        return angle_from_radians(self.latitude, unit)

    def with_longitude(self, value: AngleLike, unit: str = "radian") -> 'GeoPoint':
        """Return a copy of this point with its longitude replaced."""
        return GeoPoint(angle_to_radians(value, unit), self.latitude)

    def with_latitude(self, value: AngleLike, unit: str = "radian") -> 'GeoPoint':
        """Return a copy of this point with its latitude replaced."""
        return GeoPoint(self.longitude, angle_to_radians(value, unit))

    def to_degrees(self) -> Tuple[float, float]:
        """Convert to degrees for display.

        Returns
        -------
        Tuple[float, float]
            (longitude_degrees, latitude_degrees)
        """
        return self.longitude_in("degree"), self.latitude_in("degree")


@dataclass(frozen=True)
class Segment:
    """An ordered pair of points joined by the shortest surface curve.

    Direction matters for the bearing of the curve, not for distances.
    """
    p0: GeoPoint
    p1: GeoPoint

    kind: ClassVar[GeometryKind] = GeometryKind.SEGMENT

    @property
    def is_degenerate(self) -> bool:
        """True when both endpoints coincide."""
        return self.p0 == self.p1

    def reversed(self) -> 'Segment':
        return Segment(self.p1, self.p0)


@dataclass(frozen=True)
class BoxCorners:
    """The four corners of a latitude/longitude box."""
    bottom_left: GeoPoint
    bottom_right: GeoPoint
    top_left: GeoPoint
    top_right: GeoPoint


def box_corners(bottom_left: GeoPoint, top_right: GeoPoint) -> BoxCorners:
    """Derive all four corners of a box from its two defining corners.

    Parameters
    ----------
    bottom_left : GeoPoint
        Corner with the minimum longitude and latitude.
    top_right : GeoPoint
        Corner with the maximum longitude and latitude.

    Returns
    -------
    BoxCorners
        bottom_left, bottom_right, top_left and top_right corners.
    """
    return BoxCorners(
        bottom_left=bottom_left,
        bottom_right=GeoPoint(top_right.longitude, bottom_left.latitude),
        top_left=GeoPoint(bottom_left.longitude, top_right.latitude),
        top_right=top_right
    )


@dataclass(frozen=True)
class Box:
    """An axis-aligned latitude/longitude box.

    The meridian sides are geodesics; the bottom and top sides are
    parallels (lines of constant latitude).

    Attributes
    ----------
    bottom_left : GeoPoint
        Minimum longitude and minimum latitude.
    top_right : GeoPoint
        Maximum longitude and maximum latitude.

    Raises
    ------
    ValueError
        If the latitudes are inverted, or if the box crosses the
        antimeridian (bottom_left east of top_right).
    """
    bottom_left: GeoPoint
    top_right: GeoPoint

    kind: ClassVar[GeometryKind] = GeometryKind.BOX

    def __post_init__(self):
        """Validate the corner ordering."""
        if self.bottom_left.latitude > self.top_right.latitude:
            raise ValueError(
                f"Invalid box: bottom latitude {self.bottom_left.latitude} rad "
                f"is above top latitude {self.top_right.latitude} rad"
            )
        if self.bottom_left.longitude > self.top_right.longitude:
            raise ValueError(
                f"Invalid box: min longitude {self.bottom_left.longitude} rad "
                f"exceeds max longitude {self.top_right.longitude} rad; "
                f"antimeridian-crossing boxes are not supported"
            )

    @classmethod
    def from_degrees(
        cls,
        lon_min: float,
        lat_min: float,
        lon_max: float,
        lat_max: float
    ) -> 'Box':
        """Create a box from its bounds in degrees."""
        return cls(
            GeoPoint.from_degrees(lon_min, lat_min),
            GeoPoint.from_degrees(lon_max, lat_max)
        )

    @property
    def lon_min(self) -> float:
        return self.bottom_left.longitude

    @property
    def lon_max(self) -> float:
        return self.top_right.longitude

    @property
    def lat_min(self) -> float:
        return self.bottom_left.latitude

    @property
    def lat_max(self) -> float:
        return self.top_right.latitude

    def corners(self) -> BoxCorners:
        return box_corners(self.bottom_left, self.top_right)

    def contains(self, point: GeoPoint) -> bool:
        """True if ``point`` lies in the closed box."""
        return (
            self.lon_min <= point.longitude <= self.lon_max
            and self.lat_min <= point.latitude <= self.lat_max
        )

    def is_disjoint_from(self, other: 'Box') -> bool:
        """True if the closed boxes share no point."""
        return (
            other.lon_max < self.lon_min or other.lon_min > self.lon_max
            or other.lat_max < self.lat_min or other.lat_min > self.lat_max
        )


Geometry = Union[GeoPoint, Segment, Box]


def geometry_kind(geometry: Geometry) -> GeometryKind:
    """Return the kind of a geometry value.

    Raises
    ------
    TypeError
        If ``geometry`` is not one of the supported value types.
    """
    kind = getattr(type(geometry), "kind", None)
    if not isinstance(kind, GeometryKind):
        raise TypeError(f"Unsupported geometry type: {type(geometry).__name__}")
    return kind
