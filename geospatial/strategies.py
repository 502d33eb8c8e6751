"""
Strategy Selection per Coordinate System.

The distance algorithms are written once against the abstract azimuth,
point-point and point-segment strategies. This module builds the concrete,
mutually consistent set of strategies for a coordinate system:

- SPHERICAL_EQUATORIAL: great circles on a sphere (default: mean Earth radius)
- GEOGRAPHIC: geodesics on an ellipsoid (default: WGS84)

Examples
--------
>>> strategies = make_strategies(StrategyConfig(CoordinateSystem.GEOGRAPHIC))
>>> strategies.azimuth_strategy
GeographicAzimuth(ellipsoid=WGS84)
"""

from dataclasses import dataclass
from typing import Optional

from common.constants import PhysicalConstants
from common.logging_config import get_logger
from geospatial.azimuth import AzimuthStrategy
from geospatial.coordinate_models import (
    CoordinateSystem,
    EllipsoidParameters,
    WGS84Ellipsoid,
)
from geospatial.distance_calculations import (
    GeodesicCrossTrack,
    PointPointStrategy,
    PointSegmentStrategy,
    SphericalCrossTrack,
)

logger = get_logger(__name__)


@dataclass
class StrategyConfig:
    """Configuration for strategy construction.

    Attributes
    ----------
    coordinate_system : CoordinateSystem
        Surface model.
    sphere_radius_m : float
        Sphere radius in meters (spherical-equatorial only).
    ellipsoid : EllipsoidParameters
        Reference ellipsoid (geographic only).
    segment_search_samples : int
        Samples per segment in the geodesic point-segment search.
    segment_search_tolerance_m : float
        Stopping width of the geodesic point-segment refinement, in meters.
    """
    coordinate_system: CoordinateSystem = CoordinateSystem.SPHERICAL_EQUATORIAL
    sphere_radius_m: float = PhysicalConstants.EARTH_MEAN_RADIUS.value
    ellipsoid: EllipsoidParameters = WGS84Ellipsoid
    segment_search_samples: int = 32
    segment_search_tolerance_m: float = 1e-3


@dataclass(frozen=True)
class DistanceStrategies:
    """A consistent set of strategies for one surface model."""
    coordinate_system: CoordinateSystem
    point_point: PointPointStrategy
    point_segment: PointSegmentStrategy

    @property
    def azimuth_strategy(self) -> AzimuthStrategy:
        return self.point_segment.azimuth_strategy


def make_strategies(config: Optional[StrategyConfig] = None) -> DistanceStrategies:
    """Build the strategies for a coordinate system.

    Parameters
    ----------
    config : StrategyConfig, optional
        Defaults to the spherical-equatorial model on the mean Earth sphere.

    Returns
    -------
    DistanceStrategies
        Point-point, point-segment and azimuth strategies sharing one
        surface description.
    """
    config = config or StrategyConfig()

    if config.coordinate_system is CoordinateSystem.SPHERICAL_EQUATORIAL:
        point_segment = SphericalCrossTrack(config.sphere_radius_m)
    elif config.coordinate_system is CoordinateSystem.GEOGRAPHIC:
        point_segment = GeodesicCrossTrack(
            config.ellipsoid,
            samples=config.segment_search_samples,
            tolerance_m=config.segment_search_tolerance_m
        )
    else:
        raise ValueError(f"Unsupported coordinate system: {config.coordinate_system}")

    logger.debug(f"Built {point_segment!r} for {config.coordinate_system.value}")

    return DistanceStrategies(
        coordinate_system=config.coordinate_system,
        point_point=point_segment.point_point,
        point_segment=point_segment
    )
