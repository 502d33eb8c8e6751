"""
Envelope (Bounding Box) of a Great-Circle or Geodesic Segment.

The longitude range of a segment is spanned by its endpoints (longitude is
monotonic along a shortest curve that does not pass a pole). The latitude
range is spanned by the endpoints unless the curve passes through one of
its vertices between them, which happens exactly when the curve heads
towards the vertex at both ends:

- northern vertex inside: cos(α₁₂) > 0 and cos(α₂₁) > 0
- southern vertex inside: cos(α₁₂) < 0 and cos(α₂₁) < 0

where α₁₂ is the bearing from p0 to p1 and α₂₁ the bearing from p1 to p0.
"""

import numpy as np

from common.types import Box, GeoPoint
from geospatial.azimuth import AzimuthStrategy
from geospatial.vertex import vertex_latitude


def segment_envelope(
    p0: GeoPoint,
    p1: GeoPoint,
    azimuth_strategy: AzimuthStrategy
) -> Box:
    """Compute the latitude/longitude bounding box of a segment.

    Parameters
    ----------
    p0, p1 : GeoPoint
        Segment endpoints.
    azimuth_strategy : AzimuthStrategy
        Selects the surface model (great circle or geodesic).

    Returns
    -------
    Box
        The smallest box containing every point of the segment.

    Raises
    ------
    ValueError
        If the segment spans π or more in longitude. Wider segments cross
        the antimeridian, and at exactly π the shortest curve passes over a
        pole.
    """
    lon_min, lon_max = sorted((p0.longitude, p1.longitude))
    if lon_max - lon_min >= np.pi:
        raise ValueError(
            f"Segment spans {lon_max - lon_min:.6f} rad of longitude; "
            f"antimeridian-crossing and pole-passing segments are not supported"
        )

    lat_min, lat_max = sorted((p0.latitude, p1.latitude))

    if p0 != p1:
        az12 = azimuth_strategy.apply_points(p0, p1)
        az21 = azimuth_strategy.apply_points(p1, p0)
        cos12 = np.cos(az12)
        cos21 = np.cos(az21)

        if cos12 > 0 and cos21 > 0:
            lat_max = max(lat_max, vertex_latitude(p0.latitude, az12, azimuth_strategy))
        elif cos12 < 0 and cos21 < 0:
            lat_min = min(lat_min, -vertex_latitude(p0.latitude, az12, azimuth_strategy))

    return Box(GeoPoint(lon_min, lat_min), GeoPoint(lon_max, lat_max))
