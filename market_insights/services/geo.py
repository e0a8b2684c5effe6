# market_insights/services/geo.py
# -----------------------------------------------------------------------------
# Great-circle distance (miles) and bounding boxes for radius pre-filters
# -----------------------------------------------------------------------------
from __future__ import annotations

import math
from dataclasses import dataclass

from market_insights.core.errors import InvalidInputError

EARTH_RADIUS_MILES = 3959.0
MILES_PER_DEGREE_LAT = 69.0

# below this cos(lat) the longitude delta blows up; treat the box as all longitudes
_MIN_COS_LAT = 1e-6


@dataclass(frozen=True)
class GeoCoordinate:
    """A latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float

    def __post_init__(self):
        lat, lon = self.latitude, self.longitude
        if not (math.isfinite(lat) and math.isfinite(lon)):
            raise InvalidInputError(f"non-finite coordinate ({lat}, {lon})")
        if not -90.0 <= lat <= 90.0:
            raise InvalidInputError(f"latitude out of range: {lat}")
        if not -180.0 <= lon <= 180.0:
            raise InvalidInputError(f"longitude out of range: {lon}")


@dataclass(frozen=True)
class BoundingBox:
    """
    Axis-aligned lat/lon rectangle. min_lon/max_lon may run past +/-180 when
    the box straddles the antimeridian; use lon_ranges() for storage queries.
    """

    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    def lon_ranges(self) -> list[tuple[float, float]]:
        if self.min_lon < -180.0:
            return [(-180.0, self.max_lon), (self.min_lon + 360.0, 180.0)]
        if self.max_lon > 180.0:
            return [(self.min_lon, 180.0), (-180.0, self.max_lon - 360.0)]
        return [(self.min_lon, self.max_lon)]

    def contains(self, point: GeoCoordinate) -> bool:
        if not self.min_lat <= point.latitude <= self.max_lat:
            return False
        return any(lo <= point.longitude <= hi for lo, hi in self.lon_ranges())


def distance(a: GeoCoordinate, b: GeoCoordinate) -> float:
    """Haversine distance in miles."""
    d_lat = math.radians(b.latitude - a.latitude)
    d_lon = math.radians(b.longitude - a.longitude)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.latitude))
        * math.cos(math.radians(b.latitude))
        * math.sin(d_lon / 2) ** 2
    )
    h = min(1.0, h)  # fp drift near antipodes
    return EARTH_RADIUS_MILES * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def bounding_box(center: GeoCoordinate, radius_miles: float) -> BoundingBox:
    """
    Conservative box around a radius disk.

    lat delta = r / 69, lon delta = r / (69 * cos(lat)). Near the poles the
    box widens to every longitude instead of producing inf/NaN, and the lon
    delta never drops below the exact spherical half-width so the box stays a
    superset at high latitudes too.
    """
    if not math.isfinite(radius_miles) or radius_miles < 0:
        raise InvalidInputError(f"invalid radius: {radius_miles}")

    lat_delta = radius_miles / MILES_PER_DEGREE_LAT
    min_lat = max(-90.0, center.latitude - lat_delta)
    max_lat = min(90.0, center.latitude + lat_delta)

    cos_lat = math.cos(math.radians(center.latitude))
    if min_lat <= -90.0 or max_lat >= 90.0 or cos_lat < _MIN_COS_LAT:
        return BoundingBox(min_lat, max_lat, -180.0, 180.0)

    lon_delta = radius_miles / (MILES_PER_DEGREE_LAT * cos_lat)
    spread = math.sin(radius_miles / EARTH_RADIUS_MILES) / cos_lat
    if spread < 1.0:
        lon_delta = max(lon_delta, math.degrees(math.asin(spread)))
    else:
        lon_delta = 180.0

    if lon_delta >= 180.0:
        return BoundingBox(min_lat, max_lat, -180.0, 180.0)
    return BoundingBox(
        min_lat, max_lat, center.longitude - lon_delta, center.longitude + lon_delta
    )
