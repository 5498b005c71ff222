"""
Haversine great-circle distance and the radius filter built on it.
"""
import math
from typing import Any, Mapping, NamedTuple

from src.geofilter.coerce import parse_numeric_or_default

# Mean Earth radius in km
EARTH_RADIUS_KM = 6371.0


class ReferencePoint(NamedTuple):
    """Fixed origin of the radius test. Immutable for the lifetime of a run."""

    latitude: float
    longitude: float
    radius_km: float = 100.0
    earth_radius_km: float = EARTH_RADIUS_KM


def _radians(degrees: float) -> float:
    return degrees * math.pi / 180


def haversine_distance_km(
    lat1: float,
    lng1: float,
    lat2: float,
    lng2: float,
    earth_radius_km: float = EARTH_RADIUS_KM,
) -> float:
    """
    Return great-circle distance between two points in kilometers.
    Arguments in degrees; out-of-range coordinates are not rejected.
    """
    dlat = _radians(lat2 - lat1)
    dlng = _radians(lng2 - lng1)
    a = math.sin(dlat / 2) ** 2 + math.cos(_radians(lat1)) * math.cos(_radians(lat2)) * math.sin(dlng / 2) ** 2
    # Rounding can push a a hair past 1.0 for near-antipodal points
    a = min(1.0, a)
    return 2 * earth_radius_km * math.asin(math.sqrt(a))


class GeoFilter:
    """Keeps records whose coordinates lie within reference.radius_km (inclusive)."""

    def __init__(self, reference: ReferencePoint):
        self.reference = reference

    def distance_km(self, record: Mapping[str, Any]) -> float:
        lat = parse_numeric_or_default(record.get("latitude"))
        lng = parse_numeric_or_default(record.get("longitude"))
        ref = self.reference
        return haversine_distance_km(ref.latitude, ref.longitude, lat, lng, ref.earth_radius_km)

    def contains(self, record: Mapping[str, Any]) -> bool:
        return self.distance_km(record) <= self.reference.radius_km
