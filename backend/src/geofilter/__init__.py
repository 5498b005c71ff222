from src.geofilter.errors import GeofilterError, ParseFault, UnexpectedFault
from src.geofilter.geo import GeoFilter, ReferencePoint, haversine_distance_km
from src.geofilter.service import CustomerResult, filter_customers

__all__ = [
    "CustomerResult",
    "GeoFilter",
    "GeofilterError",
    "ParseFault",
    "ReferencePoint",
    "UnexpectedFault",
    "filter_customers",
    "haversine_distance_km",
]
