"""Domain models for zones, restaurants and dispatch outcomes."""

from dataclasses import dataclass, field
from typing import Any, Literal, Optional

from ..services.geospatial import (
    MIN_POLYGON_VERTICES,
    polygon_area,
    polygon_centroid,
    point_in_polygon,
    to_geojson,
)

ASSIGNED_BY_ZONE = "zone_based"


@dataclass(slots=True)
class Zone:
    """Administrator-defined delivery area stored as ordered (lat, lng) vertices."""

    zone_id: str
    name: str
    coordinates: tuple[tuple[float, float], ...]
    is_active: bool = True
    restaurant_id: Optional[str] = None
    country: Optional[str] = None
    service_location: Optional[str] = None
    unit: Optional[str] = None
    peak_zone_ride_count: int = 0
    peak_zone_radius: float = 0.0
    peak_zone_selection_duration: int = 0
    peak_zone_duration: int = 0
    peak_zone_surge_percentage: float = 0.0

    @property
    def is_valid_polygon(self) -> bool:
        return len(self.coordinates) >= MIN_POLYGON_VERTICES

    def contains(self, latitude: float, longitude: float) -> bool:
        return point_in_polygon(latitude, longitude, self.coordinates)

    def centroid(self) -> tuple[float, float]:
        return polygon_centroid(self.coordinates)

    def area(self) -> float:
        return polygon_area(self.coordinates)

    def boundary(self) -> dict[str, Any]:
        """GeoJSON Polygon of the zone, ring closed and in [lng, lat] order."""
        return to_geojson(self.coordinates)


@dataclass(slots=True)
class Restaurant:
    """Restaurant as seen by dispatch: a registered pin plus eligibility flags."""

    restaurant_id: str
    name: str
    latitude: Optional[float]
    longitude: Optional[float]
    is_active: bool = True
    is_accepting_orders: bool = True

    @property
    def is_geolocated(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @property
    def is_dispatchable(self) -> bool:
        return self.is_active and self.is_accepting_orders and self.is_geolocated


@dataclass(frozen=True, slots=True)
class DeliveryPoint:
    latitude: float
    longitude: float


@dataclass(slots=True)
class Candidate:
    restaurant: Restaurant
    zone: Zone
    distance_km: float


@dataclass(frozen=True, slots=True)
class AssignmentResult:
    """Nearest restaurant sharing a zone with the delivery point."""

    restaurant_id: str
    restaurant_name: str
    zone_id: str
    zone_name: str
    distance_km: float
    assigned_by: str = ASSIGNED_BY_ZONE


@dataclass(frozen=True, slots=True)
class NotAssignable:
    """No restaurant serves the delivery point. A business outcome, not an error."""

    point: DeliveryPoint
    reason: str = "No restaurant available for this delivery location"
    restaurants_considered: int = 0


@dataclass(slots=True)
class ZoneDetection:
    status: Literal["IN_SERVICE", "OUT_OF_SERVICE"]
    zone: Optional[Zone] = None
    message: str = ""
    distance_to_centroid_km: Optional[float] = None


@dataclass(slots=True)
class NearbyZone:
    zone: Zone
    centroid: tuple[float, float]
    distance_km: float


@dataclass(slots=True)
class RadiusQueryResult:
    point: DeliveryPoint
    radius_km: float
    zones: list[NearbyZone] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.zones)
