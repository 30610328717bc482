"""Service-area detection for user locations."""

from __future__ import annotations

from typing import Any

from ...config import settings
from ...data.zones_repository import ZoneRepository
from ...models.domain import Zone, ZoneDetection
from ..geospatial import haversine_km, validate_coordinates

IN_SERVICE = "IN_SERVICE"
OUT_OF_SERVICE = "OUT_OF_SERVICE"


def detect_zone(
    repository: ZoneRepository,
    latitude: Any,
    longitude: Any,
    *,
    buffer_km: float | None = None,
) -> ZoneDetection:
    """Find the service zone for a user location.

    Among the zones containing the point, the one with the nearest centroid
    wins. A point outside every polygon still resolves to a zone whose
    centroid is within ``buffer_km`` (default ``settings.detection_buffer_km``).
    """
    lat, lng = validate_coordinates(latitude, longitude)
    buffer = settings.detection_buffer_km if buffer_km is None else buffer_km

    zones = [zone for zone in repository.list_zones(active_only=True) if zone.is_active]
    if not zones:
        return ZoneDetection(status=OUT_OF_SERVICE, message="No delivery zones are currently active")

    best: Zone | None = None
    best_distance = float("inf")
    for zone in zones:
        if not zone.is_valid_polygon or not zone.contains(lat, lng):
            continue
        centroid_lat, centroid_lng = zone.centroid()
        distance = haversine_km(lat, lng, centroid_lat, centroid_lng)
        if distance < best_distance:
            best, best_distance = zone, distance

    if best is None:
        for zone in zones:
            if not zone.is_valid_polygon:
                continue
            centroid_lat, centroid_lng = zone.centroid()
            distance = haversine_km(lat, lng, centroid_lat, centroid_lng)
            if distance <= buffer and distance < best_distance:
                best, best_distance = zone, distance

    if best is None:
        return ZoneDetection(
            status=OUT_OF_SERVICE,
            message="Your location is not within any active delivery zone.",
        )
    return ZoneDetection(
        status=IN_SERVICE,
        zone=best,
        message="Service available in your area",
        distance_to_centroid_km=best_distance,
    )


def zones_for_restaurant_at(
    repository: ZoneRepository,
    latitude: Any,
    longitude: Any,
    restaurant_id: str,
) -> list[Zone]:
    """Active zones owned by ``restaurant_id`` that contain the location."""
    lat, lng = validate_coordinates(latitude, longitude)
    if not restaurant_id:
        raise ValueError("restaurant_id is required")
    return [
        zone
        for zone in repository.list_zones(active_only=True)
        if zone.is_active and zone.restaurant_id == str(restaurant_id) and zone.contains(lat, lng)
    ]
