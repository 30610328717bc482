"""Zones near a location, used for delivery-partner zone discovery."""

from __future__ import annotations

from typing import Any

from ...config import settings
from ...data.zones_repository import ZoneRepository
from ...models.domain import DeliveryPoint, NearbyZone, RadiusQueryResult
from ..geospatial import haversine_km, validate_coordinates, validate_radius


def zones_within(
    repository: ZoneRepository,
    latitude: Any,
    longitude: Any,
    radius_km: Any = None,
) -> RadiusQueryResult:
    """Active zones whose centroid lies within ``radius_km`` of the point.

    The centroid is the plain mean of the vertices (see ``polygon_centroid``),
    an approximation that is adequate for city-sized zones. Zones with fewer
    than three vertices are never returned. Containment is not consulted.
    """
    lat, lng = validate_coordinates(latitude, longitude)
    radius = validate_radius(settings.default_radius_km if radius_km is None else radius_km)

    result = RadiusQueryResult(point=DeliveryPoint(latitude=lat, longitude=lng), radius_km=radius)
    for zone in repository.list_zones(active_only=True):
        if not zone.is_active or not zone.is_valid_polygon:
            continue
        centroid = zone.centroid()
        distance = haversine_km(lat, lng, centroid[0], centroid[1])
        if distance <= radius:
            result.zones.append(NearbyZone(zone=zone, centroid=centroid, distance_km=distance))
    return result
