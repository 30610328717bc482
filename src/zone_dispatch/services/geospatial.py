"""Geospatial helper functions.

Polygons are handled internally as ordered sequences of ``(lat, lng)`` pairs.
GeoJSON and WKT use ``(lng, lat)`` ordering and are only produced or consumed
at the persistence boundary through the conversion helpers below.
"""

from __future__ import annotations

import math
from typing import Any, Sequence

from shapely.geometry import Polygon, mapping

from ..models.errors import CoordinateValidationError

EARTH_RADIUS_KM = 6371.0
MIN_POLYGON_VERTICES = 3

LatLng = tuple[float, float]


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def point_in_polygon(lat: float, lon: float, polygon_coords: Sequence[LatLng]) -> bool:
    """Return True if the point is inside the polygon denoted by (lat, lon) pairs.

    Even-odd ray casting: every edge ``(v[i], v[i-1])`` crossed by a ray cast
    from the point along the latitude axis toggles the result. Starting vertex
    and winding direction do not affect the outcome. Points lying exactly on
    an edge or a vertex may fall on either side.
    """

    count = len(polygon_coords)
    if count < MIN_POLYGON_VERTICES:
        return False

    inside = False
    j = count - 1
    for i in range(count):
        lat_i, lon_i = polygon_coords[i]
        lat_j, lon_j = polygon_coords[j]
        if (lon_i > lon) != (lon_j > lon):
            crossing_lat = (lat_j - lat_i) * (lon - lon_i) / (lon_j - lon_i) + lat_i
            if lat < crossing_lat:
                inside = not inside
        j = i
    return inside


def polygon_centroid(polygon_coords: Sequence[LatLng]) -> LatLng:
    """Arithmetic mean of the vertices.

    This is a planar approximation, not an area-weighted or geodesic centroid.
    Radius thresholds are calibrated against it, so changing the formula shifts
    which zones fall inside a given radius.
    """

    if not polygon_coords:
        raise ValueError("Cannot compute the centroid of an empty polygon.")
    lat_sum = sum(lat for lat, _ in polygon_coords)
    lon_sum = sum(lon for _, lon in polygon_coords)
    count = len(polygon_coords)
    return lat_sum / count, lon_sum / count


def polygon_area(polygon_coords: Sequence[LatLng]) -> float:
    """Planar area in squared degrees, used only to compare zones with each other."""

    if len(polygon_coords) < MIN_POLYGON_VERTICES:
        return 0.0
    return Polygon([(lng, lat) for lat, lng in polygon_coords]).area


def to_closed_ring(polygon_coords: Sequence[LatLng]) -> list[LatLng]:
    """Return the vertices with the first one repeated at the end."""

    ring = [(float(lat), float(lng)) for lat, lng in polygon_coords]
    if ring and ring[0] != ring[-1]:
        ring.append(ring[0])
    return ring


def to_geojson(polygon_coords: Sequence[LatLng]) -> dict[str, Any]:
    """Convert (lat, lng) vertices to a GeoJSON Polygon geometry ([lng, lat] ring)."""

    if len(polygon_coords) < MIN_POLYGON_VERTICES:
        raise ValueError("Polygon must have at least 3 coordinates")
    geometry = mapping(Polygon([(lng, lat) for lat, lng in to_closed_ring(polygon_coords)]))
    return {
        "type": geometry["type"],
        "coordinates": [[list(position) for position in ring] for ring in geometry["coordinates"]],
    }


def geojson_to_coordinates(geojson: dict[str, Any] | None) -> list[LatLng]:
    """Convert a GeoJSON Polygon geometry to (lat, lng) vertices.

    Only the exterior ring is read; the closing vertex is dropped.
    """
    if not geojson or not isinstance(geojson, dict):
        return []

    if str(geojson.get("type", "")).upper() != "POLYGON":
        return []
    rings = geojson.get("coordinates") or []
    if not rings:
        return []

    coords: list[LatLng] = []
    for position in rings[0]:
        if len(position) < 2:
            continue
        try:
            coords.append((float(position[1]), float(position[0])))
        except (TypeError, ValueError):
            continue
    if len(coords) > 1 and coords[0] == coords[-1]:
        coords.pop()
    return coords


def validate_coordinates(lat: Any, lon: Any) -> LatLng:
    """Return the pair as floats or raise ``CoordinateValidationError``."""

    try:
        lat_value = float(lat)
        lon_value = float(lon)
    except (TypeError, ValueError) as exc:
        raise CoordinateValidationError(f"Latitude and longitude must be numbers, got ({lat!r}, {lon!r})") from exc

    if not (math.isfinite(lat_value) and math.isfinite(lon_value)):
        raise CoordinateValidationError("Latitude and longitude must be finite numbers")
    if not -90.0 <= lat_value <= 90.0:
        raise CoordinateValidationError(f"Latitude {lat_value} is outside [-90, 90]")
    if not -180.0 <= lon_value <= 180.0:
        raise CoordinateValidationError(f"Longitude {lon_value} is outside [-180, 180]")
    return lat_value, lon_value


def validate_radius(radius_km: Any) -> float:
    try:
        radius = float(radius_km)
    except (TypeError, ValueError) as exc:
        raise CoordinateValidationError(f"Radius must be a number, got {radius_km!r}") from exc
    if not math.isfinite(radius) or radius <= 0:
        raise CoordinateValidationError(f"Radius must be a positive number of kilometres, got {radius}")
    return radius
