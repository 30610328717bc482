"""Parsing helpers turning raw storage rows into domain models.

Rows arrive either camelCase (document exports) or snake_case (Supabase
tables). Coordinates are normalised to (lat, lng) here and nowhere else.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

from ..models.domain import Restaurant, Zone
from ..models.errors import RepositoryError
from ..services.geospatial import geojson_to_coordinates


def read_json_rows(path: Path, key: str) -> list[dict[str, Any]]:
    """Load a JSON list of records, also accepting ``{key: [...]}``."""
    if not path.exists():
        raise RepositoryError(f"Data file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except (OSError, json.JSONDecodeError) as exc:
        raise RepositoryError(f"Unable to read data file '{path}': {exc}") from exc

    if isinstance(payload, dict):
        payload = payload.get(key, [])
    if not isinstance(payload, list):
        raise RepositoryError(f"Data file '{path}' must contain a list of '{key}' records")
    return payload


def _first(row: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = row.get(key)
        if value is not None and value != "":
            return value
    return None


def _coerce_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    if isinstance(value, str):
        value = value.replace(",", "")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Unable to parse float from value '{value}'") from exc


def _coerce_int(value: Any) -> int:
    number = _coerce_float(value)
    return int(number) if number is not None else 0


def _coerce_bool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y"}
    return bool(value)


def _parse_vertex(vertex: Any) -> tuple[float, float]:
    if isinstance(vertex, Mapping):
        lat = _coerce_float(_first(vertex, "latitude", "lat"))
        lng = _coerce_float(_first(vertex, "longitude", "lng", "lon"))
    elif isinstance(vertex, (list, tuple)) and len(vertex) >= 2:
        lat, lng = _coerce_float(vertex[0]), _coerce_float(vertex[1])
    else:
        raise ValueError(f"Unsupported vertex format: {vertex!r}")
    if lat is None or lng is None:
        raise ValueError(f"Vertex is missing latitude or longitude: {vertex!r}")
    return lat, lng


def parse_zone(row: Mapping[str, Any]) -> Zone:
    """Build a ``Zone`` from a storage row.

    ``coordinates`` (lat/lng vertices) is authoritative; the GeoJSON
    ``boundary`` ring ([lng, lat]) is only read when no vertex list is present.
    """
    zone_id = _first(row, "id", "_id", "zone_id")
    if zone_id is None:
        raise ValueError("zone record missing 'id'")

    raw_vertices = row.get("coordinates") or []
    if raw_vertices:
        vertices = [_parse_vertex(vertex) for vertex in raw_vertices]
        # stored rings may repeat the first vertex at the end
        if len(vertices) > 1 and vertices[0] == vertices[-1]:
            vertices.pop()
        coordinates = tuple(vertices)
    else:
        coordinates = tuple(geojson_to_coordinates(_first(row, "boundary", "geometry")))

    restaurant_id = _first(row, "restaurantId", "restaurant_id")
    return Zone(
        zone_id=str(zone_id),
        name=str(_first(row, "name", "zoneName", "zone_name") or zone_id),
        coordinates=coordinates,
        is_active=_coerce_bool(_first(row, "isActive", "is_active"), default=True),
        restaurant_id=str(restaurant_id) if restaurant_id is not None else None,
        country=_first(row, "country"),
        service_location=_first(row, "serviceLocation", "service_location"),
        unit=_first(row, "unit"),
        peak_zone_ride_count=_coerce_int(_first(row, "peakZoneRideCount", "peak_zone_ride_count")),
        peak_zone_radius=_coerce_float(_first(row, "peakZoneRadius", "peak_zone_radius")) or 0.0,
        peak_zone_selection_duration=_coerce_int(
            _first(row, "peakZoneSelectionDuration", "peak_zone_selection_duration")
        ),
        peak_zone_duration=_coerce_int(_first(row, "peakZoneDuration", "peak_zone_duration")),
        peak_zone_surge_percentage=_coerce_float(
            _first(row, "peakZoneSurgePercentage", "peak_zone_surge_percentage")
        ) or 0.0,
    )


def _parse_location(row: Mapping[str, Any]) -> tuple[Optional[float], Optional[float]]:
    location = row.get("location")
    if isinstance(location, Mapping):
        lat = _coerce_float(_first(location, "latitude", "lat"))
        lng = _coerce_float(_first(location, "longitude", "lng", "lon"))
        if lat is None and lng is None:
            # GeoJSON Point stores [lng, lat]
            position = location.get("coordinates")
            if isinstance(position, (list, tuple)) and len(position) >= 2:
                lng, lat = _coerce_float(position[0]), _coerce_float(position[1])
        return lat, lng
    return (
        _coerce_float(_first(row, "latitude", "lat")),
        _coerce_float(_first(row, "longitude", "lng", "lon")),
    )


def parse_restaurant(row: Mapping[str, Any]) -> Restaurant:
    restaurant_id = _first(row, "id", "_id", "restaurant_id")
    if restaurant_id is None:
        raise ValueError("restaurant record missing 'id'")
    lat, lng = _parse_location(row)
    return Restaurant(
        restaurant_id=str(restaurant_id),
        name=str(_first(row, "name") or restaurant_id),
        latitude=lat,
        longitude=lng,
        is_active=_coerce_bool(_first(row, "isActive", "is_active"), default=True),
        is_accepting_orders=_coerce_bool(
            _first(row, "isAcceptingOrders", "is_accepting_orders"), default=True
        ),
    )


def parse_zones(rows: Iterable[Mapping[str, Any]]) -> tuple[Zone, ...]:
    zones: list[Zone] = []
    for row in rows:
        try:
            zones.append(parse_zone(row))
        except (KeyError, ValueError, TypeError) as e:
            # Skip invalid rows but continue processing
            logging.warning(f"Skipping invalid zone row: {e}")
    return tuple(zones)


def parse_restaurants(rows: Iterable[Mapping[str, Any]]) -> tuple[Restaurant, ...]:
    restaurants: list[Restaurant] = []
    for row in rows:
        try:
            restaurants.append(parse_restaurant(row))
        except (KeyError, ValueError, TypeError) as e:
            logging.warning(f"Skipping invalid restaurant row: {e}")
    return tuple(restaurants)
