"""API routes for zone discovery and detection."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from ...data.zones_repository import get_zone_repository
from ...models.errors import CoordinateValidationError, RepositoryError
from ...schemas.dispatch import (
    LocationCheckRequest,
    LocationCheckResponse,
    NearbyZonesResponse,
    ZoneDetectionResponse,
)
from ...services.dispatch.detection import detect_zone, zones_for_restaurant_at
from ...services.dispatch.radius import zones_within
from ...services.outputs.formatter import (
    detection_to_response,
    location_check_to_response,
    radius_result_to_response,
)

router = APIRouter(prefix="/zones", tags=["zones"])


def _translate_errors(exc: Exception) -> HTTPException:
    if isinstance(exc, RepositoryError):
        logging.error(f"Zone query failed: {exc}")
        return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))
    return HTTPException(status_code=422, detail=str(exc))


@router.get("/nearby", response_model=NearbyZonesResponse, status_code=status.HTTP_200_OK)
def nearby_zones(
    lat: float = Query(..., description="Latitude of the delivery partner."),
    lng: float = Query(..., description="Longitude of the delivery partner."),
    radius: Optional[float] = Query(default=None, description="Search radius in kilometres."),
) -> NearbyZonesResponse:
    """Active zones whose centroid lies within the radius of the location."""
    try:
        result = zones_within(get_zone_repository(), lat, lng, radius)
    except (CoordinateValidationError, RepositoryError) as exc:
        raise _translate_errors(exc) from exc
    return radius_result_to_response(result)


@router.get("/detect", response_model=ZoneDetectionResponse, status_code=status.HTTP_200_OK)
def detect_user_zone(
    lat: float = Query(..., description="Latitude of the user."),
    lng: float = Query(..., description="Longitude of the user."),
) -> ZoneDetectionResponse:
    """Tell whether the location is inside an active service zone."""
    try:
        detection = detect_zone(get_zone_repository(), lat, lng)
    except (CoordinateValidationError, RepositoryError) as exc:
        raise _translate_errors(exc) from exc
    return detection_to_response(detection)


@router.post("/check-location", response_model=LocationCheckResponse, status_code=status.HTTP_200_OK)
def check_location_in_zone(payload: LocationCheckRequest) -> LocationCheckResponse:
    """Zones of a restaurant that contain the given location."""
    try:
        zones = zones_for_restaurant_at(
            get_zone_repository(), payload.latitude, payload.longitude, payload.restaurantId
        )
    except (CoordinateValidationError, RepositoryError) as exc:
        raise _translate_errors(exc) from exc
    return location_check_to_response(zones)
