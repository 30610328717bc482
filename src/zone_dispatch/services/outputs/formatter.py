"""Utilities to serialize dispatch results into the response envelopes."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import AssignmentResult, NotAssignable, RadiusQueryResult, Zone, ZoneDetection
from ...schemas.dispatch import (
    AssignedRestaurantModel,
    AssignmentResponse,
    LocationCheckResponse,
    LocationModel,
    NearbyZoneModel,
    NearbyZonesResponse,
    NotAssignableResponse,
    ZoneDetectionResponse,
    ZoneSummaryModel,
)


def zone_summary(zone: Zone) -> ZoneSummaryModel:
    return ZoneSummaryModel(
        id=zone.zone_id,
        name=zone.name,
        country=zone.country,
        serviceLocation=zone.service_location,
        unit=zone.unit,
    )


def assignment_to_response(result: AssignmentResult) -> AssignmentResponse:
    return AssignmentResponse(
        restaurantId=result.restaurant_id,
        restaurantName=result.restaurant_name,
        assignedRestaurant=AssignedRestaurantModel(
            distanceKm=round(result.distance_km, 3),
            assignedBy=result.assigned_by,
            zoneId=result.zone_id,
            zoneName=result.zone_name,
        ),
    )


def not_assignable_to_response(outcome: NotAssignable) -> NotAssignableResponse:
    return NotAssignableResponse(
        message=outcome.reason,
        location=LocationModel(latitude=outcome.point.latitude, longitude=outcome.point.longitude),
        restaurantsConsidered=outcome.restaurants_considered,
    )


def radius_result_to_response(result: RadiusQueryResult) -> NearbyZonesResponse:
    zones = [
        NearbyZoneModel(
            **zone_summary(nearby.zone).model_dump(),
            centroid=LocationModel(latitude=nearby.centroid[0], longitude=nearby.centroid[1]),
            boundary=nearby.zone.boundary(),
            distanceKm=round(nearby.distance_km, 3),
        )
        for nearby in result.zones
    ]
    return NearbyZonesResponse(
        zones=zones,
        count=result.count,
        radiusKm=result.radius_km,
        location=LocationModel(latitude=result.point.latitude, longitude=result.point.longitude),
    )


def detection_to_response(detection: ZoneDetection) -> ZoneDetectionResponse:
    if detection.zone is None:
        return ZoneDetectionResponse(status=detection.status, message=detection.message)
    return ZoneDetectionResponse(
        status=detection.status,
        zoneId=detection.zone.zone_id,
        zone=zone_summary(detection.zone),
        message=detection.message,
    )


def location_check_to_response(zones: Sequence[Zone]) -> LocationCheckResponse:
    return LocationCheckResponse(isInZone=bool(zones), zones=[zone_summary(zone) for zone in zones])
