"""Pydantic request/response models for dispatch and zone discovery endpoints."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field


class LocationModel(BaseModel):
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)


class AssignmentRequest(LocationModel):
    pass


class LocationCheckRequest(LocationModel):
    restaurantId: str = Field(..., min_length=1)


class AssignedRestaurantModel(BaseModel):
    distanceKm: float
    assignedBy: str
    zoneId: str
    zoneName: str


class AssignmentResponse(BaseModel):
    restaurantId: str
    restaurantName: str
    assignedRestaurant: AssignedRestaurantModel


class NotAssignableResponse(BaseModel):
    status: Literal["NOT_ASSIGNABLE"] = "NOT_ASSIGNABLE"
    message: str
    location: LocationModel
    restaurantsConsidered: int


class ZoneSummaryModel(BaseModel):
    id: str
    name: str
    country: Optional[str] = None
    serviceLocation: Optional[str] = None
    unit: Optional[str] = None


class NearbyZoneModel(ZoneSummaryModel):
    centroid: LocationModel
    boundary: dict[str, Any]
    distanceKm: float


class NearbyZonesResponse(BaseModel):
    zones: list[NearbyZoneModel]
    count: int
    radiusKm: float
    location: LocationModel


class ZoneDetectionResponse(BaseModel):
    status: Literal["IN_SERVICE", "OUT_OF_SERVICE"]
    zoneId: Optional[str] = None
    zone: Optional[ZoneSummaryModel] = None
    message: str


class LocationCheckResponse(BaseModel):
    isInZone: bool
    zones: list[ZoneSummaryModel]
