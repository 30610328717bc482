"""Zone-based restaurant assignment."""

from __future__ import annotations

import logging
from typing import Any

from ...config import settings
from ...data.restaurants_repository import RestaurantRepository, get_restaurant_repository
from ...data.zones_repository import ZoneRepository, get_zone_repository
from ...models.domain import AssignmentResult, Candidate, DeliveryPoint, NotAssignable
from ..geospatial import validate_coordinates
from .candidates import build_candidates, rank_candidates
from .matcher import OverlapPolicy, ZoneMatcher

logger = logging.getLogger(__name__)


class AssignmentEngine:
    """Pick the nearest restaurant that shares a zone with the delivery point.

    Every call reads zones and restaurants afresh and keeps no state between
    calls, so one instance can serve concurrent requests. Repository errors
    propagate to the caller unchanged.
    """

    def __init__(
        self,
        zones: ZoneRepository,
        restaurants: RestaurantRepository,
        *,
        overlap_policy: OverlapPolicy = "first_match",
    ) -> None:
        self.zones = zones
        self.restaurants = restaurants
        self.overlap_policy = overlap_policy

    def candidates(self, latitude: Any, longitude: Any) -> list[Candidate]:
        """All eligible restaurants for the point, nearest first."""
        lat, lng = validate_coordinates(latitude, longitude)
        point = DeliveryPoint(latitude=lat, longitude=lng)
        return rank_candidates(self._collect(point)[0])

    def assign(self, latitude: Any, longitude: Any) -> AssignmentResult | NotAssignable:
        lat, lng = validate_coordinates(latitude, longitude)
        point = DeliveryPoint(latitude=lat, longitude=lng)

        found, considered = self._collect(point)
        if not found:
            logger.info(f"No restaurant serves ({lat}, {lng}); {considered} restaurants considered")
            return NotAssignable(point=point, restaurants_considered=considered)

        best = rank_candidates(found)[0]
        logger.info(
            f"Assigned ({lat}, {lng}) to restaurant {best.restaurant.restaurant_id} "
            f"in zone {best.zone.zone_id} at {best.distance_km:.3f} km "
            f"({len(found)} candidates)"
        )
        return AssignmentResult(
            restaurant_id=best.restaurant.restaurant_id,
            restaurant_name=best.restaurant.name,
            zone_id=best.zone.zone_id,
            zone_name=best.zone.name,
            distance_km=best.distance_km,
        )

    def _collect(self, point: DeliveryPoint) -> tuple[list[Candidate], int]:
        try:
            restaurants = self.restaurants.list_restaurants(dispatchable_only=True)
            matcher = ZoneMatcher.from_repository(self.zones, policy=self.overlap_policy)
        except Exception as exc:
            logger.error(f"Failed to load dispatch data: {exc}")
            raise
        return build_candidates(point, restaurants, matcher), len(restaurants)


def build_engine() -> AssignmentEngine:
    """Engine wired to the configured repositories."""
    return AssignmentEngine(
        get_zone_repository(),
        get_restaurant_repository(),
        overlap_policy=settings.zone_overlap_policy,
    )
