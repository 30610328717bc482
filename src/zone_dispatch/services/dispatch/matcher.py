"""Resolve points to the zones that contain them."""

from __future__ import annotations

import logging
from typing import Literal, Sequence

from ...models.domain import Zone
from ...data.zones_repository import ZoneRepository

OverlapPolicy = Literal["first_match", "smallest_area"]

logger = logging.getLogger(__name__)


class ZoneMatcher:
    """Linear scan over active zones.

    When zones overlap, ``first_match`` returns the first containing zone in
    repository order, and ``smallest_area`` returns the tightest one (ties
    keep repository order). A spatial index can replace the scan behind the
    same methods.
    """

    def __init__(self, zones: Sequence[Zone], policy: OverlapPolicy = "first_match") -> None:
        if policy not in ("first_match", "smallest_area"):
            raise ValueError(f"Unknown zone overlap policy '{policy}'.")
        self.zones = tuple(zone for zone in zones if zone.is_active and zone.is_valid_polygon)
        self.policy = policy

    @classmethod
    def from_repository(cls, repository: ZoneRepository, policy: OverlapPolicy = "first_match") -> "ZoneMatcher":
        return cls(repository.list_zones(active_only=True), policy=policy)

    def zones_containing(self, latitude: float, longitude: float) -> list[Zone]:
        return [zone for zone in self.zones if zone.contains(latitude, longitude)]

    def zone_containing(self, latitude: float, longitude: float) -> Zone | None:
        if self.policy == "first_match":
            for zone in self.zones:
                if zone.contains(latitude, longitude):
                    return zone
            return None

        matches = self.zones_containing(latitude, longitude)
        if not matches:
            return None
        if len(matches) > 1:
            logger.debug(f"Point ({latitude}, {longitude}) falls in {len(matches)} overlapping zones")
        # min() keeps the first of equal keys
        return min(matches, key=lambda zone: zone.area())
