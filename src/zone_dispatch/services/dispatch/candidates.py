"""Restaurant eligibility and same-zone filtering."""

from __future__ import annotations

from typing import Iterable

from ...models.domain import Candidate, DeliveryPoint, Restaurant
from ..geospatial import haversine_km
from .matcher import ZoneMatcher


def build_candidates(
    point: DeliveryPoint,
    restaurants: Iterable[Restaurant],
    matcher: ZoneMatcher,
) -> list[Candidate]:
    """Restaurants whose pin and the delivery point share a zone, in input order.

    A restaurant is considered only when it is active, accepting orders and
    geolocated. Its zone is the one its own pin resolves to; the delivery
    point must fall inside that same polygon.
    """
    candidates: list[Candidate] = []
    for restaurant in restaurants:
        if not restaurant.is_dispatchable:
            continue
        zone = matcher.zone_containing(restaurant.latitude, restaurant.longitude)
        if zone is None:
            continue
        if not zone.contains(point.latitude, point.longitude):
            continue
        distance = haversine_km(point.latitude, point.longitude, restaurant.latitude, restaurant.longitude)
        candidates.append(Candidate(restaurant=restaurant, zone=zone, distance_km=distance))
    return candidates


def rank_candidates(candidates: Iterable[Candidate]) -> list[Candidate]:
    # sorted() is stable: equal distances keep input order
    return sorted(candidates, key=lambda candidate: candidate.distance_km)
