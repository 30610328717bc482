import pytest

from src.zone_dispatch.config import settings
from src.zone_dispatch.data.records import parse_zone
from src.zone_dispatch.data.zones_repository import InMemoryZoneRepository
from src.zone_dispatch.models.domain import Zone
from src.zone_dispatch.models.errors import CoordinateValidationError
from src.zone_dispatch.services.dispatch.detection import (
    IN_SERVICE,
    OUT_OF_SERVICE,
    detect_zone,
    zones_for_restaurant_at,
)
from src.zone_dispatch.services.dispatch.radius import zones_within


def _zone(zone_id: str, coordinates, *, active: bool = True, restaurant_id: str | None = None) -> Zone:
    return Zone(
        zone_id=zone_id,
        name=f"Zone {zone_id}",
        coordinates=tuple(coordinates),
        is_active=active,
        restaurant_id=restaurant_id,
    )


# centroid (0.2, 0.2), ~31 km from the origin
NEAR = _zone("near", [(0.1, 0.1), (0.1, 0.3), (0.3, 0.3), (0.3, 0.1)])
# centroid (1.0, 1.0), ~157 km from the origin
FAR = _zone("far", [(0.9, 0.9), (0.9, 1.1), (1.1, 1.1), (1.1, 0.9)])


def test_zones_within_default_radius():
    result = zones_within(InMemoryZoneRepository([FAR, NEAR]), 0.0, 0.0)

    assert result.radius_km == settings.default_radius_km == 70.0
    assert result.count == 1
    nearby = result.zones[0]
    assert nearby.zone.zone_id == "near"
    assert nearby.centroid == pytest.approx((0.2, 0.2))
    assert nearby.distance_km == pytest.approx(31.45, abs=0.1)


def test_zones_within_excludes_far_zone():
    assert zones_within(InMemoryZoneRepository([FAR]), 0.0, 0.0, 70).zones == []


def test_zones_within_larger_radius_keeps_repository_order():
    result = zones_within(InMemoryZoneRepository([FAR, NEAR]), 0.0, 0.0, 200)
    assert [nearby.zone.zone_id for nearby in result.zones] == ["far", "near"]


def test_zones_within_skips_degenerate_and_inactive_zones():
    two_points = _zone("line", [(0.0, 0.0), (0.001, 0.001)])
    inactive = _zone("off", NEAR.coordinates, active=False)

    result = zones_within(InMemoryZoneRepository([two_points, inactive]), 0.0, 0.0, 1000)

    assert result.zones == []


def test_zones_within_skips_closed_two_point_ring():
    closed_line = parse_zone({"id": "closed-line", "coordinates": [[0, 0], [0.01, 0.01], [0, 0]]})

    assert not closed_line.is_valid_polygon
    assert zones_within(InMemoryZoneRepository([closed_line]), 0.0, 0.0, 70).zones == []


@pytest.mark.parametrize("radius", [0, -1])
def test_zones_within_rejects_non_positive_radius(radius):
    with pytest.raises(CoordinateValidationError):
        zones_within(InMemoryZoneRepository([NEAR]), 0.0, 0.0, radius)


def test_zones_within_rejects_bad_location():
    with pytest.raises(CoordinateValidationError):
        zones_within(InMemoryZoneRepository([NEAR]), 95.0, 0.0)


def test_detect_zone_inside_polygon():
    detection = detect_zone(InMemoryZoneRepository([FAR, NEAR]), 0.2, 0.25)

    assert detection.status == IN_SERVICE
    assert detection.zone.zone_id == "near"


def test_detect_zone_prefers_nearest_centroid_among_overlaps():
    wide = _zone("wide", [(0.0, 0.0), (0.0, 1.0), (1.0, 1.0), (1.0, 0.0)])
    detection = detect_zone(InMemoryZoneRepository([wide, NEAR]), 0.21, 0.21)

    assert detection.zone.zone_id == "near"


def test_detect_zone_uses_centroid_buffer_for_near_misses():
    # point sits ~33 m south of a small triangle, well inside the 100 m buffer
    sliver = _zone("sliver", [(10.0, 10.0), (10.0, 10.002), (10.0005, 10.001)])
    centroid_lat, centroid_lng = sliver.centroid()
    assert not sliver.contains(centroid_lat - 0.0003, centroid_lng)

    detection = detect_zone(InMemoryZoneRepository([sliver]), centroid_lat - 0.0003, centroid_lng)

    assert detection.status == IN_SERVICE
    assert detection.zone.zone_id == "sliver"


def test_detect_zone_out_of_service():
    outside = detect_zone(InMemoryZoneRepository([NEAR]), 40.0, 40.0)
    assert outside.status == OUT_OF_SERVICE
    assert outside.zone is None

    empty = detect_zone(InMemoryZoneRepository([]), 0.2, 0.2)
    assert empty.status == OUT_OF_SERVICE
    assert "No delivery zones" in empty.message


def test_zones_for_restaurant_at_filters_by_owner():
    owned = _zone("owned", NEAR.coordinates, restaurant_id="R1")
    other = _zone("other", NEAR.coordinates, restaurant_id="R2")
    repository = InMemoryZoneRepository([owned, other])

    assert [z.zone_id for z in zones_for_restaurant_at(repository, 0.2, 0.2, "R1")] == ["owned"]
    assert zones_for_restaurant_at(repository, 5.0, 5.0, "R1") == []
    with pytest.raises(ValueError):
        zones_for_restaurant_at(repository, 0.2, 0.2, "")
