import math

import pytest

from src.zone_dispatch.models.errors import CoordinateValidationError
from src.zone_dispatch.services.geospatial import (
    geojson_to_coordinates,
    haversine_km,
    point_in_polygon,
    polygon_area,
    polygon_centroid,
    to_closed_ring,
    to_geojson,
    validate_coordinates,
    validate_radius,
)

SQUARE = [(0.0, 0.0), (0.0, 10.0), (10.0, 10.0), (10.0, 0.0)]
# Square with a V-shaped notch cut down from the top edge to (5, 5)
NOTCHED = [(0.0, 0.0), (0.0, 10.0), (5.0, 5.0), (10.0, 10.0), (10.0, 0.0)]
NOTCHED_POINTS = {
    (2.0, 4.0): True,
    (5.0, 2.0): True,
    (8.0, 4.0): True,
    (5.0, 8.0): False,
    (12.0, 5.0): False,
    (-1.0, 4.0): False,
}


def test_point_in_square():
    assert point_in_polygon(5.0, 5.0, SQUARE)
    assert point_in_polygon(0.5, 9.5, SQUARE)
    assert not point_in_polygon(50.0, 50.0, SQUARE)
    assert not point_in_polygon(-0.5, 5.0, SQUARE)
    assert not point_in_polygon(5.0, 10.5, SQUARE)


def test_point_in_concave_polygon():
    for (lat, lng), expected in NOTCHED_POINTS.items():
        assert point_in_polygon(lat, lng, NOTCHED) is expected, (lat, lng)


@pytest.mark.parametrize("shift", range(len(NOTCHED)))
def test_containment_is_rotation_invariant(shift):
    rotated = NOTCHED[shift:] + NOTCHED[:shift]
    for (lat, lng), expected in NOTCHED_POINTS.items():
        assert point_in_polygon(lat, lng, rotated) is expected


def test_containment_ignores_winding_direction():
    reversed_polygon = list(reversed(NOTCHED))
    for (lat, lng), expected in NOTCHED_POINTS.items():
        assert point_in_polygon(lat, lng, reversed_polygon) is expected


def test_degenerate_polygon_contains_nothing():
    assert not point_in_polygon(0.0, 0.0, [(0.0, 0.0), (1.0, 1.0)])
    assert not point_in_polygon(0.0, 0.0, [])


def test_haversine_symmetry_and_identity():
    a = (21.5433, 39.1728)
    b = (21.4858, 39.1925)
    assert haversine_km(*a, *b) == pytest.approx(haversine_km(*b, *a))
    assert haversine_km(*a, *a) == 0.0


def test_haversine_one_degree_of_longitude_at_equator():
    assert haversine_km(0.0, 0.0, 0.0, 1.0) == pytest.approx(6371.0 * math.pi / 180, rel=1e-9)


def test_centroid_is_vertex_mean():
    assert polygon_centroid(SQUARE) == (5.0, 5.0)
    assert polygon_centroid([(0.0, 0.0), (0.0, 3.0), (3.0, 0.0)]) == (1.0, 1.0)
    with pytest.raises(ValueError):
        polygon_centroid([])


def test_polygon_area_compares_sizes():
    small = [(4.0, 4.0), (4.0, 6.0), (6.0, 6.0), (6.0, 4.0)]
    assert polygon_area(SQUARE) == pytest.approx(100.0)
    assert polygon_area(small) < polygon_area(SQUARE)
    assert polygon_area([(0.0, 0.0), (1.0, 1.0)]) == 0.0


def test_closed_ring_repeats_first_vertex():
    ring = to_closed_ring(SQUARE)
    assert ring[0] == ring[-1]
    assert len(ring) == len(SQUARE) + 1
    assert to_closed_ring(ring) == ring


def test_geojson_uses_lng_lat_order():
    polygon = [(21.0, 39.0), (21.0, 39.5), (21.5, 39.5)]
    geojson = to_geojson(polygon)

    assert geojson["type"] == "Polygon"
    assert geojson["coordinates"][0][0] == [39.0, 21.0]
    assert geojson["coordinates"][0][0] == geojson["coordinates"][0][-1]
    assert geojson_to_coordinates(geojson) == polygon


def test_geojson_to_coordinates_ignores_other_geometries():
    assert geojson_to_coordinates({"type": "Point", "coordinates": [39.0, 21.0]}) == []
    assert geojson_to_coordinates(None) == []


@pytest.mark.parametrize(
    "lat, lng",
    [(91, 0), (-90.5, 0), (0, 180.1), (0, -181), (float("nan"), 0), (0, float("inf")), ("abc", 1), (None, 1)],
)
def test_validate_coordinates_rejects_bad_input(lat, lng):
    with pytest.raises(CoordinateValidationError):
        validate_coordinates(lat, lng)


def test_validate_coordinates_accepts_bounds_and_strings():
    assert validate_coordinates(90, -180) == (90.0, -180.0)
    assert validate_coordinates("21.5", "39.2") == (21.5, 39.2)


@pytest.mark.parametrize("radius", [0, -5, float("nan"), "far"])
def test_validate_radius_rejects_non_positive(radius):
    with pytest.raises(CoordinateValidationError):
        validate_radius(radius)
