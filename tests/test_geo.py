import math
import random

import pytest

from market_insights.core.errors import InvalidInputError
from market_insights.services.geo import GeoCoordinate, bounding_box, distance
from support import destination


def _random_point(rng: random.Random) -> GeoCoordinate:
    return GeoCoordinate(rng.uniform(-89.0, 89.0), rng.uniform(-180.0, 180.0))


def test_distance_same_point_is_zero():
    p = GeoCoordinate(40.0, -74.0)
    assert distance(p, p) == 0.0


def test_distance_is_symmetric():
    rng = random.Random(7)
    for _ in range(300):
        a, b = _random_point(rng), _random_point(rng)
        assert distance(a, b) == pytest.approx(distance(b, a), rel=1e-9, abs=1e-12)


def test_distance_triangle_inequality():
    rng = random.Random(11)
    for _ in range(300):
        a, b, c = _random_point(rng), _random_point(rng), _random_point(rng)
        assert distance(a, c) <= distance(a, b) + distance(b, c) + 1e-6


def test_distance_known_values():
    nyc = GeoCoordinate(40.7128, -74.0060)
    la = GeoCoordinate(34.0522, -118.2437)
    assert distance(nyc, la) == pytest.approx(2445, abs=5)
    # one degree of latitude on a 3959 mile sphere
    assert distance(GeoCoordinate(0, 0), GeoCoordinate(1, 0)) == pytest.approx(
        3959 * math.pi / 180
    )


def test_bounding_box_deltas_at_mid_latitude():
    box = bounding_box(GeoCoordinate(40.0, -74.0), 5)
    lon_delta = 5 / (69 * math.cos(math.radians(40.0)))
    assert box.min_lat == pytest.approx(40.0 - 5 / 69)
    assert box.max_lat == pytest.approx(40.0 + 5 / 69)
    assert box.min_lon == pytest.approx(-74.0 - lon_delta)
    assert box.max_lon == pytest.approx(-74.0 + lon_delta)


def test_bounding_box_contains_every_point_within_radius():
    rng = random.Random(3)
    for _ in range(200):
        center = GeoCoordinate(rng.uniform(-89.9, 89.9), rng.uniform(-180.0, 180.0))
        radius = rng.choice([0.5, 1, 3, 5, 25])
        box = bounding_box(center, radius)
        for _ in range(20):
            p = destination(center, rng.uniform(0, 0.999) * radius, rng.uniform(0, 360))
            assert distance(center, p) <= radius
            assert box.contains(p), (center, radius, p, box)


@pytest.mark.parametrize("lat", [90.0, -90.0, 89.99999])
def test_bounding_box_near_pole_spans_all_longitudes(lat):
    box = bounding_box(GeoCoordinate(lat, 10.0), 5)
    assert (box.min_lon, box.max_lon) == (-180.0, 180.0)
    assert all(math.isfinite(v) for v in (box.min_lat, box.max_lat))
    assert -90.0 <= box.min_lat <= box.max_lat <= 90.0


def test_bounding_box_across_antimeridian():
    box = bounding_box(GeoCoordinate(0.0, 179.99), 5)
    assert len(box.lon_ranges()) == 2
    assert box.contains(GeoCoordinate(0.0, -179.99))
    assert box.contains(GeoCoordinate(0.0, 179.95))
    assert not box.contains(GeoCoordinate(0.0, 0.0))


def test_bounding_box_rejects_negative_radius():
    with pytest.raises(InvalidInputError):
        bounding_box(GeoCoordinate(40.0, -74.0), -1)


@pytest.mark.parametrize(
    "lat,lon", [(91.0, 0.0), (-90.5, 0.0), (0.0, 180.5), (float("nan"), 0.0), (0.0, float("inf"))]
)
def test_coordinate_validation(lat, lon):
    with pytest.raises(InvalidInputError):
        GeoCoordinate(lat, lon)
