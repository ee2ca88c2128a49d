import math

import pytest

from cityradius.core.geo import GeoPoint, bounding_box, haversine_m, spherical_cosine_m

POINTS = [
    GeoPoint(lat=0.0, lon=0.0),
    GeoPoint(lat=51.5237, lon=-0.1585),
    GeoPoint(lat=-33.8688, lon=151.2093),
    GeoPoint(lat=40.7128, lon=-74.0060),
    GeoPoint(lat=89.9, lon=179.9),
]


def test_haversine_known_fixture_one_degree_of_longitude_at_equator():
    d = haversine_m(GeoPoint(lat=0, lon=0), GeoPoint(lat=0, lon=1))
    assert d == pytest.approx(111_195, abs=50)


@pytest.mark.parametrize("a", POINTS)
@pytest.mark.parametrize("b", POINTS)
def test_haversine_is_symmetric(a, b):
    assert haversine_m(a, b) == pytest.approx(haversine_m(b, a), rel=1e-6, abs=1e-6)


@pytest.mark.parametrize("a", POINTS)
def test_distance_to_self_is_zero(a):
    assert haversine_m(a, a) == 0
    # acos rounding is clamped, so coincident points never raise a domain error.
    assert spherical_cosine_m(a, a) == pytest.approx(0, abs=1.0)


def test_spherical_cosine_agrees_with_haversine():
    for a in POINTS:
        for b in POINTS:
            if a == b:
                continue
            assert spherical_cosine_m(a, b) == pytest.approx(haversine_m(a, b), rel=1e-6)


def test_bounding_box_encloses_the_circle():
    center = GeoPoint(lat=51.5, lon=-0.12)
    radius_m = 50_000
    box = bounding_box(center, radius_m)
    assert box.contains(center.lat, center.lon)

    # Walk the circle boundary (slightly inside) and check every point is in the box.
    for bearing_deg in range(0, 360, 15):
        theta = math.radians(bearing_deg)
        delta = (radius_m * 0.999) / 6_371_000
        phi1 = math.radians(center.lat)
        lam1 = math.radians(center.lon)
        phi2 = math.asin(math.sin(phi1) * math.cos(delta) + math.cos(phi1) * math.sin(delta) * math.cos(theta))
        lam2 = lam1 + math.atan2(
            math.sin(theta) * math.sin(delta) * math.cos(phi1),
            math.cos(delta) - math.sin(phi1) * math.sin(phi2),
        )
        assert box.contains(math.degrees(phi2), math.degrees(lam2))


def test_bounding_box_span_matches_radius_in_degrees():
    box = bounding_box(GeoPoint(lat=0, lon=0), 111_195)
    assert box.max_lat == pytest.approx(1.0, abs=1e-3)
    assert box.min_lon == pytest.approx(-1.0, abs=1e-3)
