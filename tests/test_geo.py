# tests/test_geo.py
"""Unit tests for the distance calculator and GeoJSON helpers."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import math
import pytest
from jeevanpath.utils.geo import (
    EARTH_RADIUS_KM, bounding_box, distance_km, geojson_point, point_lat_lng,
)


class TestDistanceKm:
    def test_identical_points_are_zero(self):
        assert distance_km(28.6139, 77.2090, 28.6139, 77.2090) == 0

    def test_antipodal_points_are_half_circumference(self):
        d = distance_km(0, 0, 0, 180)
        assert d == pytest.approx(math.pi * EARTH_RADIUS_KM, rel=1e-9)

    def test_symmetric(self):
        a = distance_km(28.6139, 77.2090, 19.0760, 72.8777)
        b = distance_km(19.0760, 72.8777, 28.6139, 77.2090)
        assert a == pytest.approx(b)

    def test_delhi_to_mumbai(self):
        d = distance_km(28.6139, 77.2090, 19.0760, 72.8777)
        assert 1100 < d < 1200

    def test_one_degree_of_latitude(self):
        d = distance_km(10.0, 20.0, 11.0, 20.0)
        assert d == pytest.approx(EARTH_RADIUS_KM * math.pi / 180, rel=1e-9)

    def test_never_negative(self):
        assert distance_km(-33.86, 151.20, 51.50, -0.12) > 0


class TestGeoJson:
    def test_point_is_lng_lat(self):
        assert geojson_point(28.6, 77.2) == {"type": "Point", "coordinates": [77.2, 28.6]}

    def test_point_lat_lng_reverses_order(self):
        assert point_lat_lng({"type": "Point", "coordinates": [77.2, 28.6]}) == (28.6, 77.2)


class TestBoundingBox:
    def test_contains_points_on_the_radius(self):
        lat, lng = 28.6315, 77.2167
        min_lat, max_lat, lng_ranges = bounding_box(lat, lng, 25)
        step = 25 / (EARTH_RADIUS_KM * math.pi / 180)
        assert min_lat < lat - step and lat + step < max_lat
        [(min_lng, max_lng)] = lng_ranges
        east_step = step / math.cos(math.radians(lat))
        assert min_lng < lng - east_step and lng + east_step < max_lng

    def test_reaching_a_pole_drops_longitude_bound(self):
        min_lat, max_lat, lng_ranges = bounding_box(89.95, 50, 25)
        assert lng_ranges is None
        assert max_lat == 90.0
        assert min_lat < 89.95

    def test_south_pole_too(self):
        assert bounding_box(-89.9, 0, 50)[2] is None

    def test_crossing_antimeridian_east(self):
        _, _, lng_ranges = bounding_box(0, 179.95, 25)
        assert len(lng_ranges) == 2
        (east_lo, east_hi), (west_lo, west_hi) = lng_ranges
        assert east_lo < 179.95 and east_hi == 180.0
        assert west_lo == -180.0 and -180.0 < west_hi < -179.7

    def test_crossing_antimeridian_west(self):
        _, _, lng_ranges = bounding_box(0, -179.95, 25)
        (east_lo, east_hi), (west_lo, west_hi) = lng_ranges
        assert 179.7 < east_lo < 180.0 and east_hi == 180.0
        assert west_lo == -180.0 and west_hi > -179.95

    def test_very_wide_box_has_no_longitude_bound(self):
        min_lat, max_lat, lng_ranges = bounding_box(0, 0, 8800)
        assert -90 < min_lat and max_lat < 90
        assert lng_ranges is None
