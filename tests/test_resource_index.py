# tests/test_resource_index.py
"""Tests for the nearest-within-radius resource search."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from conftest import BASE_LAT, BASE_LNG
from datetime import datetime
from jeevanpath.services.resource_index import (
    create_resource, find_nearby_resources, get_resource, list_resources,
)
from jeevanpath.utils.errors import NotFoundError


class TestFindNearbyResources:
    def test_nearest_first(self, db, make_resource):
        make_resource("Far Clinic", km=4.0)
        make_resource("Near Pharmacy", km=0.5, category="pharmacy")
        make_resource("Mid Blood Bank", km=2.0, category="blood_bank")

        results = find_nearby_resources(db, BASE_LAT, BASE_LNG, 5000, 10)

        assert [r.name for r, _ in results] == ["Near Pharmacy", "Mid Blood Bank", "Far Clinic"]
        assert [round(d, 3) for _, d in results] == [0.5, 2.0, 4.0]

    def test_excludes_outside_radius(self, db, make_resource):
        make_resource("Inside", km=2.99)
        make_resource("Outside", km=3.01)

        results = find_nearby_resources(db, BASE_LAT, BASE_LNG, 3000, 10)

        assert [r.name for r, _ in results] == ["Inside"]

    def test_respects_limit(self, db, make_resource):
        for i in range(8):
            make_resource(f"Clinic {i}", km=0.5 + i)

        results = find_nearby_resources(db, BASE_LAT, BASE_LNG, 20000, 3)

        assert [r.name for r, _ in results] == ["Clinic 0", "Clinic 1", "Clinic 2"]

    def test_empty_when_nothing_in_range(self, db, make_resource):
        make_resource("Remote", km=50)
        assert find_nearby_resources(db, BASE_LAT, BASE_LNG, 10000, 10) == []

    def test_resource_east_of_requester(self, db):
        # ~3 km east at this latitude
        create_resource(db, "East Clinic", "clinic", BASE_LAT, BASE_LNG + 0.0306)
        results = find_nearby_resources(db, BASE_LAT, BASE_LNG, 5000, 10)
        assert len(results) == 1
        assert results[0][1] == pytest.approx(3.0, abs=0.1)

    def test_across_the_pole(self, db):
        # Same parallel, opposite side of the pole: 200 degrees of longitude apart
        create_resource(db, "Polar Station", "clinic", 89.95, -150)
        results = find_nearby_resources(db, 89.95, 50, 25000, 10)
        assert [r.name for r, _ in results] == ["Polar Station"]
        assert results[0][1] == pytest.approx(10.95, abs=0.05)

    def test_across_the_antimeridian(self, db):
        create_resource(db, "Dateline Clinic", "clinic", 0, -179.95)
        results = find_nearby_resources(db, 0, 179.95, 25000, 10)
        assert [r.name for r, _ in results] == ["Dateline Clinic"]
        assert results[0][1] == pytest.approx(11.12, abs=0.05)

    def test_antimeridian_box_still_excludes_far_longitudes(self, db):
        create_resource(db, "Greenwich", "clinic", 0, 0)
        assert find_nearby_resources(db, 0, 179.95, 25000, 10) == []


class TestResourceRecords:
    def test_location_stored_as_geojson(self, db):
        resource = create_resource(db, "AIIMS", "clinic", 28.5672, 77.2100, contact="011-26588500")
        assert resource.location == {"type": "Point", "coordinates": [77.2100, 28.5672]}
        assert (resource.latitude, resource.longitude) == (28.5672, 77.2100)

    def test_get_resource(self, db, make_resource):
        resource = make_resource("Lookup Clinic")
        assert get_resource(db, resource.id).name == "Lookup Clinic"

    def test_get_missing_resource_raises(self, db):
        with pytest.raises(NotFoundError):
            get_resource(db, 404)


class TestListResources:
    @pytest.fixture
    def catalogue(self, make_resource):
        make_resource("Apollo Pharmacy", km=1.0, category="pharmacy", rating=4.2,
                      services=["otc", "prescription"], languages=["hi", "en"],
                      open_time="08:00", close_time="22:00")
        make_resource("City Clinic", km=0.5, rating=3.5, services=["general"],
                      languages=["hi"], open_time="09:00", close_time="17:00",
                      wheelchair_accessible=True)
        make_resource("Red Cross Blood Bank", km=2.5, category="blood_bank", rating=4.8,
                      is_24_hours=True, wheelchair_accessible=True)
        make_resource("Distant Clinic", km=40, rating=5.0)

    def names(self, results):
        return [r.name for r, _ in results]

    def test_unfiltered_in_insertion_order(self, db, catalogue):
        results = list_resources(db)
        assert self.names(results) == ["Apollo Pharmacy", "City Clinic", "Red Cross Blood Bank", "Distant Clinic"]
        assert all(d is None for _, d in results)

    def test_filter_by_category(self, db, catalogue):
        assert self.names(list_resources(db, category="clinic")) == ["City Clinic", "Distant Clinic"]

    def test_name_search_is_case_insensitive(self, db, catalogue):
        assert self.names(list_resources(db, q="apollo")) == ["Apollo Pharmacy"]

    def test_min_rating(self, db, catalogue):
        assert self.names(list_resources(db, min_rating=4.5)) == ["Red Cross Blood Bank", "Distant Clinic"]

    def test_wheelchair(self, db, catalogue):
        assert self.names(list_resources(db, wheelchair=True)) == ["City Clinic", "Red Cross Blood Bank"]

    def test_services_must_all_match(self, db, catalogue):
        assert self.names(list_resources(db, services=["otc", "prescription"])) == ["Apollo Pharmacy"]
        assert list_resources(db, services=["otc", "surgery"]) == []

    def test_languages(self, db, catalogue):
        assert self.names(list_resources(db, languages=["hi"])) == ["Apollo Pharmacy", "City Clinic"]

    def test_open_now_in_the_evening(self, db, catalogue):
        evening = datetime(2026, 10, 19, 20, 0)
        results = list_resources(db, open_now=True, now=evening)
        assert self.names(results) == ["Apollo Pharmacy", "Red Cross Blood Bank"]

    def test_open_now_at_night_only_24_hours(self, db, catalogue):
        night = datetime(2026, 10, 19, 2, 30)
        assert self.names(list_resources(db, open_now=True, now=night)) == ["Red Cross Blood Bank"]

    def test_located_search_is_nearest_first_within_radius(self, db, catalogue):
        results = list_resources(db, lat=BASE_LAT, lng=BASE_LNG, radius_meters=3000)
        assert self.names(results) == ["City Clinic", "Apollo Pharmacy", "Red Cross Blood Bank"]
        assert [round(d, 3) for _, d in results] == [0.5, 1.0, 2.5]

    def test_sort_by_rating_keeps_distances(self, db, catalogue):
        results = list_resources(db, lat=BASE_LAT, lng=BASE_LNG, radius_meters=3000, sort_by="rating")
        assert self.names(results) == ["Red Cross Blood Bank", "Apollo Pharmacy", "City Clinic"]
        assert results[0][1] == pytest.approx(2.5, abs=0.001)

    def test_sort_by_rating_without_location(self, db, catalogue):
        results = list_resources(db, sort_by="rating")
        assert self.names(results)[:2] == ["Distant Clinic", "Red Cross Blood Bank"]

    def test_filters_combine(self, db, catalogue):
        results = list_resources(db, wheelchair=True, min_rating=4.0, lat=BASE_LAT, lng=BASE_LNG)
        assert self.names(results) == ["Red Cross Blood Bank"]

    def test_limit(self, db, catalogue):
        assert len(list_resources(db, limit=2)) == 2
