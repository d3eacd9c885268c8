# tests/test_emergency_registry.py
"""Tests for the per-user emergency service registry."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from datetime import timedelta
from conftest import BASE_LAT, BASE_LNG
from jeevanpath.models.emergency_notification import EmergencyNotification
from jeevanpath.models.emergency_service import EmergencyService
from jeevanpath.services.emergency_registry import get_or_create_for_alert, toggle_emergency_service


class TestToggle:
    @pytest.mark.asyncio
    async def test_defaults(self, db):
        service = await toggle_emergency_service(db, "user-asha", BASE_LAT, BASE_LNG)

        assert service.is_enabled is True
        assert service.max_distance_km == 10
        assert service.emergency_types == ["medical", "blood"]
        assert service.location == {"type": "Point", "coordinates": [BASE_LNG, BASE_LAT]}
        assert service.last_location_update is not None

    @pytest.mark.asyncio
    async def test_upsert_keeps_one_record(self, db):
        await toggle_emergency_service(db, "user-asha", BASE_LAT, BASE_LNG)
        service = await toggle_emergency_service(db, "user-asha", BASE_LAT, BASE_LNG,
                                                 is_enabled=True, max_distance_km=25,
                                                 emergency_types=["accident"])

        assert db.query(EmergencyService).count() == 1
        assert service.max_distance_km == 25
        assert service.emergency_types == ["accident"]

    @pytest.mark.asyncio
    async def test_enable_reports_nearby_resources(self, db, make_resource):
        make_resource("City Clinic", km=1.0)
        make_resource("Apollo Pharmacy", km=4.0, category="pharmacy")
        make_resource("Outside", km=12.0)

        await toggle_emergency_service(db, "user-asha", BASE_LAT, BASE_LNG)

        note = db.query(EmergencyNotification).one()
        assert note.type == "resource_found"
        assert note.title == "🏥 2 Healthcare Resources Nearby"
        assert note.priority == "medium"
        assert note.expires_at - note.created_at == timedelta(days=7)

    @pytest.mark.asyncio
    async def test_enable_with_nothing_nearby_is_silent(self, db):
        await toggle_emergency_service(db, "user-asha", BASE_LAT, BASE_LNG)
        assert db.query(EmergencyNotification).count() == 0

    @pytest.mark.asyncio
    async def test_disable_does_not_notify(self, db, make_resource):
        make_resource("City Clinic", km=1.0)

        service = await toggle_emergency_service(db, "user-asha", BASE_LAT, BASE_LNG, is_enabled=False)

        assert service.is_enabled is False
        assert db.query(EmergencyNotification).count() == 0


class TestGetOrCreateForAlert:
    @pytest.mark.asyncio
    async def test_creates_with_all_types(self, db):
        service = await get_or_create_for_alert(db, "user-asha", BASE_LAT, BASE_LNG)

        assert service.is_enabled is True
        assert service.max_distance_km == 10
        assert service.emergency_types == ["medical", "blood", "accident", "pharmacy"]

    @pytest.mark.asyncio
    async def test_existing_enabled_record_untouched(self, db):
        await toggle_emergency_service(db, "user-asha", 19.0760, 72.8777, max_distance_km=30)

        service = await get_or_create_for_alert(db, "user-asha", BASE_LAT, BASE_LNG)

        assert service.max_distance_km == 30
        assert service.latitude == 19.0760

    @pytest.mark.asyncio
    async def test_reenables_and_moves(self, db):
        await toggle_emergency_service(db, "user-asha", 19.0760, 72.8777, is_enabled=False)

        service = await get_or_create_for_alert(db, "user-asha", BASE_LAT, BASE_LNG)

        assert service.is_enabled is True
        assert (service.latitude, service.longitude) == (BASE_LAT, BASE_LNG)
        assert db.query(EmergencyService).count() == 1
