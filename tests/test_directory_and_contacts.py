# tests/test_directory_and_contacts.py
"""Tests for provider lookups, the provider inbox, personal contacts and provider assignment."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from conftest import BASE_LAT, BASE_LNG
from jeevanpath.services.alert_dispatcher import EmergencyEvent, dispatch
from jeevanpath.services.alert_lifecycle import mark_alert_read
from jeevanpath.services.contact_service import add_contact, count_active_contacts, list_contacts
from jeevanpath.services.provider_directory import find_provider, find_provider_by_phone, list_provider_alerts
from jeevanpath.services.user_service import assign_provider, create_or_get_user, update_user
from jeevanpath.utils.errors import InvalidReferenceError, NotFoundError


def sos(requester_id="user-asha", emergency_type="medical"):
    return EmergencyEvent(requester_id=requester_id, emergency_type=emergency_type, lat=BASE_LAT, lng=BASE_LNG)


class TestProviderLookup:
    def test_by_phone(self, db, make_resource, make_provider):
        provider = make_provider(make_resource(), phone="9876543210")
        assert find_provider_by_phone(db, "9876543210").id == provider.id

    def test_regular_user_is_not_a_provider(self, db, make_provider):
        make_provider(None, phone="9876543210", is_service_provider=False)
        assert find_provider_by_phone(db, "9876543210") is None

    def test_falls_back_to_external_uid(self, db, make_resource, make_provider):
        provider = make_provider(make_resource())
        assert find_provider(db, provider.external_uid).id == provider.id


class TestProviderInbox:
    @pytest.mark.asyncio
    async def test_newest_first_with_unread_count(self, db, make_resource, make_provider):
        provider = make_provider(make_resource("City Clinic", km=2.0), phone="9876543210")
        first = (await dispatch(db, sos("user-1"), 15000))[0]
        await dispatch(db, sos("user-2", "accident"), 15000)
        await mark_alert_read(db, first.id)

        alerts, unread = list_provider_alerts(db, "9876543210")

        assert [a.emergency_user_id for a in alerts] == ["user-2", "user-1"]
        assert unread == 1
        assert all(a.service_provider_user_id == provider.id for a in alerts)

    @pytest.mark.asyncio
    async def test_status_filter(self, db, make_resource, make_provider):
        provider = make_provider(make_resource("City Clinic", km=2.0))
        first = (await dispatch(db, sos("user-1"), 15000))[0]
        await dispatch(db, sos("user-2"), 15000)
        await mark_alert_read(db, first.id)

        viewed, unread = list_provider_alerts(db, provider.external_uid, status="viewed")
        everything, _ = list_provider_alerts(db, provider.external_uid, status="all")

        assert [a.id for a in viewed] == [first.id]
        assert unread == 1
        assert len(everything) == 2

    @pytest.mark.asyncio
    async def test_limit(self, db, make_resource, make_provider):
        provider = make_provider(make_resource("City Clinic", km=2.0))
        for i in range(3):
            await dispatch(db, sos(f"user-{i}"), 15000)

        alerts, unread = list_provider_alerts(db, provider.external_uid, limit=2)

        assert len(alerts) == 2
        assert unread == 3

    def test_unknown_provider_gets_empty_inbox(self, db):
        assert list_provider_alerts(db, "0000000000") == ([], 0)


class TestContacts:
    def test_single_primary(self, db):
        first = add_contact(db, "user-asha", "Ravi", "9811100001", is_primary=True)
        second = add_contact(db, "user-asha", "Meena", "9811100002", relationship="friend", is_primary=True)

        contacts = list_contacts(db, "user-asha")

        assert [c.id for c in contacts] == [second.id, first.id]
        assert [c.is_primary for c in contacts] == [True, False]

    def test_fields_trimmed(self, db):
        contact = add_contact(db, "user-asha", "  Ravi  ", " 9811100001 ")
        assert (contact.name, contact.phone) == ("Ravi", "9811100001")

    def test_count_only_active(self, db):
        add_contact(db, "user-asha", "Ravi", "9811100001")
        gone = add_contact(db, "user-asha", "Old Friend", "9811100003")
        gone.is_active = False
        db.commit()

        assert count_active_contacts(db, "user-asha") == 1
        assert [c.name for c in list_contacts(db, "user-asha")] == ["Ravi"]


class TestUsers:
    def test_create_is_idempotent(self, db):
        user, created = create_or_get_user(db, "user-asha", name="Asha")
        again, created_again = create_or_get_user(db, "user-asha", name="Someone Else")

        assert created is True and created_again is False
        assert again.id == user.id
        assert again.name == "Asha"

    def test_assign_provider(self, db, make_resource):
        clinic = make_resource("City Clinic")
        create_or_get_user(db, "staff-1", name="Dr. Mehta", phone="9876543210")

        user = assign_provider(db, "staff-1", clinic.id)

        assert user.is_service_provider is True
        assert user.assigned_resource_id == clinic.id
        assert user.role == "provider"

    def test_assign_to_missing_resource_rejected(self, db):
        create_or_get_user(db, "staff-1")
        with pytest.raises(InvalidReferenceError):
            assign_provider(db, "staff-1", 999)

    def test_assign_unknown_user(self, db, make_resource):
        clinic = make_resource()
        with pytest.raises(NotFoundError):
            assign_provider(db, "ghost", clinic.id)

    def test_update_profile(self, db):
        create_or_get_user(db, "user-asha", name="Asha", language="en")

        user = update_user(db, "user-asha", {"name": "Asha Verma", "language": "hi",
                                             "emergency_notifications_enabled": False})

        assert (user.name, user.language) == ("Asha Verma", "hi")
        assert user.emergency_notifications_enabled is False

    def test_update_with_no_changes(self, db):
        created, _ = create_or_get_user(db, "user-asha", name="Asha")
        assert update_user(db, "user-asha", {}).name == "Asha"

    def test_update_unknown_user(self, db):
        with pytest.raises(NotFoundError, match="User ghost not found"):
            update_user(db, "ghost", {"name": "Nobody"})
