# tests/conftest.py
"""
Shared fixtures: an in-memory SQLite database per test and small factories
for resources and provider users.

Environment is set before anything from jeevanpath is imported, so the
module-level settings pick up the test values.
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["API_KEY"] = ""
os.environ["SIMULATED_CALL_DELAY_SECONDS"] = "0"
os.environ["SIMULATED_SMS_DELAY_SECONDS"] = "0"

import itertools
import math
import pytest
from datetime import datetime
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from jeevanpath.database import Base
from jeevanpath.models.user import User
from jeevanpath.services.resource_index import create_resource
from jeevanpath.utils.geo import EARTH_RADIUS_KM
import jeevanpath.models  # noqa

# Requester position used throughout (Connaught Place, New Delhi)
BASE_LAT = 28.6315
BASE_LNG = 77.2167

# Moving due north, Haversine distance is exactly R * Δlat in radians
KM_PER_DEGREE = EARTH_RADIUS_KM * math.pi / 180


def north_of_base(km: float) -> tuple[float, float]:
    return BASE_LAT + km / KM_PER_DEGREE, BASE_LNG


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def make_resource(db):
    """make_resource(name, km) → resource `km` kilometres due north of the requester."""
    def _make(name="City Clinic", km=1.0, category="clinic", **fields):
        lat, lng = north_of_base(km)
        return create_resource(db, name, category, lat, lng, **fields)
    return _make


@pytest.fixture
def make_provider(db):
    counter = itertools.count(1)

    def _make(resource=None, name=None, phone=None, is_service_provider=True, notifications=True):
        n = next(counter)
        user = User(
            external_uid=f"provider-{n:03d}",
            name=name or f"Provider {n}",
            phone=phone or f"90000{n:05d}",
            role="provider",
            is_active=True,
            is_service_provider=is_service_provider,
            assigned_resource_id=resource.id if resource else None,
            emergency_notifications_enabled=notifications,
            created_at=datetime.utcnow(),
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make
