# jeevanpath/models/emergency_service.py
"""
Emergency service registry — one row per requesting user.
Holds whether emergencies are enabled, the search radius and the last known location.
"""

from sqlalchemy import Column, Integer, String, DateTime, Boolean, JSON
from jeevanpath.database import Base
from jeevanpath.models.geo_point import GeoPointMixin

EMERGENCY_TYPES = ("medical", "accident", "blood", "pharmacy")


class EmergencyService(GeoPointMixin, Base):
    __tablename__ = "emergency_services"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(128), unique=True, nullable=False, index=True)
    is_enabled = Column(Boolean, default=False, nullable=False)
    max_distance_km = Column(Integer, default=10, nullable=False)
    emergency_types = Column(JSON, nullable=False)
    notify_push = Column(Boolean, default=True, nullable=False)
    notify_sms = Column(Boolean, default=False, nullable=False)
    notify_email = Column(Boolean, default=False, nullable=False)
    last_location_update = Column(DateTime)
    created_at = Column(DateTime)
    updated_at = Column(DateTime)

    @property
    def max_distance(self) -> int:
        return self.max_distance_km

    def __repr__(self):
        return f"<EmergencyService user={self.user_id} enabled={self.is_enabled} radius={self.max_distance_km}km>"
