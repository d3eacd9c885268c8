# jeevanpath/models/user_emergency_alert.py
"""
One row per (emergency, alerted provider).
Created by the alert dispatcher, mutated by the provider's read/respond actions,
purged by the expiry sweeper once expires_at has passed.

Status flow: sent → viewed → acknowledged | declined.
"responding" and "completed" are valid values but no operation sets them yet.
"""

from sqlalchemy import Column, Integer, String, DateTime, Boolean, Float, Text, ForeignKey, JSON
from sqlalchemy.orm import relationship
from jeevanpath.database import Base

ALERT_STATUSES = ("sent", "viewed", "acknowledged", "responding", "completed", "declined")
URGENCY_LEVELS = ("low", "medium", "high", "critical")


class UserEmergencyAlert(Base):
    __tablename__ = "user_emergency_alerts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    emergency_user_id = Column(String(128), nullable=False, index=True)
    service_provider_user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    emergency_type = Column(String(20), nullable=False)
    urgency_level = Column(String(20), default="high", nullable=False)
    priority = Column(String(20), default="high", nullable=False)

    # Requester snapshot at alert time
    emergency_user_name = Column(String(200))
    emergency_user_phone = Column(String(50))
    emergency_lat = Column(Float, nullable=False)
    emergency_lng = Column(Float, nullable=False)
    emergency_address = Column(String(500))

    # Matched resource snapshot
    resource_id = Column(Integer, nullable=False)
    resource_name = Column(String(200), nullable=False)
    resource_distance_km = Column(Float, nullable=False)

    # Medical context shared by the requester (symptoms, blood type, medications, ...)
    emergency_details = Column(JSON)

    message = Column(Text, nullable=False)
    status = Column(String(20), default="sent", nullable=False, index=True)
    is_read = Column(Boolean, default=False, nullable=False, index=True)
    is_delivered = Column(Boolean, default=False, nullable=False)

    # Provider response
    viewed_at = Column(DateTime)
    acknowledged_at = Column(DateTime)
    estimated_arrival = Column(DateTime)
    response_message = Column(Text)
    can_respond = Column(Boolean, default=False, nullable=False)

    sent_at = Column(DateTime, nullable=False)
    expires_at = Column(DateTime, nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, index=True)
    updated_at = Column(DateTime)

    service_provider = relationship("User")

    @property
    def emergency_user_info(self) -> dict:
        return {
            "name": self.emergency_user_name,
            "phone": self.emergency_user_phone,
            "location": {"lat": self.emergency_lat, "lng": self.emergency_lng,
                         "address": self.emergency_address},
        }

    @property
    def resource_info(self) -> dict:
        return {"resource_id": self.resource_id, "resource_name": self.resource_name,
                "distance": self.resource_distance_km}

    @property
    def provider_response(self) -> dict:
        return {
            "viewed_at": self.viewed_at,
            "acknowledged_at": self.acknowledged_at,
            "estimated_arrival": self.estimated_arrival,
            "response_message": self.response_message,
            "can_respond": self.can_respond,
        }

    def __repr__(self):
        return f"<UserEmergencyAlert {self.id} provider={self.service_provider_user_id} status={self.status}>"
