# jeevanpath/models/emergency_contact.py
"""Personal emergency contacts of a user. At most one primary contact per user."""

from sqlalchemy import Column, Integer, String, DateTime, Boolean
from jeevanpath.database import Base

CONTACT_RELATIONSHIPS = ("family", "friend", "doctor", "caregiver", "other")


class EmergencyContact(Base):
    __tablename__ = "emergency_contacts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(128), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    phone = Column(String(50), nullable=False)
    email = Column(String(200))
    relationship = Column(String(20), default="family", nullable=False)
    is_primary = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime)

    def __repr__(self):
        return f"<EmergencyContact {self.id} user={self.user_id} primary={self.is_primary}>"
