# jeevanpath/models/emergency_notification.py
"""
Requester-facing feed: "emergency raised", "resource found", "provider is coming".
Distinct from provider alerts. Rows expire after 12h–7d depending on type.
"""

from sqlalchemy import Column, Integer, String, DateTime, Boolean, Text, JSON
from jeevanpath.database import Base

NOTIFICATION_TYPES = ("emergency_alert", "resource_found", "contact_notified")


class EmergencyNotification(Base):
    __tablename__ = "emergency_notifications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(128), nullable=False, index=True)
    type = Column(String(30), nullable=False)
    title = Column(String(300), nullable=False)
    message = Column(Text, nullable=False)
    data = Column(JSON, default=dict)
    is_read = Column(Boolean, default=False, nullable=False)
    priority = Column(String(20), default="medium", nullable=False)
    expires_at = Column(DateTime, index=True)
    created_at = Column(DateTime, nullable=False, index=True)

    def __repr__(self):
        return f"<EmergencyNotification {self.id} user={self.user_id} type={self.type}>"
