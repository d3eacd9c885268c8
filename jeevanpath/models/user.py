# jeevanpath/models/user.py
"""
App users. A service-provider user is staff of exactly one resource
(assigned_resource_id) and receives emergency alerts for it.
"""

from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from jeevanpath.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    external_uid = Column(String(128), unique=True, nullable=False, index=True)
    name = Column(String(200))
    phone = Column(String(50), index=True)
    language = Column(String(10), default="en")
    role = Column(String(50), default="user", nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    is_service_provider = Column(Boolean, default=False, nullable=False)
    assigned_resource_id = Column(Integer, ForeignKey("resources.id"), nullable=True, index=True)
    emergency_notifications_enabled = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime)

    assigned_resource = relationship("Resource")

    def __repr__(self):
        return f"<User {self.external_uid} provider={self.is_service_provider}>"
