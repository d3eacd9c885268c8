# jeevanpath/models/contact_form.py
"""
Resource submissions from the public "add a facility" form.
Moderation: pending → approved (a Resource row is created) | rejected.
"""

from sqlalchemy import Column, Integer, String, DateTime, Boolean, Text, JSON, ForeignKey
from jeevanpath.database import Base
from jeevanpath.models.geo_point import GeoPointMixin

FORM_STATUSES = ("pending", "approved", "rejected")
LICENSE_TYPES = ("medical", "pharmacy", "clinic", "other")
OPERATING_DAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


class ContactForm(GeoPointMixin, Base):
    __tablename__ = "contact_forms"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Submitter
    user_name = Column(String(100), nullable=False)
    phone_number = Column(String(30), nullable=False, index=True)
    email = Column(String(200))
    address = Column(String(500), nullable=False)
    license_number = Column(String(100))
    license_type = Column(String(20), default="medical", nullable=False)

    # Proposed resource
    resource_type = Column(String(20), nullable=False, index=True)
    resource_name = Column(String(200), nullable=False)
    resource_address = Column(String(500), nullable=False)
    contact_number = Column(String(50), nullable=False)
    alternate_contact = Column(String(50))
    website_url = Column(String(300))
    open_time = Column(String(5))
    close_time = Column(String(5))
    operating_days = Column(JSON, default=list)
    is_24_hours = Column(Boolean, default=False, nullable=False)
    services = Column(JSON, default=list)
    languages = Column(JSON, default=list)
    wheelchair_accessible = Column(Boolean, default=False, nullable=False)
    parking_available = Column(Boolean, default=False, nullable=False)
    description = Column(Text)
    message = Column(Text)

    # Moderation
    status = Column(String(20), default="pending", nullable=False, index=True)
    is_verified = Column(Boolean, default=False, nullable=False)
    email_verified = Column(Boolean, default=False, nullable=False)
    phone_verified = Column(Boolean, default=False, nullable=False)
    rejection_reason = Column(String(500))
    resource_id = Column(Integer, ForeignKey("resources.id"), nullable=True)
    submitted_at = Column(DateTime, nullable=False, index=True)
    approved_at = Column(DateTime)
    rejected_at = Column(DateTime)
    updated_at = Column(DateTime)

    def __repr__(self):
        return f"<ContactForm {self.id} {self.resource_name!r} status={self.status}>"
