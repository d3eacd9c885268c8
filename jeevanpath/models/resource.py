# jeevanpath/models/resource.py
"""
Healthcare resources table — clinics, pharmacies and blood banks.
Searched by the resource index; service-provider users point at one row here.
"""

from sqlalchemy import Column, Integer, String, DateTime, Float, Boolean, JSON
from jeevanpath.database import Base
from jeevanpath.models.geo_point import GeoPointMixin

RESOURCE_CATEGORIES = ("clinic", "pharmacy", "blood_bank", "other")


class Resource(GeoPointMixin, Base):
    __tablename__ = "resources"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    category = Column(String(20), nullable=False, index=True)   # clinic | pharmacy | blood_bank | other
    address = Column(String(500))
    contact = Column(String(50))
    open_time = Column(String(5))                                # HH:MM
    close_time = Column(String(5))
    is_24_hours = Column(Boolean, default=False, nullable=False)
    rating = Column(Float, default=0, nullable=False)
    services = Column(JSON, default=list)
    languages = Column(JSON, default=list)
    wheelchair_accessible = Column(Boolean, default=False, nullable=False)
    is_verified = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime)

    def __repr__(self):
        return f"<Resource {self.id} {self.name!r} category={self.category}>"
