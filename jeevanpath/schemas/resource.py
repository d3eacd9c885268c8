# jeevanpath/schemas/resource.py
from pydantic import Field
from datetime import datetime
from typing import Optional, Literal
from jeevanpath.schemas.common import CamelModel, LatLng


class ResourceCreate(CamelModel):
    name: str = Field(..., min_length=1)
    category: Literal["clinic", "pharmacy", "blood_bank", "other"]
    location: LatLng
    address: Optional[str] = None
    contact: Optional[str] = None
    open_time: Optional[str] = Field(None, pattern=r"^\d{2}:\d{2}$")
    close_time: Optional[str] = Field(None, pattern=r"^\d{2}:\d{2}$")
    is_24_hours: bool = False
    rating: float = Field(0, ge=0, le=5)
    services: list[str] = []
    languages: list[str] = []
    wheelchair_accessible: bool = False
    is_verified: bool = False


class ResourceOut(CamelModel):
    id: int
    name: str
    category: str
    address: Optional[str]
    contact: Optional[str]
    location: dict            # GeoJSON point, coordinates = [lng, lat]
    open_time: Optional[str]
    close_time: Optional[str]
    is_24_hours: bool
    rating: float
    services: Optional[list[str]]
    languages: Optional[list[str]] = None
    wheelchair_accessible: bool
    is_verified: bool
    created_at: Optional[datetime]
    distance_from_user: Optional[float] = None
