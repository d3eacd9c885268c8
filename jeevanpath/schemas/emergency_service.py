# jeevanpath/schemas/emergency_service.py
from pydantic import Field
from datetime import datetime
from typing import Optional, Literal
from jeevanpath.schemas.common import CamelModel, LatLng

EmergencyType = Literal["medical", "accident", "blood", "pharmacy"]


class EmergencyToggleRequest(CamelModel):
    user_id: str = Field(..., min_length=1)
    location: LatLng
    is_enabled: bool = True
    max_distance: Optional[int] = Field(None, ge=1, le=100)   # km
    emergency_types: Optional[list[EmergencyType]] = None


class EmergencyServiceOut(CamelModel):
    id: int
    user_id: str
    is_enabled: bool
    max_distance: int
    location: dict
    emergency_types: list[str]
    notify_push: bool
    notify_sms: bool
    notify_email: bool
    last_location_update: Optional[datetime]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]
