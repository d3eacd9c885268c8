# jeevanpath/schemas/emergency_contact.py
from pydantic import Field
from datetime import datetime
from typing import Optional, Literal
from jeevanpath.schemas.common import CamelModel


class EmergencyContactCreate(CamelModel):
    user_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    email: Optional[str] = Field(None, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    relationship: Literal["family", "friend", "doctor", "caregiver", "other"] = "family"
    is_primary: bool = False


class EmergencyContactOut(CamelModel):
    id: int
    user_id: str
    name: str
    phone: str
    email: Optional[str]
    relationship: str
    is_primary: bool
    is_active: bool
    created_at: datetime
