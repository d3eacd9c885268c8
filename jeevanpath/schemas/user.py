# jeevanpath/schemas/user.py
from pydantic import Field
from datetime import datetime
from typing import Optional
from jeevanpath.schemas.common import CamelModel


class UserCreate(CamelModel):
    external_uid: str = Field(..., min_length=1)
    name: Optional[str] = None
    phone: Optional[str] = None
    language: str = "en"


class ProviderAssignment(CamelModel):
    resource_id: int
    role: str = "provider"
    emergency_notifications_enabled: bool = True


class UserOut(CamelModel):
    id: int
    external_uid: str
    name: Optional[str]
    phone: Optional[str]
    language: Optional[str]
    role: str
    is_active: bool
    is_service_provider: bool
    assigned_resource_id: Optional[int]
    emergency_notifications_enabled: bool
    created_at: Optional[datetime]


class UserUpdate(CamelModel):
    """Profile fields a user may change. Provider fields go through the assignment endpoint."""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    phone: Optional[str] = Field(None, min_length=1, max_length=50)
    language: Optional[str] = Field(None, min_length=2, max_length=10)
    emergency_notifications_enabled: Optional[bool] = None
    is_active: Optional[bool] = None
