# jeevanpath/schemas/user_emergency_alert.py
from datetime import datetime
from typing import Optional
from jeevanpath.schemas.common import CamelModel, LatLng
from jeevanpath.schemas.emergency_alert import EmergencyDetails


class EmergencyUserInfo(CamelModel):
    name: Optional[str]
    phone: Optional[str]
    location: LatLng


class ResourceInfo(CamelModel):
    resource_id: int
    resource_name: str
    distance: float          # km


class ProviderResponse(CamelModel):
    viewed_at: Optional[datetime]
    acknowledged_at: Optional[datetime]
    estimated_arrival: Optional[datetime]
    response_message: Optional[str]
    can_respond: bool


class UserEmergencyAlertOut(CamelModel):
    id: int
    emergency_user_id: str
    service_provider_user_id: int
    emergency_type: str
    urgency_level: str
    priority: str
    emergency_user_info: EmergencyUserInfo
    resource_info: ResourceInfo
    emergency_details: Optional[EmergencyDetails] = None
    message: str
    status: str
    is_read: bool
    is_delivered: bool
    provider_response: ProviderResponse
    sent_at: datetime
    expires_at: datetime
    created_at: datetime


class AlertRespondRequest(CamelModel):
    can_respond: bool
    estimated_arrival: Optional[datetime] = None
    response_message: Optional[str] = None


class UserAlertsOut(CamelModel):
    alerts: list[UserEmergencyAlertOut]
    unread_count: int
    total_count: int
