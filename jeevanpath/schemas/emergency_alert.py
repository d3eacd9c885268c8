# jeevanpath/schemas/emergency_alert.py
from pydantic import Field
from typing import Optional, Literal
from jeevanpath.schemas.common import CamelModel, LatLng
from jeevanpath.schemas.emergency_service import EmergencyType


BloodType = Literal["A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-"]


class EmergencyDetails(CamelModel):
    """Optional medical context the requester shares with responding providers."""
    symptoms: Optional[str] = Field(None, max_length=1000)
    blood_type: Optional[BloodType] = None
    medications: list[str] = []
    allergies: list[str] = []
    medical_history: Optional[str] = Field(None, max_length=2000)


class EmergencyAlertRequest(CamelModel):
    user_id: str = Field(..., min_length=1)
    emergency_type: EmergencyType
    location: LatLng
    message: Optional[str] = None
    emergency_details: Optional[EmergencyDetails] = None


class ProviderContacted(CamelModel):
    provider_user_id: str
    name: Optional[str]
    resource_name: str
    distance: float


class EmergencyAlertResult(CamelModel):
    alert_id: int
    nearby_resources_count: int
    contacts_notified: int
    providers_notified: int
    providers_contacted: list[ProviderContacted]
    message: str
