# jeevanpath/schemas/contact_form.py
from pydantic import Field, field_validator
from datetime import datetime
from typing import Optional, Literal
from jeevanpath.schemas.common import CamelModel, LatLng

PHONE_PATTERN = r"^[+]?[(]?[0-9]{1,4}[)]?[-\s.]?[(]?[0-9]{1,4}[)]?[-\s.]?[0-9]{1,9}$"
HHMM = r"^\d{2}:\d{2}$"

Weekday = Literal["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


class ContactFormCreate(CamelModel):
    user_name: str = Field(..., min_length=2, max_length=100)
    phone_number: str = Field(..., pattern=PHONE_PATTERN)
    email: Optional[str] = Field(None, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    address: str = Field(..., min_length=1)
    license_number: Optional[str] = None
    license_type: Literal["medical", "pharmacy", "clinic", "other"] = "medical"
    resource_type: Literal["clinic", "pharmacy", "blood_bank", "other"]
    resource_name: str = Field(..., min_length=1, max_length=200)
    resource_address: str = Field(..., min_length=1)
    location: LatLng
    contact_number: str = Field(..., min_length=1)
    alternate_contact: Optional[str] = None
    website_url: Optional[str] = None
    open_time: Optional[str] = Field(None, pattern=HHMM)
    close_time: Optional[str] = Field(None, pattern=HHMM)
    operating_days: list[Weekday] = []
    is_24_hours: bool = False
    services: list[str] = []
    languages: list[str] = []
    wheelchair_accessible: bool = False
    parking_available: bool = False
    description: Optional[str] = Field(None, max_length=1000)
    message: Optional[str] = Field(None, max_length=500)

    @field_validator("user_name", "phone_number", "email", "address", "license_number",
                     "resource_name", "resource_address", "contact_number", mode="before")
    @classmethod
    def strip(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email")
    @classmethod
    def lower_email(cls, v):
        return v.lower() if v else v

    @field_validator("license_number")
    @classmethod
    def upper_license(cls, v):
        return v.upper() if v else v

    @field_validator("operating_days", "services", "languages", mode="before")
    @classmethod
    def single_value_as_list(cls, v):
        # The web form posts a lone checkbox value as a plain string
        if v is None:
            return []
        return [v] if isinstance(v, str) else v


class ContactFormReject(CamelModel):
    reason: Optional[str] = Field(None, max_length=500)


class ContactFormOut(CamelModel):
    id: int
    user_name: str
    phone_number: str
    email: Optional[str]
    address: str
    license_number: Optional[str]
    license_type: str
    resource_type: str
    resource_name: str
    resource_address: str
    location: dict
    contact_number: str
    alternate_contact: Optional[str]
    website_url: Optional[str]
    open_time: Optional[str]
    close_time: Optional[str]
    operating_days: Optional[list[str]]
    is_24_hours: bool
    services: Optional[list[str]]
    languages: Optional[list[str]]
    wheelchair_accessible: bool
    parking_available: bool
    description: Optional[str]
    message: Optional[str]
    status: str
    is_verified: bool
    email_verified: bool
    phone_verified: bool
    rejection_reason: Optional[str]
    resource_id: Optional[int]
    submitted_at: datetime
    approved_at: Optional[datetime]
    rejected_at: Optional[datetime]


class Pagination(CamelModel):
    total: int
    page: int
    limit: int
    pages: int
