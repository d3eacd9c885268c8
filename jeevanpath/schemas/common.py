# jeevanpath/schemas/common.py
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import Optional


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire (what the mobile app sends and reads)."""

    class Config:
        from_attributes = True
        populate_by_name = True
        alias_generator = to_camel


class LatLng(CamelModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    address: Optional[str] = None
