# jeevanpath/schemas/emergency_notification.py
from datetime import datetime
from typing import Optional
from jeevanpath.schemas.common import CamelModel


class EmergencyNotificationOut(CamelModel):
    id: int
    user_id: str
    type: str
    title: str
    message: str
    data: Optional[dict]
    is_read: bool
    priority: str
    expires_at: Optional[datetime]
    created_at: datetime
