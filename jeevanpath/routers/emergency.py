# jeevanpath/routers/emergency.py
"""
Emergency endpoints — registry toggle, SOS trigger, provider inbox + responses,
personal contacts and the requester notification feed.
All responses are wrapped as {"success": true, "data": ...}.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional
from jeevanpath.database import get_db
from jeevanpath.schemas.emergency_alert import EmergencyAlertRequest, EmergencyAlertResult
from jeevanpath.schemas.emergency_contact import EmergencyContactCreate, EmergencyContactOut
from jeevanpath.schemas.emergency_notification import EmergencyNotificationOut
from jeevanpath.schemas.emergency_service import EmergencyToggleRequest, EmergencyServiceOut
from jeevanpath.schemas.user_emergency_alert import AlertRespondRequest, UserAlertsOut, UserEmergencyAlertOut
from jeevanpath.services import alert_lifecycle, contact_service, notification_service, provider_directory
from jeevanpath.services.emergency_alert_service import trigger_emergency_alert
from jeevanpath.services.emergency_registry import toggle_emergency_service
from jeevanpath.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.post("/emergency/toggle", summary="Enable/disable a user's emergency service")
async def toggle(body: EmergencyToggleRequest, db: Session = Depends(get_db)):
    service = await toggle_emergency_service(
        db, body.user_id, body.location.lat, body.location.lng,
        is_enabled=body.is_enabled,
        max_distance_km=body.max_distance,
        emergency_types=body.emergency_types,
    )
    return {"success": True, "data": EmergencyServiceOut.model_validate(service)}


@router.post("/emergency/alert", summary="Trigger an emergency — alerts nearby providers")
async def trigger_alert(body: EmergencyAlertRequest, db: Session = Depends(get_db)):
    """
    Always succeeds once the request is valid, even when no provider could be found;
    `providersNotified` tells the caller how many were reached.
    """
    result = await trigger_emergency_alert(
        db, body.user_id, body.emergency_type, body.location.lat, body.location.lng,
        message=body.message, address=body.location.address,
        emergency_details=body.emergency_details.model_dump() if body.emergency_details else None,
    )
    return {"success": True, "data": EmergencyAlertResult(**result)}


@router.get("/emergency/check-provider/{phone}", summary="Is this phone a service provider?")
def check_provider(phone: str, db: Session = Depends(get_db)):
    provider = provider_directory.find_provider_by_phone(db, phone)
    if not provider:
        return {"success": True, "isServiceProvider": False}
    return {
        "success": True,
        "isServiceProvider": True,
        "data": {"name": provider.name, "role": provider.role,
                 "assignedResourceId": provider.assigned_resource_id},
    }


@router.get("/emergency/user-alerts/{user_id}", summary="Provider inbox — by phone or external uid")
def get_user_alerts(user_id: str, status: Optional[str] = None, limit: int = Query(20, ge=1, le=100),
                    db: Session = Depends(get_db)):
    alerts, unread = provider_directory.list_provider_alerts(db, user_id, status=status, limit=limit)
    data = UserAlertsOut(
        alerts=[UserEmergencyAlertOut.model_validate(a) for a in alerts],
        unread_count=unread,
        total_count=len(alerts),
    )
    return {"success": True, "data": data}


@router.put("/emergency/user-alerts/{alert_id}/read", summary="Provider viewed an alert")
async def mark_alert_read(alert_id: int, db: Session = Depends(get_db)):
    alert = await alert_lifecycle.mark_alert_read(db, alert_id)
    return {"success": True, "data": UserEmergencyAlertOut.model_validate(alert)}


@router.put("/emergency/user-alerts/{alert_id}/respond", summary="Provider accepts or declines")
async def respond_to_alert(alert_id: int, body: AlertRespondRequest, db: Session = Depends(get_db)):
    alert = await alert_lifecycle.respond_to_alert(
        db, alert_id, body.can_respond,
        estimated_arrival=body.estimated_arrival,
        response_message=body.response_message,
    )
    return {"success": True, "data": UserEmergencyAlertOut.model_validate(alert)}


@router.post("/emergency/contacts", summary="Add a personal emergency contact")
def add_contact(body: EmergencyContactCreate, db: Session = Depends(get_db)):
    contact = contact_service.add_contact(
        db, body.user_id, body.name, body.phone, email=body.email,
        relationship=body.relationship, is_primary=body.is_primary,
    )
    return {"success": True, "data": EmergencyContactOut.model_validate(contact)}


@router.get("/emergency/contacts/{user_id}", summary="List a user's emergency contacts")
def get_contacts(user_id: str, db: Session = Depends(get_db)):
    contacts = contact_service.list_contacts(db, user_id)
    return {"success": True, "data": [EmergencyContactOut.model_validate(c) for c in contacts]}


@router.get("/emergency/notifications/{user_id}", summary="Requester notification feed")
def get_notifications(user_id: str, limit: int = Query(10, ge=1, le=100), db: Session = Depends(get_db)):
    notifications = notification_service.list_notifications(db, user_id, limit=limit)
    return {"success": True, "data": [EmergencyNotificationOut.model_validate(n) for n in notifications]}


@router.put("/emergency/notifications/{notification_id}/read", summary="Mark a notification read")
def mark_notification_read(notification_id: int, db: Session = Depends(get_db)):
    notification = notification_service.mark_notification_read(db, notification_id)
    return {"success": True, "data": EmergencyNotificationOut.model_validate(notification)}
