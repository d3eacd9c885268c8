# jeevanpath/services/emergency_alert_service.py
"""
"Trigger emergency" flow — what happens when a user presses the SOS button.

  1. Registry: make sure the user has an enabled emergency service.
  2. Requester feed: one "emergency raised" entry plus up to
     RESOURCE_NOTIFICATION_LIMIT "resource found" entries for the nearest facilities.
  3. Providers: dispatch at PRIMARY_RADIUS_METERS; when fewer than
     MIN_PROVIDERS_NOTIFIED were alerted, dispatch again at ESCALATION_RADIUS_METERS.

The escalation pass skips providers the first pass already alerted unless
ESCALATION_SKIPS_ALERTED_PROVIDERS is off, in which case a provider found by
both passes gets two alerts. Finding nobody is still a successful response.
"""

from sqlalchemy.orm import Session
from typing import Optional
from jeevanpath.config import settings
from jeevanpath.models.user import User
from jeevanpath.services.alert_dispatcher import EmergencyEvent, dispatch, DEFAULT_EMERGENCY_MESSAGE
from jeevanpath.services.contact_service import count_active_contacts
from jeevanpath.services.emergency_registry import get_or_create_for_alert
from jeevanpath.services.notification_service import (
    create_notification, EMERGENCY_ALERT_TTL, RESOURCE_FOUND_TTL,
)
from jeevanpath.services.resource_index import find_nearby_resources
from jeevanpath.utils.logger import get_dispatch_logger

logger = get_dispatch_logger("trigger")


async def dispatch_with_escalation(db: Session, event: EmergencyEvent) -> list:
    alerts = await dispatch(db, event, settings.PRIMARY_RADIUS_METERS)

    if len(alerts) < settings.MIN_PROVIDERS_NOTIFIED:
        logger.warning(f"⚠️ Only {len(alerts)} providers notified, expanding search to "
                       f"{settings.ESCALATION_RADIUS_METERS / 1000:g}km")
        already_alerted = None
        if settings.ESCALATION_SKIPS_ALERTED_PROVIDERS:
            already_alerted = {a.service_provider_user_id for a in alerts}
        alerts.extend(await dispatch(db, event, settings.ESCALATION_RADIUS_METERS,
                                     exclude_provider_ids=already_alerted))

    return alerts


async def trigger_emergency_alert(db: Session, user_id: str, emergency_type: str, lat: float, lng: float,
                                  message: Optional[str] = None, address: Optional[str] = None,
                                  emergency_details: Optional[dict] = None) -> dict:
    service = await get_or_create_for_alert(db, user_id, lat, lng)
    logger.info(f"📍 Emergency ({emergency_type}) from {user_id} at {lat}, {lng}")

    nearby = find_nearby_resources(db, lat, lng, service.max_distance_km * 1000, settings.NEARBY_RESOURCE_LIMIT)
    logger.info(f"🏥 {len(nearby)} nearby resources within {service.max_distance_km}km")

    contacts = count_active_contacts(db, user_id)
    logger.info(f"📞 {contacts} emergency contacts on file for {user_id}")

    emergency_notification = await create_notification(
        db, user_id, "emergency_alert",
        title=f"🚨 Emergency Alert - {emergency_type}",
        message=message or f"Emergency assistance needed. {len(nearby)} nearby resources found.",
        data={"emergencyType": emergency_type, "location": {"lat": lat, "lng": lng},
              "resourceCount": len(nearby)},
        priority="critical",
        ttl=EMERGENCY_ALERT_TTL,
    )

    for resource, d in nearby[:settings.RESOURCE_NOTIFICATION_LIMIT]:
        distance = round(d, 1)
        await create_notification(
            db, user_id, "resource_found",
            title=f"🏥 Nearby {resource.category}: {resource.name}",
            message=f"{resource.name} is {distance}km away. Contact: {resource.contact or 'n/a'}",
            data={"emergencyType": emergency_type, "resourceId": resource.id, "resourceName": resource.name,
                  "distance": distance,
                  "location": {"lat": resource.latitude, "lng": resource.longitude}},
            priority="high",
            ttl=RESOURCE_FOUND_TTL,
        )

    requester = db.query(User).filter(User.external_uid == user_id).first()
    event = EmergencyEvent(
        requester_id=user_id,
        emergency_type=emergency_type,
        lat=lat,
        lng=lng,
        message=message or DEFAULT_EMERGENCY_MESSAGE,
        urgency_level="critical",
        requester_name=requester.name if requester else None,
        requester_phone=requester.phone if requester else None,
        address=address,
        details=emergency_details,
    )
    alerts = await dispatch_with_escalation(db, event)

    providers_contacted = [
        {
            "provider_user_id": alert.service_provider.external_uid,
            "name": alert.service_provider.name,
            "resource_name": alert.resource_name,
            "distance": alert.resource_distance_km,
        }
        for alert in alerts
    ]

    return {
        "alert_id": emergency_notification.id,
        "nearby_resources_count": len(nearby),
        "contacts_notified": contacts,
        "providers_notified": len(alerts),
        "providers_contacted": providers_contacted,
        "message": f"Emergency calls initiated to {len(alerts)} service providers",
    }
