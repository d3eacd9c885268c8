# jeevanpath/services/alert_lifecycle.py
"""
Provider-side alert state changes.

  sent → viewed                       mark_alert_read() (later states are kept)
  sent | viewed → acknowledged        respond_to_alert(can_respond=True)
  sent | viewed → declined            respond_to_alert(can_respond=False)

Every response is echoed to the requester's notification feed.
Responding again after acknowledged/declined is not blocked.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session
from jeevanpath.models.user_emergency_alert import UserEmergencyAlert
from jeevanpath.services.notification_service import create_notification, PROVIDER_RESPONSE_TTL
from jeevanpath.utils.errors import NotFoundError
from jeevanpath.utils.logger import get_dispatch_logger

logger = get_dispatch_logger("lifecycle")

HELP_COMING_TITLE = "✅ Help is Coming!"
CANNOT_RESPOND_TITLE = "❌ Provider Cannot Respond"


def get_alert(db: Session, alert_id: int) -> UserEmergencyAlert:
    alert = db.query(UserEmergencyAlert).filter(UserEmergencyAlert.id == alert_id).first()
    if not alert:
        raise NotFoundError("Alert not found")
    return alert


async def mark_alert_read(db: Session, alert_id: int) -> UserEmergencyAlert:
    alert = get_alert(db, alert_id)
    now = datetime.utcnow()
    alert.is_read = True
    # Status only moves forward; reading an answered alert keeps its answer
    if alert.status == "sent":
        alert.status = "viewed"
    if alert.viewed_at is None:
        alert.viewed_at = now
    alert.updated_at = now
    db.commit()
    db.refresh(alert)
    logger.info(f"👀 Alert {alert_id} viewed by provider {alert.service_provider_user_id}")
    return alert


async def respond_to_alert(db: Session, alert_id: int, can_respond: bool,
                           estimated_arrival: Optional[datetime] = None,
                           response_message: Optional[str] = None) -> UserEmergencyAlert:
    alert = get_alert(db, alert_id)
    if alert.status in ("acknowledged", "declined"):
        logger.warning(f"Alert {alert_id} already {alert.status} — overwriting with new response")

    now = datetime.utcnow()
    alert.status = "acknowledged" if can_respond else "declined"
    alert.acknowledged_at = now
    alert.can_respond = can_respond
    alert.estimated_arrival = estimated_arrival
    alert.response_message = response_message
    alert.is_read = True
    alert.updated_at = now
    db.commit()
    db.refresh(alert)
    logger.info(f"{'✅' if can_respond else '❌'} Alert {alert_id} {alert.status} at {alert.resource_name}")

    if can_respond:
        title = HELP_COMING_TITLE
        message = f"{alert.resource_name} is responding to your emergency. {response_message or ''}".strip()
    else:
        title = CANNOT_RESPOND_TITLE
        message = f"{alert.resource_name} cannot respond: {response_message or 'Looking for alternative help.'}"

    await create_notification(
        db, alert.emergency_user_id, "contact_notified",
        title=title,
        message=message,
        data={
            "alertId": alert.id,
            "resourceName": alert.resource_name,
            "canRespond": can_respond,
            "estimatedArrival": estimated_arrival.isoformat() if estimated_arrival else None,
            "distance": alert.resource_distance_km,
        },
        priority="high",
        ttl=PROVIDER_RESPONSE_TTL,
    )
    return alert
