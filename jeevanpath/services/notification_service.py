# jeevanpath/services/notification_service.py
"""
Requester-facing notification feed.
Used by the emergency registry, the trigger flow and the alert lifecycle.
Writes commit immediately; a failed write surfaces as PersistenceError (HTTP 500).
"""

from datetime import datetime, timedelta
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from jeevanpath.models.emergency_notification import EmergencyNotification
from jeevanpath.utils.errors import NotFoundError, PersistenceError
from jeevanpath.utils.logger import get_logger

logger = get_logger(__name__)

# How long each kind of notification stays in the feed
RESOURCE_SUMMARY_TTL = timedelta(days=7)
EMERGENCY_ALERT_TTL = timedelta(hours=24)
RESOURCE_FOUND_TTL = timedelta(hours=12)
PROVIDER_RESPONSE_TTL = timedelta(hours=24)


async def create_notification(db: Session, user_id: str, type: str, title: str, message: str,
                              data: Optional[dict] = None, priority: str = "medium",
                              ttl: Optional[timedelta] = None) -> EmergencyNotification:
    """Create and persist a notification for a requester. Always commits immediately."""
    now = datetime.utcnow()
    notification = EmergencyNotification(
        user_id=user_id, type=type, title=title, message=message, data=data or {},
        is_read=False, priority=priority, created_at=now,
        expires_at=now + ttl if ttl else None,
    )
    try:
        db.add(notification)
        db.commit()
        db.refresh(notification)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"[NOTIFY] Failed to store {type} notification for {user_id}: {e}", exc_info=True)
        raise PersistenceError("Failed to store notification", e)

    logger.info(f"[NOTIFY][{type.upper()}] {user_id}: {title}")
    return notification


def list_notifications(db: Session, user_id: str, limit: int = 10) -> list[EmergencyNotification]:
    return (
        db.query(EmergencyNotification)
        .filter(EmergencyNotification.user_id == user_id)
        .order_by(EmergencyNotification.created_at.desc(), EmergencyNotification.id.desc())
        .limit(limit)
        .all()
    )


def mark_notification_read(db: Session, notification_id: int) -> EmergencyNotification:
    notification = db.query(EmergencyNotification).filter(EmergencyNotification.id == notification_id).first()
    if not notification:
        raise NotFoundError("Notification not found")
    notification.is_read = True
    db.commit()
    db.refresh(notification)
    return notification
