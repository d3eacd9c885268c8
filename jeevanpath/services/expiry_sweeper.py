# jeevanpath/services/expiry_sweeper.py
"""
Expiry sweeper — time-to-live for provider alerts and requester notifications.

Rows carry an `expires_at`; this background task deletes the ones whose time
has passed every EXPIRY_SWEEP_INTERVAL_SECONDS. Reads do not filter on expiry,
so a row may be visible for up to one interval after it expired.
"""

import asyncio
from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session
from jeevanpath.config import settings
from jeevanpath.database import SessionLocal
from jeevanpath.models.emergency_notification import EmergencyNotification
from jeevanpath.models.user_emergency_alert import UserEmergencyAlert
from jeevanpath.utils.logger import get_logger

logger = get_logger(__name__)


def purge_expired(db: Session, now: Optional[datetime] = None) -> tuple[int, int]:
    """Delete expired rows. Returns (alerts_deleted, notifications_deleted)."""
    now = now or datetime.utcnow()
    alerts = (
        db.query(UserEmergencyAlert)
        .filter(UserEmergencyAlert.expires_at <= now)
        .delete(synchronize_session=False)
    )
    notifications = (
        db.query(EmergencyNotification)
        .filter(EmergencyNotification.expires_at.isnot(None), EmergencyNotification.expires_at <= now)
        .delete(synchronize_session=False)
    )
    db.commit()
    if alerts or notifications:
        logger.info(f"🧹 Purged {alerts} expired alerts, {notifications} expired notifications")
    return alerts, notifications


async def run_expiry_sweeper(interval: Optional[int] = None):
    """Loops forever; start with asyncio.create_task() at app startup."""
    interval = interval or settings.EXPIRY_SWEEP_INTERVAL_SECONDS
    logger.info(f"🧹 Expiry sweeper running every {interval}s")
    while True:
        db = SessionLocal()
        try:
            purge_expired(db)
        except Exception as e:
            db.rollback()
            logger.error(f"Expiry sweep failed: {e}", exc_info=True)
        finally:
            db.close()
        await asyncio.sleep(interval)
