# jeevanpath/services/emergency_registry.py
"""
Emergency service registry — per-user emergency preferences.

toggle_emergency_service() is the explicit opt-in/out from the settings screen.
get_or_create_for_alert() is used when an emergency is raised: a user never has
to opt in before their first real emergency, so a missing record is created and
a disabled one is switched back on with the fresh location.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session
from jeevanpath.config import settings
from jeevanpath.models.emergency_service import EmergencyService
from jeevanpath.services.notification_service import create_notification, RESOURCE_SUMMARY_TTL
from jeevanpath.services.resource_index import find_nearby_resources
from jeevanpath.utils.logger import get_logger

logger = get_logger(__name__)

TOGGLE_DEFAULT_TYPES = ["medical", "blood"]
ALERT_DEFAULT_TYPES = ["medical", "blood", "accident", "pharmacy"]


def get_emergency_service(db: Session, user_id: str) -> Optional[EmergencyService]:
    return db.query(EmergencyService).filter(EmergencyService.user_id == user_id).first()


async def toggle_emergency_service(db: Session, user_id: str, lat: float, lng: float,
                                   is_enabled: bool = True, max_distance_km: Optional[int] = None,
                                   emergency_types: Optional[list[str]] = None) -> EmergencyService:
    """Upsert the user's record. Enabling also tells the user what is nearby."""
    now = datetime.utcnow()
    service = get_emergency_service(db, user_id)
    if not service:
        service = EmergencyService(user_id=user_id, created_at=now)
        db.add(service)

    service.is_enabled = is_enabled
    service.max_distance_km = max_distance_km or settings.DEFAULT_MAX_DISTANCE_KM
    service.emergency_types = list(emergency_types or TOGGLE_DEFAULT_TYPES)
    service.set_point(lat, lng)
    service.last_location_update = now
    service.updated_at = now
    db.commit()
    db.refresh(service)
    logger.info(f"[REGISTRY] {user_id} enabled={is_enabled} radius={service.max_distance_km}km")

    if is_enabled:
        await notify_nearby_resources(db, user_id, lat, lng, service.max_distance_km)
    return service


async def get_or_create_for_alert(db: Session, user_id: str, lat: float, lng: float) -> EmergencyService:
    now = datetime.utcnow()
    service = get_emergency_service(db, user_id)

    if not service:
        service = EmergencyService(
            user_id=user_id,
            is_enabled=True,
            max_distance_km=settings.DEFAULT_MAX_DISTANCE_KM,
            emergency_types=list(ALERT_DEFAULT_TYPES),
            last_location_update=now,
            created_at=now,
            updated_at=now,
        )
        service.set_point(lat, lng)
        db.add(service)
        db.commit()
        db.refresh(service)
        logger.info(f"✅ [REGISTRY] Auto-enabled emergency service for new user {user_id}")
    elif not service.is_enabled:
        service.is_enabled = True
        service.set_point(lat, lng)
        service.last_location_update = now
        service.updated_at = now
        db.commit()
        db.refresh(service)
        logger.info(f"✅ [REGISTRY] Re-enabled emergency service for {user_id}")

    return service


async def notify_nearby_resources(db: Session, user_id: str, lat: float, lng: float, max_distance_km: int):
    """Informational only: tells the requester how many facilities are in range. No providers are alerted."""
    nearby = find_nearby_resources(db, lat, lng, max_distance_km * 1000, settings.NEARBY_RESOURCE_LIMIT)
    if not nearby:
        return None

    count = len(nearby)
    return await create_notification(
        db, user_id, "resource_found",
        title=f"🏥 {count} Healthcare Resources Nearby",
        message=f"Emergency service activated. Found {count} healthcare facilities within {max_distance_km}km.",
        data={"location": {"lat": lat, "lng": lng}, "resourceCount": count},
        priority="medium",
        ttl=RESOURCE_SUMMARY_TTL,
    )
