# jeevanpath/services/provider_directory.py
"""Service-provider lookups: identity checks and the provider's alert inbox."""

from typing import Optional
from sqlalchemy.orm import Session
from jeevanpath.models.user import User
from jeevanpath.models.user_emergency_alert import UserEmergencyAlert
from jeevanpath.utils.logger import get_logger

logger = get_logger(__name__)


def find_provider_by_phone(db: Session, phone: str) -> Optional[User]:
    return db.query(User).filter(User.phone == phone, User.is_service_provider.is_(True)).first()


def find_provider(db: Session, identifier: str) -> Optional[User]:
    """Providers log in with their phone number; fall back to the external uid."""
    provider = find_provider_by_phone(db, identifier)
    if not provider:
        provider = (
            db.query(User)
            .filter(User.external_uid == identifier, User.is_service_provider.is_(True))
            .first()
        )
    return provider


def list_provider_alerts(db: Session, identifier: str, status: Optional[str] = None,
                         limit: int = 20) -> tuple[list[UserEmergencyAlert], int]:
    """(alerts newest first, unread count over all the provider's alerts). Unknown provider → ([], 0)."""
    provider = find_provider(db, identifier)
    if not provider:
        logger.info(f"❌ No service provider found for identifier: {identifier}")
        return [], 0

    q = db.query(UserEmergencyAlert).filter(UserEmergencyAlert.service_provider_user_id == provider.id)
    if status and status != "all":
        q = q.filter(UserEmergencyAlert.status == status)
    alerts = q.order_by(UserEmergencyAlert.created_at.desc(), UserEmergencyAlert.id.desc()).limit(limit).all()

    unread = (
        db.query(UserEmergencyAlert)
        .filter(UserEmergencyAlert.service_provider_user_id == provider.id,
                UserEmergencyAlert.is_read.is_(False))
        .count()
    )
    logger.info(f"📋 {len(alerts)} alerts for {provider.name or provider.phone}, {unread} unread")
    return alerts, unread
