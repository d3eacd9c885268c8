# jeevanpath/services/user_service.py
"""
User lookups and provider assignment.
assigned_resource_id is a real foreign key: assignment checks the resource exists first.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session
from jeevanpath.models.resource import Resource
from jeevanpath.models.user import User
from jeevanpath.utils.errors import InvalidReferenceError, NotFoundError
from jeevanpath.utils.logger import get_logger

logger = get_logger(__name__)


def get_user_by_uid(db: Session, external_uid: str) -> User:
    user = db.query(User).filter(User.external_uid == external_uid).first()
    if not user:
        raise NotFoundError(f"User {external_uid} not found")
    return user


def create_or_get_user(db: Session, external_uid: str, name: Optional[str] = None,
                       phone: Optional[str] = None, language: str = "en") -> tuple[User, bool]:
    """(user, created). An existing account is returned untouched."""
    existing = db.query(User).filter(User.external_uid == external_uid).first()
    if existing:
        return existing, False
    user = User(external_uid=external_uid, name=name, phone=phone, language=language,
                role="user", is_active=True, is_service_provider=False,
                emergency_notifications_enabled=True, created_at=datetime.utcnow())
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"[USERS] Created user {external_uid}")
    return user, True


def assign_provider(db: Session, external_uid: str, resource_id: int, role: str = "provider",
                    emergency_notifications_enabled: bool = True) -> User:
    user = get_user_by_uid(db, external_uid)
    if not db.query(Resource).filter(Resource.id == resource_id).first():
        raise InvalidReferenceError(f"Resource {resource_id} does not exist")

    user.is_service_provider = True
    user.assigned_resource_id = resource_id
    user.role = role
    user.emergency_notifications_enabled = emergency_notifications_enabled
    db.commit()
    db.refresh(user)
    logger.info(f"[USERS] {external_uid} is now {role} of resource {resource_id}")
    return user


def update_user(db: Session, external_uid: str, changes: dict) -> User:
    """Apply the given profile fields; an empty dict leaves the user untouched."""
    user = get_user_by_uid(db, external_uid)
    if not changes:
        return user
    for field, value in changes.items():
        setattr(user, field, value)
    db.commit()
    db.refresh(user)
    logger.info(f"[USERS] Updated {external_uid}: {', '.join(sorted(changes))}")
    return user
