# jeevanpath/services/contact_service.py
"""Personal emergency contacts. Only one contact per user can be primary."""

from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session
from jeevanpath.models.emergency_contact import EmergencyContact
from jeevanpath.utils.logger import get_logger

logger = get_logger(__name__)


def add_contact(db: Session, user_id: str, name: str, phone: str, email: Optional[str] = None,
                relationship: str = "family", is_primary: bool = False) -> EmergencyContact:
    now = datetime.utcnow()
    if is_primary:
        db.query(EmergencyContact).filter(
            EmergencyContact.user_id == user_id, EmergencyContact.is_primary.is_(True)
        ).update({EmergencyContact.is_primary: False, EmergencyContact.updated_at: now},
                 synchronize_session=False)

    contact = EmergencyContact(user_id=user_id, name=name.strip(), phone=phone.strip(), email=email,
                               relationship=relationship, is_primary=is_primary, is_active=True,
                               created_at=now, updated_at=now)
    db.add(contact)
    db.commit()
    db.refresh(contact)
    logger.info(f"[CONTACTS] {user_id} added {relationship} contact{' (primary)' if is_primary else ''}")
    return contact


def list_contacts(db: Session, user_id: str) -> list[EmergencyContact]:
    return (
        db.query(EmergencyContact)
        .filter(EmergencyContact.user_id == user_id, EmergencyContact.is_active.is_(True))
        .order_by(EmergencyContact.is_primary.desc(), EmergencyContact.created_at.desc(),
                  EmergencyContact.id.desc())
        .all()
    )


def count_active_contacts(db: Session, user_id: str) -> int:
    return (
        db.query(EmergencyContact)
        .filter(EmergencyContact.user_id == user_id, EmergencyContact.is_active.is_(True))
        .count()
    )
