# jeevanpath/services/contact_form_service.py
"""
Contact-form moderation — how new facilities get into the resource index.

A submission is stored as `pending`. An admin either approves it, which
creates a verified Resource from the submitted details in the same commit,
or rejects it with an optional reason. Only pending forms can be moderated.
"""

import math
from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session
from jeevanpath.models.contact_form import ContactForm
from jeevanpath.models.resource import Resource
from jeevanpath.utils.errors import ConflictError, NotFoundError
from jeevanpath.utils.logger import get_logger

logger = get_logger(__name__)


def submit_contact_form(db: Session, lat: float, lng: float, **fields) -> ContactForm:
    now = datetime.utcnow()
    form = ContactForm(status="pending", is_verified=False, email_verified=False, phone_verified=False,
                       submitted_at=now, updated_at=now, **fields)
    form.set_point(lat, lng)
    db.add(form)
    db.commit()
    db.refresh(form)
    logger.info(f"[FORMS] New {form.resource_type} submission '{form.resource_name}' from {form.phone_number}")
    return form


def list_contact_forms(db: Session, status: Optional[str] = None, resource_type: Optional[str] = None,
                       page: int = 1, limit: int = 10) -> tuple[list[ContactForm], int]:
    """(forms on this page newest first, total matching)."""
    q = db.query(ContactForm)
    if status:
        q = q.filter(ContactForm.status == status)
    if resource_type:
        q = q.filter(ContactForm.resource_type == resource_type)
    total = q.count()
    forms = (
        q.order_by(ContactForm.submitted_at.desc(), ContactForm.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return forms, total


def page_count(total: int, limit: int) -> int:
    return math.ceil(total / limit)


def get_contact_form(db: Session, form_id: int) -> ContactForm:
    form = db.query(ContactForm).filter(ContactForm.id == form_id).first()
    if not form:
        raise NotFoundError("Contact form not found")
    return form


def _pending(db: Session, form_id: int) -> ContactForm:
    form = get_contact_form(db, form_id)
    if form.status != "pending":
        raise ConflictError(f"Contact form is already {form.status}")
    return form


def approve_contact_form(db: Session, form_id: int) -> ContactForm:
    form = _pending(db, form_id)
    now = datetime.utcnow()

    resource = Resource(
        name=form.resource_name,
        category=form.resource_type,
        address=form.resource_address,
        contact=form.contact_number,
        open_time=form.open_time,
        close_time=form.close_time,
        is_24_hours=form.is_24_hours,
        services=list(form.services or []),
        languages=list(form.languages or []),
        wheelchair_accessible=form.wheelchair_accessible,
        is_verified=True,
        created_at=now,
    )
    resource.set_point(form.latitude, form.longitude)
    db.add(resource)
    db.flush()

    form.status = "approved"
    form.is_verified = True
    form.resource_id = resource.id
    form.approved_at = now
    form.updated_at = now
    db.commit()
    db.refresh(form)
    logger.info(f"✅ [FORMS] Approved form {form_id} → resource {resource.id} '{resource.name}'")
    return form


def reject_contact_form(db: Session, form_id: int, reason: Optional[str] = None) -> ContactForm:
    form = _pending(db, form_id)
    now = datetime.utcnow()
    form.status = "rejected"
    form.rejection_reason = reason
    form.rejected_at = now
    form.updated_at = now
    db.commit()
    db.refresh(form)
    logger.info(f"❌ [FORMS] Rejected form {form_id}: {reason or 'no reason given'}")
    return form
