# jeevanpath/routers/contact_forms.py
"""Facility submissions and their moderation (admin)."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional, Literal
from jeevanpath.database import get_db
from jeevanpath.schemas.contact_form import ContactFormCreate, ContactFormOut, ContactFormReject, Pagination
from jeevanpath.services import contact_form_service

router = APIRouter()


@router.post("/contact-form", status_code=201, summary="Submit a new facility for review")
def submit_contact_form(body: ContactFormCreate, db: Session = Depends(get_db)):
    fields = body.model_dump(exclude={"location"})
    form = contact_form_service.submit_contact_form(db, body.location.lat, body.location.lng, **fields)
    return {
        "success": True,
        "message": "Contact form submitted successfully. We will review your submission soon.",
        "data": ContactFormOut.model_validate(form),
    }


@router.get("/contact-form", summary="List submissions (admin)")
def list_contact_forms(
    status: Optional[Literal["pending", "approved", "rejected"]] = None,
    resource_type: Optional[Literal["clinic", "pharmacy", "blood_bank", "other"]] = Query(None, alias="resourceType"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    forms, total = contact_form_service.list_contact_forms(db, status=status, resource_type=resource_type,
                                                           page=page, limit=limit)
    return {
        "success": True,
        "data": [ContactFormOut.model_validate(f) for f in forms],
        "pagination": Pagination(total=total, page=page, limit=limit,
                                 pages=contact_form_service.page_count(total, limit)),
    }


@router.get("/contact-form/{form_id}", summary="Get one submission")
def get_contact_form(form_id: int, db: Session = Depends(get_db)):
    return {"success": True, "data": ContactFormOut.model_validate(contact_form_service.get_contact_form(db, form_id))}


@router.put("/contact-form/{form_id}/approve", summary="Approve and create the resource")
def approve_contact_form(form_id: int, db: Session = Depends(get_db)):
    form = contact_form_service.approve_contact_form(db, form_id)
    return {"success": True, "data": ContactFormOut.model_validate(form)}


@router.put("/contact-form/{form_id}/reject", summary="Reject a submission")
def reject_contact_form(form_id: int, body: Optional[ContactFormReject] = None, db: Session = Depends(get_db)):
    form = contact_form_service.reject_contact_form(db, form_id, reason=body.reason if body else None)
    return {"success": True, "data": ContactFormOut.model_validate(form)}
