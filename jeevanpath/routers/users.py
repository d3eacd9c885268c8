# jeevanpath/routers/users.py
"""Users — signup, lookup, profile update and service-provider assignment (admin seeding)."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from sqlalchemy.orm import Session
from jeevanpath.database import get_db
from jeevanpath.schemas.user import ProviderAssignment, UserCreate, UserOut, UserUpdate
from jeevanpath.services.user_service import assign_provider, create_or_get_user, get_user_by_uid, update_user

router = APIRouter()


@router.post("/users", summary="Create a user (returns the existing one if already registered)")
def create_user(body: UserCreate, db: Session = Depends(get_db)):
    user, created = create_or_get_user(db, body.external_uid, body.name, body.phone, body.language)
    content = {"success": True, "data": UserOut.model_validate(user)}
    return JSONResponse(status_code=201 if created else 200, content=jsonable_encoder(content))


@router.get("/users/{external_uid}", summary="Get a user")
def get_user(external_uid: str, db: Session = Depends(get_db)):
    return {"success": True, "data": UserOut.model_validate(get_user_by_uid(db, external_uid))}


@router.patch("/users/{external_uid}", summary="Update profile fields")
def patch_user(external_uid: str, body: UserUpdate, db: Session = Depends(get_db)):
    user = update_user(db, external_uid, body.model_dump(exclude_unset=True, exclude_none=True))
    return {"success": True, "data": UserOut.model_validate(user)}


@router.put("/users/{external_uid}/provider", summary="Make a user the service provider of a resource")
def set_provider(external_uid: str, body: ProviderAssignment, db: Session = Depends(get_db)):
    user = assign_provider(db, external_uid, body.resource_id, role=body.role,
                           emergency_notifications_enabled=body.emergency_notifications_enabled)
    return {"success": True, "data": UserOut.model_validate(user)}
