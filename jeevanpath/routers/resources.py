# jeevanpath/routers/resources.py
"""Healthcare resources — add, filtered listing, radius search, details."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional, Literal
from jeevanpath.database import get_db
from jeevanpath.schemas.resource import ResourceCreate, ResourceOut
from jeevanpath.services.resource_index import (
    create_resource, find_nearby_resources, get_resource, list_resources,
)

router = APIRouter()

MAX_RESULTS = 100


def _csv(value: Optional[str]) -> Optional[list[str]]:
    """Comma-separated query value → list, blanks dropped."""
    if value is None:
        return None
    return [part.strip() for part in value.split(",") if part.strip()]


def _with_distance(resource, distance) -> ResourceOut:
    out = ResourceOut.model_validate(resource)
    if distance is None:
        return out
    return out.model_copy(update={"distance_from_user": round(distance, 1)})


@router.post("/resources", status_code=201, summary="Add a resource")
def add_resource(body: ResourceCreate, db: Session = Depends(get_db)):
    fields = body.model_dump(exclude={"name", "category", "location"})
    fields["address"] = fields["address"] or body.location.address
    resource = create_resource(db, body.name, body.category, body.location.lat, body.location.lng, **fields)
    return {"success": True, "data": ResourceOut.model_validate(resource)}


@router.get("/resources", summary="Search resources with filters")
def search_resources(
    category: Optional[Literal["clinic", "pharmacy", "blood_bank", "other"]] = Query(None, alias="type"),
    q: Optional[str] = Query(None, min_length=1, max_length=100),
    min_rating: Optional[float] = Query(None, alias="minRating", ge=0, le=5),
    open_now: bool = Query(False, alias="openNow"),
    services: Optional[str] = Query(None, description="Comma-separated, all required"),
    languages: Optional[str] = Query(None, description="Comma-separated, all required"),
    wheelchair: bool = False,
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lng: Optional[float] = Query(None, ge=-180, le=180),
    radius_meters: float = Query(3000, alias="radiusMeters", gt=0),
    sort_by: Optional[Literal["rating", "distance"]] = Query(None, alias="sortBy"),
    db: Session = Depends(get_db),
):
    matches = list_resources(
        db, category=category, q=q, min_rating=min_rating, open_now=open_now,
        services=_csv(services), languages=_csv(languages), wheelchair=wheelchair,
        lat=lat, lng=lng, radius_meters=radius_meters, sort_by=sort_by, limit=MAX_RESULTS,
    )
    return {"success": True, "data": [_with_distance(r, d) for r, d in matches]}


@router.get("/resources/nearby", summary="Resources within a radius, nearest first")
def nearby_resources(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    radius_meters: float = Query(3000, alias="radiusMeters", gt=0),
    db: Session = Depends(get_db),
):
    matches = find_nearby_resources(db, lat, lng, radius_meters, MAX_RESULTS)
    return {"success": True, "data": [_with_distance(r, d) for r, d in matches]}


@router.get("/resources/{resource_id}", summary="Resource details")
def resource_details(resource_id: int, db: Session = Depends(get_db)):
    return {"success": True, "data": ResourceOut.model_validate(get_resource(db, resource_id))}
