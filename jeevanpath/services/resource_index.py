# jeevanpath/services/resource_index.py
"""
Geospatial resource index — "nearest resources within a radius" and the
filtered resource listing used by the search screen.

Works on any SQL backend: a bounding box on the indexed latitude/longitude
columns narrows the candidates, then the exact Haversine distance filters and
orders them. The box wraps across ±180° and drops the longitude bound
entirely when it reaches a pole.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy import and_, or_
from sqlalchemy.orm import Session
from jeevanpath.models.resource import Resource
from jeevanpath.utils.errors import NotFoundError
from jeevanpath.utils.geo import bounding_box, distance_km
from jeevanpath.utils.logger import get_logger

logger = get_logger(__name__)

SORT_OPTIONS = ("rating", "distance")


def _box_conditions(lat: float, lng: float, radius_meters: float) -> list:
    min_lat, max_lat, lng_ranges = bounding_box(lat, lng, radius_meters / 1000)
    conditions = [Resource.latitude.between(min_lat, max_lat)]
    if lng_ranges is not None:
        conditions.append(or_(*(Resource.longitude.between(lo, hi) for lo, hi in lng_ranges)))
    return conditions


def _within_radius(candidates: list[Resource], lat: float, lng: float,
                   radius_meters: float) -> list[tuple[Resource, float]]:
    matches = []
    for resource in candidates:
        d = distance_km(lat, lng, resource.latitude, resource.longitude)
        if d * 1000 <= radius_meters:
            matches.append((resource, d))
    return matches


def find_nearby_resources(db: Session, lat: float, lng: float, radius_meters: float,
                          limit: int) -> list[tuple[Resource, float]]:
    """[(resource, distance_km)] within radius_meters of (lat, lng), nearest first."""
    candidates = db.query(Resource).filter(*_box_conditions(lat, lng, radius_meters)).all()

    matches = _within_radius(candidates, lat, lng, radius_meters)
    matches.sort(key=lambda m: m[1])

    logger.debug(f"[INDEX] ({lat}, {lng}) r={radius_meters}m → {len(matches)} of {len(candidates)} candidates")
    return matches[:limit]


def list_resources(db: Session, category: Optional[str] = None, q: Optional[str] = None,
                   min_rating: Optional[float] = None, open_now: bool = False,
                   services: Optional[list[str]] = None, languages: Optional[list[str]] = None,
                   wheelchair: bool = False, lat: Optional[float] = None, lng: Optional[float] = None,
                   radius_meters: float = 3000, sort_by: Optional[str] = None, limit: int = 100,
                   now: Optional[datetime] = None) -> list[tuple[Resource, Optional[float]]]:
    """
    Filtered resource search. Returns [(resource, distance_km or None)].

    With lat and lng the result is limited to radius_meters and ordered nearest
    first; sort_by="rating" orders by rating (highest first) instead. Without a
    location there is no distance, and sort_by="distance" falls back to insertion order.
    services/languages must all be present on a resource. open_now compares the
    current HH:MM against open/close times; 24-hour resources are always open.
    """
    query = db.query(Resource)
    if category:
        query = query.filter(Resource.category == category)
    if q:
        query = query.filter(Resource.name.ilike(f"%{q}%"))
    if min_rating is not None:
        query = query.filter(Resource.rating >= min_rating)
    if wheelchair:
        query = query.filter(Resource.wheelchair_accessible.is_(True))
    if open_now:
        current = (now or datetime.now()).strftime("%H:%M")
        query = query.filter(or_(
            Resource.is_24_hours.is_(True),
            and_(Resource.open_time <= current, Resource.close_time >= current),
        ))

    located = lat is not None and lng is not None
    if located:
        query = query.filter(*_box_conditions(lat, lng, radius_meters))

    if sort_by == "rating":
        query = query.order_by(Resource.rating.desc(), Resource.id)
    else:
        query = query.order_by(Resource.id)

    # JSON list containment is not portable across backends, so tags are matched here
    wanted_services = set(services or [])
    wanted_languages = set(languages or [])
    candidates = [
        r for r in query.all()
        if wanted_services <= set(r.services or []) and wanted_languages <= set(r.languages or [])
    ]

    if not located:
        return [(r, None) for r in candidates[:limit]]

    matches = _within_radius(candidates, lat, lng, radius_meters)
    if sort_by != "rating":
        matches.sort(key=lambda m: m[1])
    logger.debug(f"[INDEX] list ({lat}, {lng}) r={radius_meters}m → {len(matches)} resources")
    return matches[:limit]


def get_resource(db: Session, resource_id: int) -> Resource:
    resource = db.query(Resource).filter(Resource.id == resource_id).first()
    if not resource:
        raise NotFoundError(f"Resource {resource_id} not found")
    return resource


def create_resource(db: Session, name: str, category: str, lat: float, lng: float, **fields) -> Resource:
    resource = Resource(name=name, category=category, created_at=datetime.utcnow(), **fields)
    resource.set_point(lat, lng)
    db.add(resource)
    db.commit()
    db.refresh(resource)
    logger.info(f"[INDEX] Added {category} '{name}' at ({lat}, {lng})")
    return resource
