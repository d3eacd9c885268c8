# jeevanpath/services/provider_resolver.py
"""
Provider resolution: which service-provider users should hear about an emergency.

1. Resources within the radius, nearest first, capped at PROVIDER_RESOURCE_LIMIT.
2. Users assigned to those resources that are providers with emergency notifications on.
3. Each user annotated with the exact distance to their own resource.

A resource may have zero or several providers, so the result length follows
the providers found, not the resource cap. Any lookup failure yields []; the
dispatcher treats "nobody found" and "lookup failed" the same way.
"""

from dataclasses import dataclass
from sqlalchemy.orm import Session
from jeevanpath.config import settings
from jeevanpath.models.resource import Resource
from jeevanpath.models.user import User
from jeevanpath.services.resource_index import find_nearby_resources
from jeevanpath.utils.geo import distance_km
from jeevanpath.utils.logger import get_dispatch_logger

logger = get_dispatch_logger("resolver")


@dataclass
class ResolvedProvider:
    user: User
    resource: Resource
    distance_km: float


def resolve_providers(db: Session, lat: float, lng: float, radius_meters: float) -> list[ResolvedProvider]:
    try:
        nearby = find_nearby_resources(db, lat, lng, radius_meters, settings.PROVIDER_RESOURCE_LIMIT)
        logger.info(f"🚨 {len(nearby)} resources within {radius_meters / 1000:g}km of ({lat}, {lng})")
        if not nearby:
            return []

        rank = {resource.id: i for i, (resource, _) in enumerate(nearby)}
        resources = {resource.id: resource for resource, _ in nearby}

        users = (
            db.query(User)
            .filter(
                User.assigned_resource_id.in_(list(resources)),
                User.is_service_provider.is_(True),
                User.emergency_notifications_enabled.is_(True),
            )
            .all()
        )
        # Nearest resource first, then by user id so the order is stable
        users = sorted(users, key=lambda u: (rank[u.assigned_resource_id], u.id))

        resolved = []
        for user in users:
            resource = resources[user.assigned_resource_id]
            d = distance_km(lat, lng, resource.latitude, resource.longitude)
            resolved.append(ResolvedProvider(user=user, resource=resource, distance_km=d))

        logger.info(f"👥 {len(resolved)} provider users eligible: "
                    f"{', '.join(f'{p.user.name or p.user.external_uid} ({p.resource.name})' for p in resolved)}")
        return resolved

    except Exception as e:
        logger.error(f"❌ Provider lookup failed, treating as no providers: {e}", exc_info=True)
        db.rollback()
        return []
