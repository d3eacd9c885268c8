# jeevanpath/services/alert_dispatcher.py
"""
Alert dispatcher — fans one emergency out to every resolved provider.

For each provider a UserEmergencyAlert is stored first; that row is the
source of truth and exists whether or not the provider could be reached.
Then all providers are called/texted concurrently (bounded by
CONTACT_CONCURRENCY) and `is_delivered` records whether either channel worked.

One provider failing (bad row, failed contact) never blocks the others.
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from jeevanpath.config import settings
from jeevanpath.models.user_emergency_alert import UserEmergencyAlert
from jeevanpath.services.contact_channels import make_emergency_call, send_emergency_sms
from jeevanpath.services.provider_resolver import ResolvedProvider, resolve_providers
from jeevanpath.utils.logger import get_dispatch_logger

logger = get_dispatch_logger("dispatcher")

DEFAULT_EMERGENCY_MESSAGE = "Emergency assistance needed"


@dataclass
class EmergencyEvent:
    requester_id: str
    emergency_type: str                 # medical | accident | blood | pharmacy
    lat: float
    lng: float
    message: str = DEFAULT_EMERGENCY_MESSAGE
    urgency_level: str = "critical"
    requester_name: Optional[str] = None
    requester_phone: Optional[str] = None
    address: Optional[str] = None
    details: Optional[dict] = None       # symptoms, blood_type, medications, allergies, medical_history


@dataclass
class ContactOutcome:
    alert: UserEmergencyAlert
    call_ok: bool
    sms_ok: bool

    @property
    def delivered(self) -> bool:
        return self.call_ok or self.sms_ok


def build_alert_message(event: EmergencyEvent, resource_name: str, distance: float) -> str:
    return (f"🚨 EMERGENCY ALERT: {event.message}. "
            f"Patient located {distance:.1f}km from {resource_name}.")


def _persist_alert(db: Session, event: EmergencyEvent, provider: ResolvedProvider) -> Optional[UserEmergencyAlert]:
    now = datetime.utcnow()
    alert = UserEmergencyAlert(
        emergency_user_id=event.requester_id,
        service_provider_user_id=provider.user.id,
        emergency_type=event.emergency_type,
        urgency_level=event.urgency_level,
        priority="critical",
        emergency_user_name=event.requester_name,
        emergency_user_phone=event.requester_phone,
        emergency_lat=event.lat,
        emergency_lng=event.lng,
        emergency_address=event.address,
        resource_id=provider.resource.id,
        resource_name=provider.resource.name,
        resource_distance_km=provider.distance_km,
        emergency_details=event.details,
        message=build_alert_message(event, provider.resource.name, provider.distance_km),
        status="sent",
        is_read=False,
        is_delivered=False,
        can_respond=False,
        sent_at=now,
        created_at=now,
        updated_at=now,
        expires_at=now + timedelta(hours=settings.ALERT_TTL_HOURS),
    )
    try:
        db.add(alert)
        db.commit()
        db.refresh(alert)
        return alert
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"❌ Could not store alert for provider {provider.user.external_uid}: {e}", exc_info=True)
        return None


async def _contact(provider: ResolvedProvider, alert: UserEmergencyAlert, event: EmergencyEvent,
                   limiter: asyncio.Semaphore) -> ContactOutcome:
    async with limiter:
        phone = provider.user.phone
        logger.info(f"📞 CONTACTING {provider.user.name or 'Provider'} | 📱 {phone} | "
                    f"🏥 {provider.resource.name} | 📍 {provider.distance_km:.1f}km")
        call_ok = await make_emergency_call(phone, event.emergency_type)
        sms_ok = await send_emergency_sms(phone, event.emergency_type, event.lat, event.lng)

    outcome = ContactOutcome(alert=alert, call_ok=call_ok, sms_ok=sms_ok)
    if outcome.delivered:
        logger.info(f"✅ Reached {provider.user.name or phone} at {provider.resource.name}")
    else:
        logger.warning(f"⚠️ Could not reach {provider.user.name or phone} — alert {alert.id} stays in their inbox")
    return outcome


async def dispatch(db: Session, event: EmergencyEvent, radius_meters: float,
                   exclude_provider_ids: Optional[set] = None) -> list[UserEmergencyAlert]:
    """
    Alert every eligible provider within radius_meters, except users in
    exclude_provider_ids. Returns the alerts created, in resolution order.
    """
    providers = resolve_providers(db, event.lat, event.lng, radius_meters)
    if exclude_provider_ids:
        kept = [p for p in providers if p.user.id not in exclude_provider_ids]
        if len(kept) < len(providers):
            logger.info(f"[DISPATCH] Skipping {len(providers) - len(kept)} providers already alerted")
        providers = kept

    alerted = []
    for provider in providers:
        alert = _persist_alert(db, event, provider)
        if alert is not None:
            alerted.append((provider, alert))

    if not alerted:
        logger.info(f"[DISPATCH] {event.requester_id}: no providers alerted within {radius_meters / 1000:g}km")
        return []

    limiter = asyncio.Semaphore(settings.CONTACT_CONCURRENCY)
    results = await asyncio.gather(
        *(_contact(provider, alert, event, limiter) for provider, alert in alerted),
        return_exceptions=True,
    )

    for (provider, alert), result in zip(alerted, results):
        if isinstance(result, Exception):
            logger.error(f"❌ Contact task for {provider.user.external_uid} failed: {result}")
            continue
        alert.is_delivered = result.delivered
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"❌ Could not record delivery status: {e}", exc_info=True)

    logger.info(f"[DISPATCH] {event.requester_id}: {len(alerted)} providers alerted within {radius_meters / 1000:g}km")
    return [alert for _, alert in alerted]
