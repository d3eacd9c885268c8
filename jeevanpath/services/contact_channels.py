# jeevanpath/services/contact_channels.py
"""
Out-of-band contact of a service provider: emergency call and SMS.

Both are simulated: they log what would be sent, wait to mimic network
latency and report success. Each returns a bool and never raises; a failure
on one channel says nothing about the other.
Swap the bodies for a voice/SMS gateway client when one is integrated.
"""

import asyncio
from typing import Optional
from jeevanpath.config import settings
from jeevanpath.utils.logger import get_dispatch_logger

logger = get_dispatch_logger("contact")


def build_sms_text(emergency_type: str, lat: float, lng: float) -> str:
    return (f"🚨 EMERGENCY ALERT: {emergency_type.capitalize()} assistance needed at location "
            f"{lat}, {lng}. Please respond immediately. - JeevanPath Emergency System")


async def make_emergency_call(phone: Optional[str], emergency_type: str) -> bool:
    if not phone:
        logger.warning("📞 No phone number on record — call skipped")
        return False
    try:
        logger.info(f"🔄 Initiating {emergency_type} emergency call to {phone}...")
        await asyncio.sleep(settings.SIMULATED_CALL_DELAY_SECONDS)
        logger.info(f"✅ Emergency call connected to {phone}")
        return True
    except Exception as e:
        logger.error(f"❌ Failed to call {phone}: {e}")
        return False


async def send_emergency_sms(phone: Optional[str], emergency_type: str, lat: float, lng: float) -> bool:
    if not phone:
        logger.warning("📱 No phone number on record — SMS skipped")
        return False
    try:
        text = build_sms_text(emergency_type, lat, lng)
        logger.info(f"📱 Sending emergency SMS to {phone}: {text}")
        await asyncio.sleep(settings.SIMULATED_SMS_DELAY_SECONDS)
        logger.info(f"✅ Emergency SMS sent to {phone}")
        return True
    except Exception as e:
        logger.error(f"❌ Failed to send SMS to {phone}: {e}")
        return False
