# JeevanPath — Database Models
# Import all models here for SQLAlchemy discovery

from jeevanpath.models.resource import Resource                              # noqa
from jeevanpath.models.user import User                                      # noqa
from jeevanpath.models.emergency_service import EmergencyService             # noqa
from jeevanpath.models.user_emergency_alert import UserEmergencyAlert        # noqa
from jeevanpath.models.emergency_notification import EmergencyNotification   # noqa
from jeevanpath.models.emergency_contact import EmergencyContact             # noqa
from jeevanpath.models.contact_form import ContactForm                       # noqa
