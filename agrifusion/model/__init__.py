# ------ agrifusion/model/__init__.py ------

from .profile import Profile
from .farmer import Farmer, Consultant
from .notification import Notification
from .contact import ContactSubmission
from .types import GUID
from .enums import (
    ProfileRole,
    ProfileStatus,
    NotificationType,
    NotificationCategory,
    NotificationPriority,
    VISIBLE_FARMER_STATUSES,
)

__all__ = [
    "Profile",
    "Farmer",
    "Consultant",
    "Notification",
    "ContactSubmission",
    "GUID",
    "ProfileRole",
    "ProfileStatus",
    "NotificationType",
    "NotificationCategory",
    "NotificationPriority",
    "VISIBLE_FARMER_STATUSES",
]
