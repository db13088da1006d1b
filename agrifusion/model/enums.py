# agrifusion/model/enums.py
import enum


class ProfileRole(str, enum.Enum):
    FARMER = "farmer"
    CONSULTANT = "consultant"


class ProfileStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    SUSPENDED = "suspended"
    ACTIVE = "active"


# farmer records outside these statuses are hidden from consultants
VISIBLE_FARMER_STATUSES = frozenset({ProfileStatus.PENDING.value, ProfileStatus.ACTIVE.value})


class NotificationType(str, enum.Enum):
    # authentication & security
    EMAIL_VERIFIED = "email_verified"
    PASSWORD_RESET = "password_reset"
    SECURITY_ALERT = "security_alert"
    # profile & settings
    PROFILE_UPDATE = "profile_update"
    AVATAR_UPDATED = "avatar_updated"
    SETTINGS_UPDATED = "settings_updated"
    # farmer-consultant relationship
    CONSULTANT_ASSIGNED = "consultant_assigned"
    CONSULTANT_REMOVED = "consultant_removed"
    FARMER_LINKED = "farmer_linked"
    FARMER_CREATED = "farmer_created"
    FARMER_REMOVED = "farmer_removed"
    # account status
    ACCOUNT_ACTIVATED = "account_activated"
    ACCOUNT_SUSPENDED = "account_suspended"
    APPROVAL_PENDING = "approval_pending"
    APPROVAL_SUCCESS = "approval_success"
    APPROVAL_REJECTED = "approval_rejected"
    # farm management
    FARM_SETUP = "farm_setup"
    FARM_UPDATE = "farm_update"
    # admin & system
    CONSULTANT_PENDING_REVIEW = "consultant_pending_review"
    FARMER_STATUS_CHANGE = "farmer_status_change"
    # general
    WELCOME = "welcome"
    SYSTEM = "system"


class NotificationCategory(str, enum.Enum):
    AUTHENTICATION = "authentication"
    PROFILE = "profile"
    RELATIONSHIP = "relationship"
    STATUS = "status"
    SECURITY = "security"
    SYSTEM = "system"
    FARM = "farm"


class NotificationPriority(str, enum.Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"
