"""Notification templates keyed by :class:`NotificationType`.

Each template fixes the category and priority of a notification type and
builds the title, message, optional action URL and optional metadata from a
caller supplied context mapping.
"""
from typing import Callable, Mapping, NamedTuple

from ..model.enums import NotificationCategory as C
from ..model.enums import NotificationPriority as P
from ..model.enums import NotificationType as T

Context = Mapping[str, object]


class NotificationTemplate(NamedTuple):
    type: T
    category: C
    priority: P
    title: Callable[[Context], str]
    message: Callable[[Context], str]
    action_url: Callable[[Context], str | None] | None = None
    metadata: Callable[[Context], dict | None] | None = None


def _const(value):
    return lambda ctx: value


# ---------- consultant ----------

_CONSULTANT = [
    NotificationTemplate(
        T.FARMER_LINKED, C.RELATIONSHIP, P.NORMAL,
        _const("New Farmer Added"),
        lambda ctx: f"{ctx.get('farmerName')} has been successfully added to your network",
        _const("/dashboard/consultant/farmers"),
        lambda ctx: {"farmer_id": ctx.get("farmerId")},
    ),
    NotificationTemplate(
        T.FARMER_CREATED, C.RELATIONSHIP, P.NORMAL,
        _const("Farmer Account Created"),
        lambda ctx: f"New farmer account for {ctx.get('farmerName')} has been created successfully",
        _const("/dashboard/consultant/farmers"),
        lambda ctx: {"farmer_id": ctx.get("farmerId")},
    ),
    NotificationTemplate(
        T.FARMER_REMOVED, C.RELATIONSHIP, P.NORMAL,
        _const("Farmer Removed"),
        lambda ctx: f"{ctx.get('farmerName')} has been removed from your network",
        _const("/dashboard/consultant/farmers"),
        lambda ctx: {"farmer_id": ctx.get("farmerId")},
    ),
    NotificationTemplate(
        T.SETTINGS_UPDATED, C.PROFILE, P.NORMAL,
        _const("Settings Saved"),
        _const("Your profile and professional settings have been updated successfully"),
        _const("/dashboard/consultant/settings"),
    ),
    NotificationTemplate(
        T.APPROVAL_SUCCESS, C.STATUS, P.HIGH,
        _const("Account Approved!"),
        _const("Congratulations! Your consultant account has been approved. "
               "You can now access all features."),
        _const("/dashboard/consultant"),
    ),
    NotificationTemplate(
        T.APPROVAL_REJECTED, C.STATUS, P.HIGH,
        _const("Application Update"),
        lambda ctx: (
            f"Your consultant application requires additional review. Reason: {ctx['reason']}"
            if ctx.get("reason")
            else "Your consultant application requires additional review. "
                 "Our team will contact you shortly."
        ),
        _const("/dashboard/consultant"),
        lambda ctx: {"rejection_reason": ctx.get("reason")},
    ),
    NotificationTemplate(
        T.ACCOUNT_SUSPENDED, C.STATUS, P.URGENT,
        _const("Account Suspended"),
        _const("Your account has been temporarily suspended. "
               "Please contact support for more information."),
        _const("/dashboard/consultant"),
    ),
]

# ---------- farmer ----------

_FARMER = [
    NotificationTemplate(
        T.CONSULTANT_ASSIGNED, C.RELATIONSHIP, P.HIGH,
        _const("Consultant Assigned"),
        lambda ctx: f"{ctx.get('consultantName')} has been assigned as your agricultural consultant",
        _const("/dashboard/farmer/consultant"),
        lambda ctx: {"consultant_id": ctx.get("consultantId")},
    ),
    NotificationTemplate(
        T.CONSULTANT_REMOVED, C.RELATIONSHIP, P.HIGH,
        _const("Consultant Assignment Changed"),
        lambda ctx: (f"You have been unlinked from consultant {ctx.get('consultantName')}. "
                     "A new consultant will be assigned soon."),
        _const("/dashboard/farmer"),
        lambda ctx: {"previous_consultant_id": ctx.get("consultantId"), "reason": ctx.get("reason")},
    ),
    NotificationTemplate(
        T.PROFILE_UPDATE, C.PROFILE, P.NORMAL,
        _const("Profile Updated"),
        lambda ctx: (f"Your profile was updated by {ctx['updatedBy']}" if ctx.get("updatedBy")
                     else "Your profile has been updated successfully"),
        _const("/dashboard/farmer/settings"),
    ),
    NotificationTemplate(
        T.FARM_SETUP, C.FARM, P.NORMAL,
        _const("Farm Profile Configured"),
        lambda ctx: (f"Your farm details have been set up: "
                     f"{ctx.get('farmName')} - {ctx.get('landSize')} acres"),
        _const("/dashboard/farmer/farm"),
        lambda ctx: {"farm_name": ctx.get("farmName"), "land_size": ctx.get("landSize"),
                     "crops": ctx.get("crops")},
    ),
    NotificationTemplate(
        T.FARM_UPDATE, C.FARM, P.NORMAL,
        _const("Farm Details Updated"),
        lambda ctx: f"Your farm information has been updated: {ctx.get('updateSummary')}",
        _const("/dashboard/farmer/farm"),
        lambda ctx: ctx.get("metadata"),
    ),
    NotificationTemplate(
        T.ACCOUNT_ACTIVATED, C.STATUS, P.HIGH,
        _const("Account Activated"),
        _const("Your account is now active. You can log in and start using AgriFusion."),
        _const("/dashboard/farmer"),
    ),
]

# ---------- security ----------

_SECURITY = [
    NotificationTemplate(
        T.SECURITY_ALERT, C.SECURITY, P.HIGH,
        lambda ctx: ctx.get("alertType") or "Security Alert",
        lambda ctx: ctx.get("message") or "",
        lambda ctx: ctx.get("actionUrl") or "/dashboard/settings",
        lambda ctx: ctx.get("metadata"),
    ),
    NotificationTemplate(
        T.PASSWORD_RESET, C.SECURITY, P.HIGH,
        _const("Password Reset Requested"),
        _const("A password reset link has been sent to your email. "
               "If you did not request this, please contact support immediately."),
        _const("/dashboard/settings"),
    ),
    NotificationTemplate(
        T.EMAIL_VERIFIED, C.AUTHENTICATION, P.NORMAL,
        _const("Email Verified"),
        _const("Your email has been successfully verified. You now have full access to all features."),
        _const("/dashboard"),
    ),
    NotificationTemplate(
        T.AVATAR_UPDATED, C.PROFILE, P.LOW,
        _const("Profile Photo Updated"),
        _const("Your profile photo has been updated successfully"),
        _const("/dashboard/settings"),
    ),
]

# ---------- system ----------

_SYSTEM = [
    NotificationTemplate(
        T.WELCOME, C.SYSTEM, P.NORMAL,
        _const("Welcome to AgriFusion!"),
        lambda ctx: ctx.get("message") or
        "Thank you for joining AgriFusion. We are excited to have you on board!",
        lambda ctx: ctx.get("actionUrl") or "/dashboard",
        lambda ctx: ctx.get("metadata"),
    ),
    NotificationTemplate(
        T.APPROVAL_PENDING, C.STATUS, P.NORMAL,
        _const("Application Submitted"),
        _const("Your application has been submitted. "
               "Our team will review your credentials within 2-3 business days."),
        _const("/dashboard"),
    ),
    NotificationTemplate(
        T.SYSTEM, C.SYSTEM, P.NORMAL,
        lambda ctx: ctx.get("title") or "System",
        lambda ctx: ctx.get("message") or "",
        lambda ctx: ctx.get("actionUrl"),
        lambda ctx: ctx.get("metadata"),
    ),
    NotificationTemplate(
        T.CONSULTANT_PENDING_REVIEW, C.SYSTEM, P.NORMAL,
        _const("New Consultant Registration"),
        lambda ctx: f"{ctx.get('consultantName')} has submitted their registration for approval",
        _const("/admin/approvals"),
        lambda ctx: {"consultant_id": ctx.get("consultantId"), "submitted_at": ctx.get("submittedAt")},
    ),
    NotificationTemplate(
        T.FARMER_STATUS_CHANGE, C.SYSTEM, P.NORMAL,
        _const("Farmer Status Changed"),
        lambda ctx: f"{ctx.get('farmerName')} status changed to {ctx.get('newStatus')}",
        _const("/admin/farmers"),
        lambda ctx: {"farmer_id": ctx.get("farmerId"), "old_status": ctx.get("oldStatus"),
                     "new_status": ctx.get("newStatus")},
    ),
]

TEMPLATES: dict[T, NotificationTemplate] = {
    t.type: t for t in (*_CONSULTANT, *_FARMER, *_SECURITY, *_SYSTEM)
}


def get_template(notification_type) -> NotificationTemplate | None:
    try:
        return TEMPLATES.get(T(notification_type))
    except ValueError:
        return None


def render(template: NotificationTemplate, recipient_id, context: Context) -> dict:
    return {
        "recipient_id": recipient_id,
        "type": template.type.value,
        "category": template.category.value,
        "priority": template.priority.value,
        "title": template.title(context),
        "message": template.message(context),
        "action_url": template.action_url(context) if template.action_url else None,
        "metadata": template.metadata(context) if template.metadata else None,
    }
