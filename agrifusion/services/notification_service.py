# agrifusion/services/notification_service.py
import logging
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError

from ..errors import UpstreamFailure, ValidationError
from ..extensions import db
from ..model import Notification, NotificationType
from .notification_templates import get_template, render

logger = logging.getLogger(__name__)

_FIELDS = ("recipient_id", "type", "title", "message", "priority", "category",
           "action_url", "expires_at")


def _to_row(data: dict) -> Notification:
    if not data.get("recipient_id") or not data.get("type") or not data.get("title"):
        raise ValidationError("recipient_id, type and title are required")
    n = Notification(**{k: data.get(k) for k in _FIELDS})
    n.meta = data.get("metadata")
    return n


class NotificationService:
    """Reads and writes the ``notifications`` collection through one session.

    Every database failure rolls the session back and surfaces as
    :class:`UpstreamFailure`; nothing is retried.
    """

    def __init__(self, session):
        self.session = session

    def _fail(self, what, e):
        self.session.rollback()
        logger.error("Failed to %s: %s", what, e)
        raise UpstreamFailure(f"Failed to {what}") from e

    # ---------- create ----------

    def create(self, notification: dict, commit=True) -> Notification:
        row = _to_row(notification)
        try:
            self.session.add(row)
            if commit:
                self.session.commit()
        except SQLAlchemyError as e:
            self._fail("create notification", e)
        return row

    def create_many(self, notifications, commit=True):
        rows = [_to_row(n) for n in notifications]
        if not rows:
            return []
        try:
            self.session.add_all(rows)
            if commit:
                self.session.commit()
        except SQLAlchemyError as e:
            self._fail("create notifications", e)
        return rows

    def create_from_template(self, notification_type, recipient_id, context=None, commit=True):
        template = get_template(notification_type)
        if template is None:
            logger.error("Unknown notification type: %s", notification_type)
            raise ValidationError(f"Unknown notification type: {notification_type}")
        return self.create(render(template, recipient_id, context or {}), commit=commit)

    # ---------- read state ----------

    def mark_as_read(self, notification_id):
        try:
            (self.session.query(Notification)
             .filter(Notification.id == notification_id, Notification.is_read.is_(False))
             .update({"is_read": True, "read_at": datetime.utcnow()}, synchronize_session=False))
            self.session.commit()
        except SQLAlchemyError as e:
            self._fail("mark notification as read", e)
        logger.info("Notification %s marked as read", notification_id)

    def mark_all_as_read(self, recipient_id):
        try:
            count = (self.session.query(Notification)
                     .filter(Notification.recipient_id == recipient_id,
                             Notification.is_read.is_(False))
                     .update({"is_read": True, "read_at": datetime.utcnow()},
                             synchronize_session=False))
            self.session.commit()
        except SQLAlchemyError as e:
            self._fail("mark all notifications as read", e)
        logger.info("Marked %s notifications read for %s", count, recipient_id)
        return count

    def delete(self, notification_id):
        try:
            self.session.query(Notification).filter(Notification.id == notification_id).delete(
                synchronize_session=False)
            self.session.commit()
        except SQLAlchemyError as e:
            self._fail("delete notification", e)
        logger.info("Notification %s deleted", notification_id)

    # ---------- queries ----------

    def get(self, notification_id):
        try:
            return self.session.get(Notification, notification_id)
        except SQLAlchemyError as e:
            self._fail("fetch notification", e)

    def get_for_recipient(self, recipient_id, limit=None, offset=None, unread_only=False,
                          category=None):
        q = (self.session.query(Notification)
             .filter(Notification.recipient_id == recipient_id)
             .order_by(Notification.created_at.desc()))
        if unread_only:
            q = q.filter(Notification.is_read.is_(False))
        if category:
            q = q.filter(Notification.category == category)
        if offset:
            q = q.offset(offset).limit(limit or 10)
        elif limit:
            q = q.limit(limit)
        try:
            return q.all()
        except SQLAlchemyError as e:
            self._fail("fetch notifications", e)


class NotificationInbox:
    """One recipient's loaded notification list and its read-state operations.

    Each mutation goes straight to the service and then reloads the list, so
    ``unread_count`` always reflects what was last read back from the store.
    """

    def __init__(self, service: NotificationService, recipient_id, **query):
        self.service = service
        self.recipient_id = recipient_id
        self.query = query
        self.notifications: list[Notification] = []

    @property
    def unread_count(self) -> int:
        return sum(1 for n in self.notifications if not n.is_read)

    def refresh(self):
        self.notifications = self.service.get_for_recipient(self.recipient_id, **self.query)
        return self

    def mark_as_read(self, notification_id):
        self.service.mark_as_read(notification_id)
        return self.refresh()

    def mark_all_as_read(self):
        self.service.mark_all_as_read(self.recipient_id)
        return self.refresh()

    def delete(self, notification_id):
        self.service.delete(notification_id)
        return self.refresh()

    def as_api(self):
        return {
            "notifications": [n.as_api() for n in self.notifications],
            "unread_count": self.unread_count,
        }


# ---------- helpers ----------

def _service(service):
    return service or NotificationService(db.session)


def farmer_consultant_link_notifications(farmer_profile_id, farmer_name,
                                         consultant_profile_id, consultant_name):
    return [
        {
            "recipient_id": farmer_profile_id,
            "type": NotificationType.CONSULTANT_ASSIGNED.value,
            "category": "relationship",
            "priority": "high",
            "title": "Consultant Assigned",
            "message": f"{consultant_name} is now your agricultural consultant",
            "action_url": "/dashboard/farmer/consultant",
            "metadata": {"consultant_id": consultant_profile_id},
        },
        {
            "recipient_id": consultant_profile_id,
            "type": NotificationType.FARMER_LINKED.value,
            "category": "relationship",
            "priority": "normal",
            "title": "New Farmer Added",
            "message": f"{farmer_name} has been added to your network",
            "action_url": "/dashboard/consultant/farmers",
            "metadata": {"farmer_id": farmer_profile_id},
        },
    ]


def notify_consultant_assigned(farmer_id, consultant_name, consultant_id, service=None):
    return _service(service).create_from_template(
        NotificationType.CONSULTANT_ASSIGNED, farmer_id,
        {"consultantName": consultant_name, "consultantId": consultant_id})


def notify_farmer_linked(consultant_id, farmer_name, farmer_id, service=None):
    return _service(service).create_from_template(
        NotificationType.FARMER_LINKED, consultant_id,
        {"farmerName": farmer_name, "farmerId": farmer_id})


def notify_farmer_consultant_link(farmer_id, farmer_name, consultant_id, consultant_name,
                                  service=None):
    return _service(service).create_many(
        farmer_consultant_link_notifications(farmer_id, farmer_name, consultant_id, consultant_name))


def notify_consultant_removed(farmer_id, consultant_name, consultant_id, reason=None, service=None):
    return _service(service).create_from_template(
        NotificationType.CONSULTANT_REMOVED, farmer_id,
        {"consultantName": consultant_name, "consultantId": consultant_id, "reason": reason})


def notify_farmer_created(consultant_id, farmer_name, farmer_id, service=None):
    return _service(service).create_from_template(
        NotificationType.FARMER_CREATED, consultant_id,
        {"farmerName": farmer_name, "farmerId": farmer_id})


def notify_account_activated(farmer_id, service=None):
    return _service(service).create_from_template(NotificationType.ACCOUNT_ACTIVATED, farmer_id, {})


def notify_farm_setup(farmer_id, farm_name, land_size, crops=None, service=None):
    return _service(service).create_from_template(
        NotificationType.FARM_SETUP, farmer_id,
        {"farmName": farm_name, "landSize": land_size, "crops": crops})


def notify_profile_update(recipient_id, updated_by=None, service=None):
    return _service(service).create_from_template(
        NotificationType.PROFILE_UPDATE, recipient_id, {"updatedBy": updated_by})


def notify_security_alert(recipient_id, alert_type, message, action_url=None, metadata=None,
                          service=None):
    return _service(service).create_from_template(
        NotificationType.SECURITY_ALERT, recipient_id,
        {"alertType": alert_type, "message": message, "actionUrl": action_url,
         "metadata": metadata})


def notify_approval_status(consultant_id, status, reason=None, service=None):
    if status == "approved":
        ntype = NotificationType.APPROVAL_SUCCESS
    elif status == "rejected":
        ntype = NotificationType.APPROVAL_REJECTED
    else:
        raise ValidationError(f"Unsupported approval status: {status}")
    return _service(service).create_from_template(ntype, consultant_id, {"reason": reason})


def notify_avatar_updated(recipient_id, service=None):
    return _service(service).create_from_template(NotificationType.AVATAR_UPDATED, recipient_id, {})


def notify_settings_updated(consultant_id, service=None):
    return _service(service).create_from_template(NotificationType.SETTINGS_UPDATED, consultant_id, {})
