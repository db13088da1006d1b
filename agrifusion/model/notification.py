#  --- agrifusion/model/notification.py ---
from datetime import datetime

from ..extensions import db
from .types import GUID, new_id


class Notification(db.Model):
    __tablename__ = "notifications"

    id = db.Column(GUID(), primary_key=True, default=new_id)
    recipient_id = db.Column(GUID(), db.ForeignKey("profiles.id"), nullable=False, index=True)
    type = db.Column(db.String(50), nullable=False)
    title = db.Column(db.String(255), nullable=False)
    message = db.Column(db.Text)
    is_read = db.Column(db.Boolean, nullable=False, default=False, index=True)
    read_at = db.Column(db.DateTime)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    priority = db.Column(db.String(20))
    category = db.Column(db.String(30), index=True)
    action_url = db.Column(db.String(500))
    # "metadata" is reserved on declarative models
    meta = db.Column("metadata", db.JSON)
    expires_at = db.Column(db.DateTime)

    def as_api(self):
        return {
            "id": self.id,
            "recipient_id": self.recipient_id,
            "type": self.type,
            "title": self.title,
            "message": self.message,
            "is_read": bool(self.is_read),
            "read_at": self.read_at.isoformat() if self.read_at else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "priority": self.priority,
            "category": self.category,
            "action_url": self.action_url,
            "metadata": self.meta,
            "expires_at": self.expires_at.isoformat() if self.expires_at else None,
        }
