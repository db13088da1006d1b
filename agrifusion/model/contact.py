from datetime import datetime

from ..extensions import db
from .types import GUID, new_id


class ContactSubmission(db.Model):
    __tablename__ = "contact_submissions"

    id = db.Column(GUID(), primary_key=True, default=new_id)
    name = db.Column(db.String(180), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    message = db.Column(db.Text, nullable=False)
    ip_address = db.Column(db.String(64))
    user_agent = db.Column(db.String(500))
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def as_api(self):
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "message": self.message,
            "ip_address": self.ip_address,
            "user_agent": self.user_agent,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
