# --- agrifusion/model/profile.py ---
from datetime import datetime

from ..extensions import db
from .enums import ProfileStatus
from .types import GUID, new_id


class Profile(db.Model):
    __tablename__ = "profiles"

    id = db.Column(GUID(), primary_key=True, default=new_id)
    auth_user_id = db.Column(db.String(64), unique=True, nullable=False, index=True)  # JWT subject
    full_name = db.Column(db.String(180))
    email = db.Column(db.String(255), index=True)
    phone = db.Column(db.String(50))
    avatar_url = db.Column(db.String(500))
    role = db.Column(db.String(20), nullable=False, index=True)  # farmer | consultant
    status = db.Column(db.String(20), nullable=False, default=ProfileStatus.PENDING.value, index=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def status_enum(self) -> ProfileStatus:
        return ProfileStatus(self.status)

    def as_dict(self):
        return {
            "id": self.id,
            "full_name": self.full_name,
            "email": self.email,
            "phone": self.phone,
            "avatar_url": self.avatar_url,
            "role": self.role,
            "status": self.status,
        }

    def __repr__(self):
        return f"<Profile {self.id} ({self.role}/{self.status})>"
