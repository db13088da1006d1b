# --- agrifusion/model/farmer.py ---
from datetime import datetime

from ..extensions import db
from .types import GUID, new_id


class Farmer(db.Model):
    __tablename__ = "farmers"

    id = db.Column(GUID(), primary_key=True, default=new_id)
    profile_id = db.Column(GUID(), db.ForeignKey("profiles.id"), unique=True, nullable=False)
    # consultant's profile id, NULL while unassigned
    consultant_id = db.Column(GUID(), db.ForeignKey("profiles.id"), nullable=True, index=True)

    farm_name = db.Column(db.String(180))
    district = db.Column(db.String(120), index=True)
    state = db.Column(db.String(120), index=True)
    land_size_acres = db.Column(db.Float)
    current_crops = db.Column(db.JSON, default=list)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    profile = db.relationship("Profile", foreign_keys=[profile_id], lazy="joined")

    def as_api(self):
        return {
            "id": self.id,
            "profile_id": self.profile_id,
            "farm_name": self.farm_name,
            "district": self.district,
            "state": self.state,
            "land_size_acres": self.land_size_acres,
            "current_crops": list(self.current_crops or []),
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "profiles": self.profile.as_dict() if self.profile else None,
        }


class Consultant(db.Model):
    __tablename__ = "consultants"

    id = db.Column(GUID(), primary_key=True, default=new_id)
    profile_id = db.Column(GUID(), db.ForeignKey("profiles.id"), unique=True, nullable=False)
    farmer_count = db.Column(db.Integer, nullable=False, default=0)

    qualification = db.Column(db.String(255))
    specialization_areas = db.Column(db.JSON, default=list)
    experience_years = db.Column(db.Integer)
    country = db.Column(db.String(100))
    state = db.Column(db.String(100))
    district = db.Column(db.String(100))
    service_country = db.Column(db.String(100))
    service_state = db.Column(db.String(100))
    service_district = db.Column(db.String(100))
    certificate_urls = db.Column(db.JSON, default=list)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    profile = db.relationship("Profile", foreign_keys=[profile_id])

    def as_api(self):
        return {
            "id": self.id,
            "qualification": self.qualification,
            "specialization_areas": list(self.specialization_areas or []),
            "experience_years": self.experience_years,
            "country": self.country or "",
            "state": self.state or "",
            "district": self.district or "",
            "service_country": self.service_country or "",
            "service_state": self.service_state or "",
            "service_district": self.service_district or "",
            "certificate_urls": list(self.certificate_urls or []),
            "farmer_count": self.farmer_count or 0,
        }
