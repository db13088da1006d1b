# agrifusion/services/consultant_service.py
import logging
import re
from datetime import datetime
from urllib.parse import urlparse

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..errors import Conflict, NotFound, UpstreamFailure, ValidationError
from ..extensions import db
from ..model import Consultant, NotificationType, Profile
from .notification_service import NotificationService

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
PHONE_RE = re.compile(r"^\+(\d{1,4})(\d{7,15})$")

_LOCATION_FIELDS = {
    "country": "Country name",
    "state": "State name",
    "district": "District name",
    "service_country": "Service country name",
    "service_state": "Service state name",
    "service_district": "Service district name",
}


def _text(v):
    return v.strip() if isinstance(v, str) else ""


def _consultant_for(profile: Profile) -> Consultant:
    consultant = Consultant.query.filter_by(profile_id=profile.id).first()
    if consultant is None:
        raise NotFound("Consultant record not found")
    return consultant


def get_profile(profile: Profile):
    consultant = _consultant_for(profile)
    return {
        "id": profile.id,
        "full_name": profile.full_name,
        "email": profile.email,
        "phone": profile.phone,
        "avatar_url": profile.avatar_url,
        "consultant": consultant.as_api(),
    }


def _valid_url(value):
    parsed = urlparse(value)
    return bool(parsed.scheme and parsed.netloc)


def clean_profile_payload(data: dict, profile: Profile):
    """Trim and validate a profile update.

    Returns the cleaned values or raises :class:`ValidationError` whose
    ``details`` maps each bad field to a message.
    """
    errors = {}
    full_name = _text(data.get("full_name"))
    email = _text(data.get("email")).lower()
    phone = _text(data.get("phone"))
    avatar_url = _text(data.get("avatar_url"))
    qualification = _text(data.get("qualification"))
    raw_specs = data.get("specialization_areas")
    specs = [s.strip() for s in raw_specs if isinstance(s, str) and s.strip()] \
        if isinstance(raw_specs, list) else []
    experience = data.get("experience_years")
    locations = {k: _text(data.get(k)) for k in _LOCATION_FIELDS}

    if not full_name:
        errors["full_name"] = "Full name is required"
    elif len(full_name) > 255:
        errors["full_name"] = "Full name cannot exceed 255 characters"

    if not email:
        errors["email"] = "Email is required"
    elif not EMAIL_RE.match(email):
        errors["email"] = "Please enter a valid email address"
    elif len(email) > 255:
        errors["email"] = "Email cannot exceed 255 characters"
    elif email != (profile.email or "").lower():
        taken = Profile.query.filter(Profile.email == email, Profile.id != profile.id).first()
        if taken:
            errors["email"] = "This email address is already in use"

    if phone:
        m = PHONE_RE.match(phone)
        if not m:
            errors["phone"] = "Invalid phone format. Use +{countryCode}{number}"
        elif m.group(1) == "92" and len(m.group(2)) != 10:
            errors["phone"] = "Pakistani phone numbers must be exactly 10 digits"

    if avatar_url and not _valid_url(avatar_url):
        errors["avatar_url"] = "Invalid avatar URL"

    if not qualification:
        errors["qualification"] = "Qualification is required"
    elif len(qualification) > 255:
        errors["qualification"] = "Qualification cannot exceed 255 characters"

    if not isinstance(raw_specs, list):
        errors["specialization_areas"] = "Specialization areas must be an array"
    elif not specs:
        errors["specialization_areas"] = "Please select at least one specialization area"
    elif any(len(s) > 100 for s in specs):
        errors["specialization_areas"] = "Each specialization cannot exceed 100 characters"

    # bool is an int subclass, reject it explicitly
    if experience is None:
        errors["experience_years"] = "Experience years is required"
    elif isinstance(experience, bool) or not isinstance(experience, int):
        errors["experience_years"] = "Experience years must be a whole number"
    elif experience < 0:
        errors["experience_years"] = "Experience years cannot be negative"
    elif experience > 100:
        errors["experience_years"] = "Experience years cannot exceed 100"

    for field, label in _LOCATION_FIELDS.items():
        if len(locations[field]) > 100:
            errors[field] = f"{label} cannot exceed 100 characters"

    if errors:
        raise ValidationError("Validation failed", details=errors)

    return {
        "profile": {
            "full_name": full_name,
            "email": email,
            "phone": phone or None,
            "avatar_url": avatar_url or None,
        },
        "consultant": {
            "qualification": qualification,
            "specialization_areas": specs,
            "experience_years": experience,
            **{k: v or None for k, v in locations.items()},
        },
    }


def update_profile(profile: Profile, data: dict):
    consultant = _consultant_for(profile)
    cleaned = clean_profile_payload(data, profile)
    now = datetime.utcnow()
    try:
        for k, v in cleaned["profile"].items():
            setattr(profile, k, v)
        profile.updated_at = now
        for k, v in cleaned["consultant"].items():
            setattr(consultant, k, v)
        consultant.updated_at = now
        NotificationService(db.session).create_from_template(
            NotificationType.SETTINGS_UPDATED, profile.id, {}, commit=False)
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        logger.warning("Profile update conflict for %s: %s", profile.id, e)
        raise Conflict("Email already in use",
                       details={"email": "This email address is already registered"})
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error("Consultant profile update failed for %s: %s", profile.id, e)
        raise UpstreamFailure("Failed to update profile")

    logger.info("Consultant profile %s updated", profile.id)
    return get_profile(profile)
