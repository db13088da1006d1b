# agrifusion/services/farmer_service.py
import logging
import uuid
from datetime import datetime
from math import ceil

from sqlalchemy.exc import SQLAlchemyError

from ..errors import Conflict, NotFound, UpstreamFailure, ValidationError
from ..extensions import db
from ..model import Consultant, Farmer, Profile, ProfileStatus, VISIBLE_FARMER_STATUSES
from ..model.types import is_uuid
from .notification_service import NotificationService, farmer_consultant_link_notifications

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 50
DEFAULT_PAGE_SIZE = 20


# ---------- filter options ----------

def collect_filter_options(rows):
    """Distinct, sorted filter values from ``(district, state, crops, status)`` rows.

    Rows whose profile status is not visible to consultants are skipped, as
    are empty strings.
    """
    districts, states, crops = set(), set(), set()
    for district, state, current_crops, status in rows:
        if status not in VISIBLE_FARMER_STATUSES:
            continue
        if district and isinstance(district, str):
            districts.add(district)
        if state and isinstance(state, str):
            states.add(state)
        if isinstance(current_crops, (list, tuple)):
            crops.update(c for c in current_crops if c and isinstance(c, str))
    return {
        "districts": sorted(districts),
        "states": sorted(states),
        "crops": sorted(crops),
    }


def unassigned_filter_options():
    try:
        rows = (
            db.session.query(Farmer.district, Farmer.state, Farmer.current_crops, Profile.status)
            .join(Profile, Farmer.profile_id == Profile.id)
            .filter(Farmer.consultant_id.is_(None))
            .all()
        )
    except SQLAlchemyError as e:
        logger.error("Farmers fetch error: %s", e)
        raise UpstreamFailure("Failed to fetch filter options")
    return collect_filter_options(rows)


# ---------- unassigned listing ----------

def _parse_crops(raw):
    if not raw:
        return []
    return [c.strip() for c in raw.split(",") if c.strip()]


def _matches_search(farmer: Farmer, needle: str) -> bool:
    p = farmer.profile
    haystack = (p.full_name, p.email, p.phone, farmer.district, farmer.state)
    return any(needle in (v or "").lower() for v in haystack)


def list_unassigned(page=1, limit=DEFAULT_PAGE_SIZE, search="", district="", state="", crops=""):
    page = max(1, page)
    limit = min(MAX_PAGE_SIZE, max(1, limit))
    wanted_crops = set(_parse_crops(crops))
    needle = (search or "").strip().lower()

    q = (
        Farmer.query
        .join(Profile, Farmer.profile_id == Profile.id)
        .filter(Farmer.consultant_id.is_(None))
        .filter(Profile.status.in_(VISIBLE_FARMER_STATUSES))
    )
    if district:
        q = q.filter(Farmer.district == district)
    if state:
        q = q.filter(Farmer.state == state)

    try:
        candidates = q.order_by(Farmer.created_at.desc()).all()
    except SQLAlchemyError as e:
        logger.error("Unassigned farmers fetch error: %s", e)
        raise UpstreamFailure("Failed to fetch farmers")

    # JSON crop lists and free-text search are matched in Python so the
    # query stays portable between SQLite and Postgres
    matched = [
        f for f in candidates
        if (not wanted_crops or wanted_crops.intersection(f.current_crops or []))
        and (not needle or _matches_search(f, needle))
    ]

    total = len(matched)
    offset = (page - 1) * limit
    return {
        "farmers": [f.as_api() for f in matched[offset:offset + limit]],
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "totalPages": ceil(total / limit) if total else 0,
        },
    }


# ---------- linking ----------

def link_farmer(consultant_profile: Profile, farmer_id, farmer_profile_id):
    """Assign an unassigned farmer to ``consultant_profile``.

    The farmer row is only updated while ``consultant_id`` is still NULL; losing
    that race to another consultant raises :class:`Conflict`.
    """
    if not farmer_id or not farmer_profile_id:
        raise ValidationError("Missing required fields: farmerId and farmerProfileId")

    consultant = Consultant.query.filter_by(profile_id=consultant_profile.id).first()
    if consultant is None:
        raise NotFound("Consultant record not found")

    farmer = db.session.get(Farmer, str(farmer_id)) if is_uuid(farmer_id) else None
    if farmer is None:
        raise NotFound("Farmer not found")
    if farmer.consultant_id:
        raise ValidationError("Farmer is already assigned to a consultant")
    if not is_uuid(farmer_profile_id) or farmer.profile_id != str(uuid.UUID(str(farmer_profile_id))):
        raise ValidationError("Farmer profile ID mismatch")

    now = datetime.utcnow()
    try:
        updated = (
            Farmer.query
            .filter(Farmer.id == farmer.id, Farmer.consultant_id.is_(None))
            .update({"consultant_id": consultant_profile.id, "updated_at": now},
                    synchronize_session=False)
        )
        if updated == 0:
            db.session.rollback()
            raise Conflict("The farmer may have been assigned to another consultant.")

        farmer_profile = farmer.profile
        farmer_profile.status = ProfileStatus.ACTIVE.value
        farmer_profile.updated_at = now
        # incremented in SQL so concurrent links by one consultant both count
        (Consultant.query
         .filter_by(id=consultant.id)
         .update({Consultant.farmer_count: Consultant.farmer_count + 1},
                 synchronize_session=False))

        NotificationService(db.session).create_many(
            farmer_consultant_link_notifications(
                farmer_profile_id=farmer_profile.id,
                farmer_name=farmer_profile.full_name or "A farmer",
                consultant_profile_id=consultant_profile.id,
                consultant_name=consultant_profile.full_name or "Your consultant",
            ),
            commit=False,
        )
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error("Link error for farmer %s: %s", farmer_id, e)
        raise UpstreamFailure("Failed to link farmer")

    logger.info("Farmer %s linked to consultant %s", farmer.id, consultant.id)
    return {"farmerId": farmer.id, "consultantId": consultant.id}
