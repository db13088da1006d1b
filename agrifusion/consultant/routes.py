from flask import jsonify, request

from . import bp
from ..model import ProfileRole
from ..services import consultant_service
from ..services.approval import approval_summary
from ..utils.api import api_ok
from ..utils.decorators import current_profile, role_required

CONSULTANTS_ONLY = "Only consultants can access this endpoint"


@bp.get("/approval-status")
@role_required(ProfileRole.CONSULTANT, message=CONSULTANTS_ONLY)
def approval_status():
    return jsonify(approval_summary(current_profile().status_enum))


@bp.get("/profile")
@role_required(ProfileRole.CONSULTANT, message=CONSULTANTS_ONLY)
def get_profile():
    return jsonify(success=True, data=consultant_service.get_profile(current_profile()))


@bp.put("/profile")
@role_required(ProfileRole.CONSULTANT, message="Only consultants can update this profile")
def update_profile():
    data = request.get_json(silent=True) or {}
    updated = consultant_service.update_profile(current_profile(), data)
    return jsonify(api_ok("Profile updated successfully", updated))
