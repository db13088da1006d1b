from flask import jsonify, request

from . import bp
from ..model import ProfileRole
from ..services import farmer_service
from ..utils.api import api_ok
from ..utils.decorators import current_profile, role_required
from ..utils.net import parse_int

CONSULTANTS_ONLY = "Only consultants can access this endpoint"


@bp.get("/filters")
@role_required(ProfileRole.CONSULTANT, message=CONSULTANTS_ONLY)
def filters():
    return jsonify(farmer_service.unassigned_filter_options())


@bp.get("/unassigned")
@role_required(ProfileRole.CONSULTANT, message=CONSULTANTS_ONLY)
def unassigned():
    args = request.args
    result = farmer_service.list_unassigned(
        page=parse_int(args.get("page"), 1),
        limit=parse_int(args.get("limit"), farmer_service.DEFAULT_PAGE_SIZE),
        search=(args.get("search") or "").strip(),
        district=(args.get("district") or "").strip(),
        state=(args.get("state") or "").strip(),
        crops=(args.get("crops") or "").strip(),
    )
    return jsonify(result)


@bp.post("/link")
@role_required(ProfileRole.CONSULTANT, message="Only consultants can link farmers")
def link():
    data = request.get_json(silent=True) or {}
    linked = farmer_service.link_farmer(
        current_profile(), data.get("farmerId"), data.get("farmerProfileId"))
    body = api_ok("Farmer linked successfully", linked)
    return jsonify(body)
