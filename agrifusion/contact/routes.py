import logging

from flask import jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from . import bp
from ..errors import UpstreamFailure, ValidationError
from ..extensions import db
from ..model import ContactSubmission
from ..utils.net import get_client_ip

logger = logging.getLogger(__name__)


@bp.post("")
def submit():
    data = request.get_json(silent=True) or {}
    name = (data.get("name") or "").strip()
    email = (data.get("email") or "").strip()
    message = (data.get("message") or "").strip()
    if not name or not email or not message:
        raise ValidationError("Missing required fields")

    sub = ContactSubmission(
        name=name,
        email=email,
        message=message,
        ip_address=get_client_ip(),
        user_agent=request.headers.get("User-Agent"),
    )
    try:
        db.session.add(sub)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error("Contact form insert failed: %s", e)
        raise UpstreamFailure("Failed to submit contact form")

    logger.info("Contact submission %s from %s", sub.id, sub.ip_address)
    return jsonify(success=True, data=sub.as_api()), 200
