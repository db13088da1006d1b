# ------- agrifusion/utils/decorators.py -------
import logging
from functools import wraps

from flask import g
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request

from ..errors import Forbidden, NotFound, Unauthenticated
from ..model import Profile

logger = logging.getLogger(__name__)


def _current_profile():
    """Resolve the bearer token to a Profile.

    Missing or malformed tokens raise inside ``verify_jwt_in_request`` and are
    rendered as 401 by the JWT loaders registered in the app factory.
    """
    verify_jwt_in_request()
    subject = get_jwt_identity()
    if not subject:
        raise Unauthenticated()
    profile = Profile.query.filter_by(auth_user_id=str(subject)).first()
    if profile is None:
        logger.warning("No profile for auth user %s", subject)
        raise NotFound("Profile not found")
    return profile


def current_profile() -> Profile:
    return g.profile


def profile_required(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        g.profile = _current_profile()
        return fn(*args, **kwargs)
    return wrapper


def role_required(*roles, message: str | None = None):
    allowed = {getattr(r, "value", r) for r in roles}

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            p = _current_profile()
            if p.role not in allowed:
                raise Forbidden(message or "Forbidden")
            g.profile = p
            return fn(*args, **kwargs)
        return wrapper
    return decorator
