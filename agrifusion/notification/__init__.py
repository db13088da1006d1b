from flask import Blueprint

bp = Blueprint("notification", __name__, url_prefix="/api/notifications")

from . import routes  # noqa: E402,F401
