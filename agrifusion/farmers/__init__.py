from flask import Blueprint

bp = Blueprint("farmers", __name__, url_prefix="/api/farmers")

from . import routes  # noqa: E402,F401
