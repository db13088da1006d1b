from flask import Blueprint

bp = Blueprint("consultant", __name__, url_prefix="/api/consultant")

from . import routes  # noqa: E402,F401
