"""Error taxonomy shared by every blueprint.

Routes and services raise these; :func:`register_error_handlers` turns them
into ``{"error": ...}`` JSON responses with the matching status code.
"""
import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

from .utils.api import api_error

logger = logging.getLogger(__name__)


class ApiError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message=None, details=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        self.details = details


class ValidationError(ApiError):
    status_code = 400
    default_message = "Invalid request"


class Unauthenticated(ApiError):
    status_code = 401
    default_message = "Unauthorized"


class Forbidden(ApiError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(ApiError):
    status_code = 404
    default_message = "Not found"


class Conflict(ApiError):
    status_code = 409
    default_message = "Conflict"


class UpstreamFailure(ApiError):
    status_code = 500
    default_message = "Backend request failed"


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(e: ApiError):
        return jsonify(api_error(e.message, e.details)), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify(api_error(e.description or e.name)), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error")
        return jsonify(api_error("Internal server error")), 500
