# --- agrifusion/__init__.py ---
import logging

from flask import Flask, jsonify

from .config import Config
from .extensions import db, jwt, cors, migrate
from .errors import register_error_handlers
from .utils.api import api_error


def _configure_logging(app):
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger("agrifusion").setLevel(level)
    app.logger.setLevel(level)


def _register_jwt_loaders():
    # every token problem is a 401 with the usual {"error": ...} body
    @jwt.unauthorized_loader
    def missing_token(reason):
        return jsonify(api_error("Missing authorization header")), 401

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return jsonify(api_error("Unauthorized")), 401

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return jsonify(api_error("Token has expired")), 401


def create_app(config_class=Config):
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_class)
    config_class.init_app(app)
    _configure_logging(app)
    app.json.sort_keys = False

    # Init extensions
    db.init_app(app)
    jwt.init_app(app)
    cors.init_app(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}})
    migrate.init_app(app, db)
    _register_jwt_loaders()
    register_error_handlers(app)

    # Register blueprints
    from .farmers import bp as farmers_bp; app.register_blueprint(farmers_bp)
    from .notification import bp as notification_bp; app.register_blueprint(notification_bp)
    from .consultant import bp as consultant_bp; app.register_blueprint(consultant_bp)
    from .contact import bp as contact_bp; app.register_blueprint(contact_bp)

    from .cli import register_cli
    register_cli(app)

    @app.get("/")
    def health():
        return jsonify(ok=True, msg="API running")

    with app.app_context():
        from . import model  # noqa: F401  (tables must be registered before create_all)
        db.create_all()

    app.logger.info("AgriFusion API ready (%s)", app.config["SQLALCHEMY_DATABASE_URI"].split("://")[0])
    return app
