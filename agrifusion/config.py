import os
from datetime import timedelta


def _database_url():
    url = os.getenv("DATABASE_URL")
    # hosted postgres hands out postgres://, SQLAlchemy wants postgresql://
    if url and url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)
    return url


class Config:
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JWT_SECRET_KEY = os.environ.get("JWT_SECRET_KEY", "dev-secret-change-me")
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=1)
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    @staticmethod
    def init_app(app):
        url = _database_url()
        if not url:
            os.makedirs(app.instance_path, exist_ok=True)
            url = f"sqlite:///{os.path.join(app.instance_path, 'agrifusion.db')}"
        app.config.setdefault("SQLALCHEMY_DATABASE_URI", url)


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    JWT_SECRET_KEY = "testing-secret-key-at-least-32-bytes"
    LOG_LEVEL = "WARNING"

    @staticmethod
    def init_app(app):
        pass
