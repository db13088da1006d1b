import uuid

import pytest
from flask_jwt_extended import create_access_token

from agrifusion import create_app
from agrifusion.config import TestingConfig
from agrifusion.extensions import db
from agrifusion.model import Consultant, Farmer, Notification, Profile


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_profile(app):
    def _make(role="farmer", status="pending", name=None, email=None, phone=None):
        p = Profile(
            auth_user_id=str(uuid.uuid4()),
            role=role,
            status=status,
            full_name=name or f"{role.title()} {uuid.uuid4().hex[:6]}",
            email=email or f"{uuid.uuid4().hex[:8]}@example.com",
            phone=phone,
        )
        db.session.add(p)
        db.session.flush()
        if role == "consultant":
            db.session.add(Consultant(profile_id=p.id))
        db.session.commit()
        return p
    return _make


@pytest.fixture
def make_farmer(make_profile):
    def _make(district=None, state=None, crops=None, status="active", consultant_id=None,
              name=None, email=None, phone=None):
        p = make_profile(role="farmer", status=status, name=name, email=email, phone=phone)
        f = Farmer(
            profile_id=p.id,
            consultant_id=consultant_id,
            district=district,
            state=state,
            current_crops=list(crops or []),
        )
        db.session.add(f)
        db.session.commit()
        return f
    return _make


@pytest.fixture
def make_notification(app):
    def _make(recipient, title="Hello", is_read=False, category="system", type="system"):
        n = Notification(
            recipient_id=recipient.id,
            type=type,
            title=title,
            message=f"{title} message",
            category=category,
            priority="normal",
            is_read=is_read,
        )
        db.session.add(n)
        db.session.commit()
        return n
    return _make


@pytest.fixture
def auth_headers(app):
    def _headers(profile):
        token = create_access_token(identity=profile.auth_user_id)
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def consultant(make_profile):
    return make_profile(role="consultant", status="approved", name="Asha Consultant")
