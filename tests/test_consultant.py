import pytest

from agrifusion.extensions import db
from agrifusion.model import Notification, Profile, ProfileStatus
from agrifusion.services.approval import ApprovalState, approval_state, approval_summary


@pytest.mark.parametrize("status,expected", [
    (ProfileStatus.APPROVED, ApprovalState.APPROVED),
    (ProfileStatus.ACTIVE, ApprovalState.APPROVED),
    (ProfileStatus.PENDING, ApprovalState.PENDING),
    (ProfileStatus.REJECTED, ApprovalState.REJECTED),
    (ProfileStatus.SUSPENDED, ApprovalState.SUSPENDED),
])
def test_every_status_is_mapped(status, expected):
    assert approval_state(status) is expected


def test_summary_flags():
    s = approval_summary("pending")
    assert s["is_pending"] is True
    assert s["is_approved"] is False


def test_approval_status_endpoint(client, make_profile, auth_headers):
    pending = make_profile(role="consultant", status="pending")
    body = client.get("/api/consultant/approval-status", headers=auth_headers(pending)).get_json()
    assert body["status"] == "pending"
    assert body["is_pending"] is True


def test_farmers_get_403(client, make_profile, auth_headers):
    farmer = make_profile(role="farmer", status="active")
    resp = client.get("/api/consultant/approval-status", headers=auth_headers(farmer))
    assert resp.status_code == 403


def _valid_payload(**overrides):
    payload = {
        "full_name": "  Asha Rao ",
        "email": "Asha.Rao@Example.com",
        "phone": "+919876543210",
        "avatar_url": "https://cdn.example.com/a.png",
        "qualification": "MSc Agronomy",
        "specialization_areas": ["Soil health", "  ", 5, "Irrigation"],
        "experience_years": 8,
        "state": "Maharashtra",
        "service_district": "Pune",
    }
    payload.update(overrides)
    return payload


class TestConsultantProfile:
    def test_get_profile(self, client, consultant, auth_headers):
        resp = client.get("/api/consultant/profile", headers=auth_headers(consultant))

        assert resp.status_code == 200
        data = resp.get_json()["data"]
        assert data["id"] == consultant.id
        assert data["full_name"] == "Asha Consultant"
        assert data["consultant"]["specialization_areas"] == []
        assert data["consultant"]["country"] == ""

    def test_update_profile(self, client, consultant, auth_headers):
        resp = client.put("/api/consultant/profile", headers=auth_headers(consultant),
                          json=_valid_payload())

        assert resp.status_code == 200
        data = resp.get_json()["data"]
        assert data["full_name"] == "Asha Rao"
        assert data["email"] == "asha.rao@example.com"
        assert data["consultant"]["specialization_areas"] == ["Soil health", "Irrigation"]
        assert data["consultant"]["experience_years"] == 8
        assert data["consultant"]["service_district"] == "Pune"
        assert data["consultant"]["district"] == ""

        notes = Notification.query.filter_by(recipient_id=consultant.id).all()
        assert [n.type for n in notes] == ["settings_updated"]

    def test_field_errors_are_reported_together(self, client, consultant, auth_headers):
        bad = _valid_payload(full_name=" ", email="not-an-email", phone="12345",
                             avatar_url="nota url", specialization_areas="Soil",
                             experience_years=2.5, country="x" * 101)

        resp = client.put("/api/consultant/profile", headers=auth_headers(consultant), json=bad)

        assert resp.status_code == 400
        body = resp.get_json()
        assert body["error"] == "Validation failed"
        assert set(body["details"]) == {
            "full_name", "email", "phone", "avatar_url",
            "specialization_areas", "experience_years", "country",
        }
        assert Notification.query.count() == 0
        db.session.expire_all()
        assert db.session.get(Profile, consultant.id).full_name == "Asha Consultant"

    @pytest.mark.parametrize("years,message", [
        (None, "Experience years is required"),
        (True, "Experience years must be a whole number"),
        (-1, "Experience years cannot be negative"),
        (101, "Experience years cannot exceed 100"),
    ])
    def test_experience_years_rules(self, client, consultant, auth_headers, years, message):
        resp = client.put("/api/consultant/profile", headers=auth_headers(consultant),
                          json=_valid_payload(experience_years=years))
        assert resp.get_json()["details"] == {"experience_years": message}

    def test_pakistani_numbers_need_ten_digits(self, client, consultant, auth_headers):
        resp = client.put("/api/consultant/profile", headers=auth_headers(consultant),
                          json=_valid_payload(phone="+92123456789"))
        assert resp.get_json()["details"] == {
            "phone": "Pakistani phone numbers must be exactly 10 digits"}

    def test_email_in_use(self, client, consultant, make_profile, auth_headers):
        make_profile(role="farmer", email="taken@example.com")
        resp = client.put("/api/consultant/profile", headers=auth_headers(consultant),
                          json=_valid_payload(email="TAKEN@example.com"))
        assert resp.status_code == 400
        assert resp.get_json()["details"] == {"email": "This email address is already in use"}

    def test_farmer_cannot_update(self, client, make_profile, auth_headers):
        farmer = make_profile(role="farmer", status="active")
        resp = client.put("/api/consultant/profile", headers=auth_headers(farmer),
                          json=_valid_payload())
        assert resp.status_code == 403
        assert resp.get_json() == {"error": "Only consultants can update this profile"}


def test_json_keys_keep_insertion_order(app):
    assert app.json.sort_keys is False
