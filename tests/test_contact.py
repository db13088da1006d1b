from agrifusion.model import ContactSubmission


def test_submission_is_stored(client):
    resp = client.post(
        "/api/contact",
        json={"name": "  Meera ", "email": "meera@example.com ", "message": " Hello there "},
        headers={"X-Forwarded-For": "203.0.113.7, 10.0.0.1", "User-Agent": "pytest-agent"},
    )
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    assert body["data"]["name"] == "Meera"

    row = ContactSubmission.query.one()
    assert row.email == "meera@example.com"
    assert row.message == "Hello there"
    assert row.ip_address == "203.0.113.7"
    assert row.user_agent == "pytest-agent"


def test_real_ip_header(client):
    client.post("/api/contact", json={"name": "a", "email": "b@c.d", "message": "m"},
                headers={"X-Real-IP": "198.51.100.2"})
    assert ContactSubmission.query.one().ip_address == "198.51.100.2"


def test_blank_fields_rejected(client):
    resp = client.post("/api/contact", json={"name": "a", "email": " ", "message": "m"})
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Missing required fields"}
    assert ContactSubmission.query.count() == 0
