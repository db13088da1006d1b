from agrifusion.services.farmer_service import collect_filter_options


class TestCollectFilterOptions:
    def test_sorted_and_deduplicated(self):
        rows = [
            ("Pune", "Maharashtra", ["Wheat", "Rice"], "active"),
            ("Nashik", "Maharashtra", ["Rice", "Onion"], "pending"),
            ("Pune", "Maharashtra", ["Wheat"], "active"),
            ("Belgaum", "Karnataka", [], "pending"),
        ]
        out = collect_filter_options(rows)
        assert out == {
            "districts": ["Belgaum", "Nashik", "Pune"],
            "states": ["Karnataka", "Maharashtra"],
            "crops": ["Onion", "Rice", "Wheat"],
        }

    def test_rejected_and_suspended_are_excluded(self):
        rows = [
            ("Pune", "Maharashtra", ["Wheat"], "active"),
            ("Indore", "Madhya Pradesh", ["Soybean"], "rejected"),
            ("Ludhiana", "Punjab", ["Maize"], "suspended"),
            ("Mysore", "Karnataka", ["Ragi"], "approved"),
        ]
        out = collect_filter_options(rows)
        assert out["districts"] == ["Pune"]
        assert out["states"] == ["Maharashtra"]
        assert out["crops"] == ["Wheat"]

    def test_empty_values_skipped(self):
        rows = [
            ("", None, ["", "Cotton", None], "active"),
            (None, "Gujarat", None, "pending"),
        ]
        out = collect_filter_options(rows)
        assert out == {"districts": [], "states": ["Gujarat"], "crops": ["Cotton"]}

    def test_non_string_values_ignored(self):
        rows = [
            ("Pune", 42, ["Wheat", 7, {"name": "Rice"}], "active"),
            (3.5, "Goa", ["Cashew"], "pending"),
        ]
        out = collect_filter_options(rows)
        assert out == {"districts": ["Pune"], "states": ["Goa"], "crops": ["Cashew", "Wheat"]}

    def test_no_rows(self):
        assert collect_filter_options([]) == {"districts": [], "states": [], "crops": []}


class TestFiltersEndpoint:
    def test_assigned_farmer_excluded(self, client, consultant, make_farmer, auth_headers):
        make_farmer(district="Pune", state="Maharashtra", crops=["Wheat"], status="active")
        make_farmer(district="Pune", state="Maharashtra", crops=["Rice"], status="active",
                    consultant_id=consultant.id)

        resp = client.get("/api/farmers/filters", headers=auth_headers(consultant))

        assert resp.status_code == 200
        body = resp.get_json()
        assert body["districts"] == ["Pune"]
        assert body["crops"] == ["Wheat"]
        assert body["states"] == ["Maharashtra"]

    def test_status_filtering(self, client, consultant, make_farmer, auth_headers):
        make_farmer(district="Satara", crops=["Jowar"], status="pending")
        make_farmer(district="Akola", crops=["Cotton"], status="suspended")
        make_farmer(district="Latur", crops=["Tur"], status="rejected")

        body = client.get("/api/farmers/filters", headers=auth_headers(consultant)).get_json()

        assert body["districts"] == ["Satara"]
        assert body["crops"] == ["Jowar"]

    def test_farmer_role_forbidden(self, client, make_profile, auth_headers):
        farmer = make_profile(role="farmer", status="active")
        resp = client.get("/api/farmers/filters", headers=auth_headers(farmer))
        assert resp.status_code == 403
        assert resp.get_json()["error"] == "Only consultants can access this endpoint"

    def test_missing_token(self, client):
        resp = client.get("/api/farmers/filters")
        assert resp.status_code == 401
        assert "error" in resp.get_json()

    def test_invalid_token(self, client):
        resp = client.get("/api/farmers/filters", headers={"Authorization": "Bearer not-a-jwt"})
        assert resp.status_code == 401
        assert "error" in resp.get_json()

    def test_unknown_profile(self, app, client):
        from flask_jwt_extended import create_access_token
        token = create_access_token(identity="nobody")
        resp = client.get("/api/farmers/filters", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 404
        assert resp.get_json() == {"error": "Profile not found"}

    def test_backend_failure_is_500(self, client, consultant, make_farmer, auth_headers):
        from sqlalchemy import text
        from agrifusion.extensions import db

        make_farmer(district="Pune", crops=["Wheat"])
        headers = auth_headers(consultant)
        db.session.execute(text("DROP TABLE farmers"))
        db.session.commit()

        resp = client.get("/api/farmers/filters", headers=headers)

        assert resp.status_code == 500
        assert resp.get_json() == {"error": "Failed to fetch filter options"}
