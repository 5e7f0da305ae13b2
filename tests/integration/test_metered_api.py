from app.models.account import Role
from tests.conftest import PASSWORD, auth_header


def login(client, email="alice@example.com"):
    response = client.post("/api/auth/login", json={"email": email, "password": PASSWORD})
    assert response.status_code == 200
    return response.json()["token"]


class TestMeteredEndpoint:
    def test_essential_plan_scenario(self, client, make_account):
        make_account(plan="essential")
        headers = auth_header(login(client))

        for expected in range(1, 26):
            response = client.get("/api/metered/iaSearchQuota", headers=headers)
            assert response.status_code == 200
            assert response.json()["used"] == expected

        response = client.get("/api/metered/iaSearchQuota", headers=headers)
        assert response.status_code == 402
        body = response.json()
        assert body["upgrade"] is True
        assert body["message"] == "Quota exceeded"
        assert body["used"] == 25

        me = client.get("/api/auth/me", headers=headers).json()
        assert me["usage"]["iaSearchQuota"] == 25
        assert me["remaining"]["iaSearchQuota"] == 0

    def test_unlimited_plan(self, client, make_account):
        make_account(plan="enterprise")
        headers = auth_header(login(client))

        for _ in range(30):
            response = client.get("/api/metered/suggestionQuota", headers=headers)
            assert response.status_code == 200

        assert response.json() == {"feature": "suggestionQuota", "used": 30, "quota": -1, "remaining": None}

    def test_unknown_feature(self, client, make_account):
        make_account()
        response = client.get("/api/metered/teleportQuota", headers=auth_header(login(client)))
        assert response.status_code == 422

    def test_requires_token(self, client):
        assert client.get("/api/metered/iaSearchQuota").status_code == 401

    def test_every_role_may_use_metered_features(self, client, make_account):
        for index, role in enumerate(Role):
            email = f"user{index}@example.com"
            make_account(email=email, plan="professional", role=role)
            response = client.get("/api/metered/iaSearchQuota", headers=auth_header(login(client, email)))
            assert response.status_code == 200


class TestIaRoutes:
    def test_search_reports_usage(self, client, make_account):
        make_account(plan="discovery")
        headers = auth_header(login(client))

        first = client.get("/api/ia/search", params={"q": "Paris spa"}, headers=headers)
        assert first.status_code == 200
        assert first.json() == {"results": [], "query": "Paris spa", "used": 1}

        client.get("/api/ia/search", headers=headers)
        assert client.get("/api/ia/search", headers=headers).status_code == 402

    def test_suggestions_blocked_on_discovery(self, client, make_account):
        make_account(plan="discovery")
        response = client.get("/api/ia/suggestions", headers=auth_header(login(client)))

        assert response.status_code == 402
        assert response.json()["feature"] == "suggestionQuota"


class TestRoleRestrictedOperations:
    def test_concierge_is_forbidden_from_admin_routes(self, client, make_account):
        make_account()
        response = client.get("/api/admin/accounts", headers=auth_header(login(client)))

        assert response.status_code == 403
        assert response.json()["code"] == "forbidden"

    def test_admin_lists_accounts(self, client, make_account):
        make_account(email="admin@example.com", role=Role.admin, plan="enterprise")
        make_account(email="bob@example.com")

        response = client.get("/api/admin/accounts", headers=auth_header(login(client, "admin@example.com")))
        assert response.status_code == 200
        assert [a["email"] for a in response.json()] == ["admin@example.com", "bob@example.com"]

    def test_role_change_applies_to_new_tokens_only(self, client, make_account):
        make_account(email="admin@example.com", role=Role.admin, plan="enterprise")
        bob = make_account(email="bob@example.com")
        bob_id = bob.id
        admin_headers = auth_header(login(client, "admin@example.com"))
        old_token = login(client, "bob@example.com")

        response = client.put(f"/api/admin/accounts/{bob_id}/role", json={"role": "editor"}, headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["role"] == "editor"

        assert client.get("/api/editor/ping", headers=auth_header(old_token)).status_code == 403
        new_token = login(client, "bob@example.com")
        assert client.get("/api/editor/ping", headers=auth_header(new_token)).status_code == 200

    def test_role_change_for_missing_account(self, client, make_account):
        make_account(email="admin@example.com", role=Role.admin, plan="enterprise")
        response = client.put(
            "/api/admin/accounts/999/role",
            json={"role": "editor"},
            headers=auth_header(login(client, "admin@example.com")),
        )
        assert response.status_code == 404

    def test_admin_is_not_an_editor(self, client, make_account):
        make_account(email="admin@example.com", role=Role.admin, plan="enterprise")
        response = client.get("/api/editor/ping", headers=auth_header(login(client, "admin@example.com")))
        assert response.status_code == 403
