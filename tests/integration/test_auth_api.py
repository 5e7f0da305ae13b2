from datetime import datetime, timedelta, timezone

from app.models.account import Role
from app.utils.jwt import create_session_token
from config import JWT_ACCESS_TOKEN_EXPIRE_MINUTES
from tests.conftest import PASSWORD, auth_header

REGISTRATION = {
    "email": "alice@example.com",
    "password": PASSWORD,
    "firstName": "Alice",
    "lastName": "Martin",
}


def register(client, **overrides):
    return client.post("/api/auth/register", json={**REGISTRATION, **overrides})


class TestRegister:
    def test_returns_token_and_public_view(self, client):
        response = register(client, plan="essential")

        assert response.status_code == 200
        body = response.json()
        assert body["token"]
        user = body["user"]
        assert user["email"] == "alice@example.com"
        assert user["firstName"] == "Alice"
        assert user["role"] == "concierge"
        assert user["plan"]["key"] == "essential"
        assert user["plan"]["iaSearchQuota"] == 25
        assert user["usage"] == {"iaSearchQuota": 0, "suggestionQuota": 0}
        assert "password" not in user
        assert "hashed_password" not in user

    def test_defaults_to_discovery(self, client):
        response = register(client)
        assert response.json()["user"]["plan"]["key"] == "discovery"

    def test_duplicate_email(self, client):
        register(client)
        response = register(client, email="ALICE@example.com")

        assert response.status_code == 409
        assert response.json()["code"] == "conflict"

    def test_unknown_plan(self, client):
        response = register(client, plan="platinum")
        assert response.status_code == 422
        assert "plan" in response.json()["detail"]

    def test_missing_fields(self, client):
        response = client.post("/api/auth/register", json={"email": "bob@example.com"})
        assert response.status_code == 422


class TestLogin:
    def test_success(self, client):
        register(client)
        response = client.post("/api/auth/login", json={"email": "alice@example.com", "password": PASSWORD})

        assert response.status_code == 200
        assert response.json()["token"]
        assert response.json()["user"]["role"] == "concierge"

    def test_bad_credentials_share_one_response(self, client):
        register(client)
        wrong_password = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "nope-nope-nope"})
        unknown_email = client.post("/api/auth/login", json={"email": "bob@example.com", "password": PASSWORD})

        assert wrong_password.status_code == unknown_email.status_code == 401
        assert wrong_password.json() == unknown_email.json()
        assert wrong_password.headers["www-authenticate"] == "Bearer"


class TestMe:
    def test_requires_token(self, client):
        response = client.get("/api/auth/me")
        assert response.status_code == 401
        assert response.json()["message"] == "Could not validate credentials"

    def test_rejects_garbage_token(self, client):
        response = client.get("/api/auth/me", headers=auth_header("garbage"))
        assert response.status_code == 401

    def test_rejects_expired_token(self, client):
        user_id = register(client).json()["user"]["id"]
        issued = datetime.now(timezone.utc) - timedelta(minutes=JWT_ACCESS_TOKEN_EXPIRE_MINUTES, seconds=5)
        token = create_session_token(account_id=user_id, role=Role.concierge, plan={}, usage={}, now=issued)

        response = client.get("/api/auth/me", headers=auth_header(token))
        assert response.status_code == 401

    def test_returns_live_view(self, client):
        token = register(client, plan="essential").json()["token"]
        client.get("/api/ia/search", headers=auth_header(token))

        response = client.get("/api/auth/me", headers=auth_header(token))
        assert response.status_code == 200
        assert response.json()["usage"]["iaSearchQuota"] == 1
        assert response.json()["remaining"]["iaSearchQuota"] == 24

    def test_token_for_missing_account(self, client):
        token = create_session_token(account_id=999, role=Role.concierge, plan={}, usage={})
        response = client.get("/api/auth/me", headers=auth_header(token))

        assert response.status_code == 401
        assert response.json()["message"] == "Could not validate credentials"


def test_plans_are_listed(client, db):
    from app.services.plan_catalog import provision_plans
    provision_plans(db)

    response = client.get("/api/plans")
    assert response.status_code == 200
    plans = {plan["key"]: plan for plan in response.json()}
    assert plans["enterprise"]["iaSearchQuota"] == -1
    assert plans["discovery"]["users"] == 1
