"""
TASKNEST API - Authentication Tests

Register, login, logout and the current-user endpoint.
"""

from datetime import datetime, timedelta, timezone

import pytest

from tasknest.config import settings
from tests.conftest import get_session_sync, get_user_sync


class TestRegister:
    """Tests for POST /auth/register."""

    def test_register_success(self, client):
        response = client.post(
            "/auth/register",
            json={"name": "New User", "email": "new@x.com", "password": "securepassword123"},
        )
        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["data"]["user"]["email"] == "new@x.com"
        assert body["data"]["user"]["name"] == "New User"
        assert body["data"]["token"]
        assert "password_hash" not in body["data"]["user"]

    def test_register_creates_session(self, client, registered_user):
        session = get_session_sync(registered_user["token"])
        assert session is not None
        assert session.user_id == registered_user["id"]

    def test_register_duplicate_email(self, client, registered_user):
        response = client.post(
            "/auth/register",
            json={"name": "Other", "email": registered_user["email"], "password": "anotherpassword"},
        )
        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Email already registered"}

    def test_register_duplicate_email_is_case_insensitive(self, client, registered_user):
        response = client.post(
            "/auth/register",
            json={"name": "Other", "email": "A@X.COM", "password": "anotherpassword"},
        )
        assert response.status_code == 400

    def test_register_short_password(self, client):
        response = client.post(
            "/auth/register",
            json={"name": "Valid", "email": "v@x.com", "password": "short"},
        )
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"].startswith("password")

    def test_register_invalid_email(self, client):
        response = client.post(
            "/auth/register",
            json={"name": "Valid", "email": "not-an-email", "password": "securepassword123"},
        )
        assert response.status_code == 400

    def test_register_empty_name(self, client):
        response = client.post(
            "/auth/register",
            json={"name": "", "email": "v@x.com", "password": "securepassword123"},
        )
        assert response.status_code == 400

    def test_register_malformed_json(self, client):
        response = client.post(
            "/auth/register",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_password_not_stored_plaintext(self, client, registered_user):
        user = get_user_sync(registered_user["email"])
        assert user is not None
        assert user.password_hash != registered_user["password"]
        assert user.password_hash.startswith("$2")


class TestLogin:
    """Tests for POST /auth/login."""

    def test_login_success(self, client, registered_user):
        response = client.post(
            "/auth/login",
            json={"email": registered_user["email"], "password": registered_user["password"]},
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["user"]["id"] == registered_user["id"]
        assert data["token"] != registered_user["token"]

    def test_login_creates_session_expiring_in_fifteen_minutes(self, client, registered_user):
        before = datetime.now(timezone.utc)
        response = client.post(
            "/auth/login",
            json={"email": registered_user["email"], "password": registered_user["password"]},
        )
        session = get_session_sync(response.json()["data"]["token"])
        assert session is not None
        expected = before + timedelta(minutes=15)
        assert abs((session.expires_at - expected).total_seconds()) < 5

    def test_login_wrong_password(self, client, registered_user, session_repository):
        sessions_before = len(session_repository._sessions)
        response = client.post(
            "/auth/login",
            json={"email": registered_user["email"], "password": "wrongpassword"},
        )
        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "Invalid credentials"}
        assert len(session_repository._sessions) == sessions_before

    def test_login_nonexistent_user(self, client, session_repository):
        response = client.post(
            "/auth/login",
            json={"email": "nobody@x.com", "password": "anypassword"},
        )
        assert response.status_code == 401
        assert response.json()["error"] == "Invalid credentials"
        assert len(session_repository._sessions) == 0

    def test_login_email_is_case_insensitive(self, client, registered_user):
        response = client.post(
            "/auth/login",
            json={"email": "A@X.com", "password": registered_user["password"]},
        )
        assert response.status_code == 200

    def test_login_missing_password(self, client):
        response = client.post("/auth/login", json={"email": "a@x.com"})
        assert response.status_code == 400

    def test_multiple_sessions_allowed(self, client, registered_user, session_repository):
        credentials = {"email": registered_user["email"], "password": registered_user["password"]}
        client.post("/auth/login", json=credentials)
        client.post("/auth/login", json=credentials)
        sessions = [s for s in session_repository._sessions.values() if s.user_id == registered_user["id"]]
        assert len(sessions) == 3


class TestGetMe:
    """Tests for GET /auth/me (protected endpoint)."""

    def test_get_me_success(self, client, registered_user, auth_headers):
        response = client.get("/auth/me", headers=auth_headers)
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["email"] == registered_user["email"]
        assert data["id"] == registered_user["id"]
        assert "created_at" in data
        assert "updated_at" in data

    def test_get_me_without_token(self, client):
        response = client.get("/auth/me")
        assert response.status_code == 401

    def test_get_me_for_deleted_user(self, client, registered_user, auth_headers, user_repository):
        user_repository.clear()
        response = client.get("/auth/me", headers=auth_headers)
        assert response.status_code == 404
        assert response.json()["error"] == "User not found"


class TestLogout:
    """Tests for POST /auth/logout."""

    def test_logout_deletes_session(self, client, registered_user, auth_headers):
        response = client.post("/auth/logout", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == {"success": True, "data": {"message": "Logged out"}}
        assert get_session_sync(registered_user["token"]) is None

    def test_logout_leaves_other_sessions(self, client, registered_user, auth_headers):
        login = client.post(
            "/auth/login",
            json={"email": registered_user["email"], "password": registered_user["password"]},
        )
        other_token = login.json()["data"]["token"]

        client.post("/auth/logout", headers=auth_headers)
        assert get_session_sync(other_token) is not None

    def test_token_still_verifies_after_logout(self, client, codec, registered_user, auth_headers):
        """Logout removes the session row only; the signed token lives until it expires."""
        client.post("/auth/logout", headers=auth_headers)

        claim = codec.verify(registered_user["token"])
        assert claim.subject == registered_user["id"]
        assert client.get("/auth/me", headers=auth_headers).status_code == 200

    def test_logout_twice_is_harmless(self, client, auth_headers):
        assert client.post("/auth/logout", headers=auth_headers).status_code == 200
        assert client.post("/auth/logout", headers=auth_headers).status_code == 200


class TestRequireActiveSession:
    """With REQUIRE_ACTIVE_SESSION, a logged-out token is refused."""

    @pytest.fixture(autouse=True)
    def require_session(self, monkeypatch):
        monkeypatch.setattr(settings, "REQUIRE_ACTIVE_SESSION", True)

    def test_active_session_is_accepted(self, client, auth_headers):
        assert client.get("/auth/me", headers=auth_headers).status_code == 200

    def test_logged_out_token_is_rejected(self, client, auth_headers):
        client.post("/auth/logout", headers=auth_headers)
        response = client.get("/auth/me", headers=auth_headers)
        assert response.status_code == 401
        assert response.json()["error"] == "Session has been revoked"

    def test_token_without_session_row_is_rejected(self, client, codec, registered_user):
        from tasknest.auth.tokens import TokenClaim

        orphan = codec.sign(TokenClaim(subject=registered_user["id"], email=registered_user["email"]))
        response = client.get("/auth/me", headers={"Authorization": f"Bearer {orphan}"})
        assert response.status_code == 401


class TestFullAuthFlow:

    def test_register_login_me_logout_flow(self, client):
        credentials = {"name": "Flow", "email": "flow@x.com", "password": "flowpassword123"}

        assert client.post("/auth/register", json=credentials).status_code == 201

        login_response = client.post(
            "/auth/login",
            json={"email": credentials["email"], "password": credentials["password"]},
        )
        assert login_response.status_code == 200
        headers = {"Authorization": f"Bearer {login_response.json()['data']['token']}"}

        me_response = client.get("/auth/me", headers=headers)
        assert me_response.status_code == 200
        assert me_response.json()["data"]["name"] == "Flow"

        assert client.post("/auth/logout", headers=headers).status_code == 200
