"""
TASKNEST API - Route Guard Tests

Every protected path must reject missing and bad tokens with 401 before
any handler runs.
"""

from datetime import timedelta

import pytest

from tasknest.auth.guard import is_protected_path
from tasknest.auth.tokens import TokenClaim


PROTECTED_REQUESTS = [
    ("GET", "/tasks"),
    ("POST", "/tasks"),
    ("GET", "/tasks/some-id"),
    ("PUT", "/tasks/some-id"),
    ("DELETE", "/tasks/some-id"),
    ("GET", "/dashboard"),
    ("GET", "/auth/me"),
    ("POST", "/auth/logout"),
    ("GET", "/users"),
    ("POST", "/users"),
    ("GET", "/users/some-id"),
    ("PUT", "/users/some-id"),
    ("DELETE", "/users/some-id"),
    ("GET", "/auth-sessions"),
    ("GET", "/auth-sessions/some-id"),
    ("DELETE", "/auth-sessions/some-id"),
]


class TestIsProtectedPath:

    @pytest.mark.parametrize(
        "path",
        ["/tasks", "/tasks/", "/tasks/abc", "/dashboard", "/auth/me", "/auth/logout", "/users/x", "/auth-sessions/x"],
    )
    def test_protected(self, path):
        assert is_protected_path(path) is True

    @pytest.mark.parametrize(
        "path",
        ["/", "/health", "/auth/login", "/auth/register", "/tasksfoo", "/auth/meow", "/docs"],
    )
    def test_unprotected(self, path):
        assert is_protected_path(path) is False


class TestGuardRejections:

    @pytest.mark.parametrize("method, path", PROTECTED_REQUESTS)
    def test_missing_token_is_401(self, client, method, path):
        response = client.request(method, path, json={})
        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "Unauthorized"}
        assert response.headers["WWW-Authenticate"] == "Bearer"

    @pytest.mark.parametrize("method, path", PROTECTED_REQUESTS)
    def test_invalid_token_is_401(self, client, method, path):
        response = client.request(
            method,
            path,
            json={},
            headers={"Authorization": "Bearer invalid_token_here"},
        )
        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "Invalid token"}

    def test_non_bearer_scheme_is_401(self, client):
        response = client.get("/auth/me", headers={"Authorization": "Basic dXNlcjpwYXNz"})
        assert response.status_code == 401
        assert response.json()["error"] == "Unauthorized"

    def test_expired_token_is_401(self, client, codec, registered_user):
        expired = codec.sign(
            TokenClaim(subject=registered_user["id"], email=registered_user["email"]),
            expires_delta=timedelta(seconds=-1),
        )
        response = client.get("/auth/me", headers={"Authorization": f"Bearer {expired}"})
        assert response.status_code == 401
        assert response.json()["error"] == "Invalid token"

    def test_invalid_body_on_protected_path_is_still_401(self, client):
        """Authentication is checked before the payload is validated."""
        response = client.post("/tasks", json={"title": ""})
        assert response.status_code == 401


class TestGuardPassThrough:

    def test_public_paths_ignore_bad_tokens(self, client):
        response = client.post(
            "/auth/login",
            json={"email": "nobody@x.com", "password": "whatever"},
            headers={"Authorization": "Bearer invalid_token_here"},
        )
        # Reaches the handler: bad credentials, not a guard rejection
        assert response.status_code == 401
        assert response.json()["error"] == "Invalid credentials"

    def test_cors_preflight_is_not_guarded(self, client):
        response = client.options(
            "/tasks",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "GET",
            },
        )
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"

    def test_guard_rejection_carries_cors_headers(self, client):
        response = client.get("/tasks", headers={"Origin": "http://localhost:5173"})
        assert response.status_code == 401
        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"

    def test_valid_token_reaches_handler(self, client, auth_headers):
        response = client.get("/auth/me", headers=auth_headers)
        assert response.status_code == 200
