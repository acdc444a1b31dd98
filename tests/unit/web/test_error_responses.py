"""Tests for the mapping of errors to HTTP responses."""

import pytest

UNAUTHENTICATED = {"message": "Not authenticated", "type": "authentication_error"}

PROTECTED = [
    ("get", "/api/v1/auth/session"),
    ("get", "/api/v1/profile"),
    ("get", "/api/v1/user-settings"),
    ("get", "/api/v1/notes"),
    ("get", "/api/v1/notes/bookmarks"),
    ("get", "/api/v1/tasks"),
    ("get", "/api/v1/focus-sessions"),
    ("get", "/api/v1/focus-sessions/stats"),
    ("get", "/api/v1/decks"),
    ("get", "/api/v1/flashcards"),
    ("get", "/api/v1/daily-reviews"),
    ("get", "/api/v1/dashboard/stats"),
]


class TestUnauthenticated:
    """Tests that every rejected session looks the same to the caller."""

    @pytest.mark.parametrize(("method", "path"), PROTECTED)
    def test_missing_cookie(self, client, method, path):
        response = client.request(method, path)
        assert response.status_code == 401
        assert response.json() == UNAUTHENTICATED

    @pytest.mark.parametrize(("method", "path"), PROTECTED)
    def test_expired_cookie(self, client, expired_cookie, method, path):
        response = client.request(method, path, headers=expired_cookie)
        assert response.status_code == 401
        assert response.json() == UNAUTHENTICATED

    def test_tampered_cookie(self, client, fake_app):
        token = fake_app.issue()
        header, payload, signature = token.split(".")
        tampered = f"{header}.{payload[:-1]}{'A' if payload[-1] != 'A' else 'B'}.{signature}"
        response = client.get("/api/v1/dashboard/stats", headers={"Cookie": f"session={tampered}"})
        assert response.status_code == 401
        assert response.json() == UNAUTHENTICATED

    def test_garbage_cookie(self, client):
        response = client.get("/api/v1/dashboard/stats", headers={"Cookie": "session=not-a-token"})
        assert response.status_code == 401
        assert response.json() == UNAUTHENTICATED


class TestErrorMapping:
    """Tests for UserError subclasses and unexpected exceptions."""

    def test_not_found(self, client, session_cookie):
        response = client.get("/api/v1/notes/3f2a6c1e-8d4b-4e0a-9c57-2b1d0e6f4a93", headers=session_cookie)
        assert response.status_code == 404
        assert response.json() == {"message": "Note not found", "type": "not_found"}

    def test_validation_error(self, client, session_cookie):
        response = client.get("/api/v1/focus-sessions/stats?period=week", headers=session_cookie)
        assert response.status_code == 400
        assert response.json()["type"] == "validation_error"

    def test_unexpected_error_is_500(self, client, session_cookie):
        response = client.get("/api/v1/dashboard/stats", headers=session_cookie)
        assert response.status_code == 500
        assert response.json() == {"message": "An unexpected error occurred.", "type": "internal_server_error"}

    def test_unknown_period_rejected(self, client, session_cookie):
        response = client.get("/api/v1/focus-sessions/stats?period=decade", headers=session_cookie)
        assert response.status_code == 422


class TestRouting:
    def test_bookmarks_not_captured_by_note_id(self, client, session_cookie):
        """Test that /notes/bookmarks reaches the bookmarks route, not /notes/{note_id}."""
        response = client.get("/api/v1/notes/bookmarks", headers=session_cookie)
        assert response.status_code == 200
        assert response.json() == []

    def test_health_is_public(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_openapi_marks_login_public(self, client):
        schema = client.get("/openapi.json").json()
        assert schema["paths"]["/api/v1/auth/login"]["post"]["security"] == []
        assert "SessionCookie" in schema["components"]["securitySchemes"]
