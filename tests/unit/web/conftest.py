"""Fixtures for HTTP tests against a database-free App stand-in."""

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from studysphere.core.modules.session.models import SessionView
from studysphere.core.modules.session.tokens import issue_token, verify_token
from studysphere.core.modules.user.models import UserView
from studysphere.errors import AuthenticationError, NotFoundError, ValidationError
from studysphere.utils import now
from studysphere.web.server import create_fastapi_app

USER_ID = 7
EMAIL = "ada@example.com"
PASSWORD = "analytical"


class FakeApp:
    """Implements the App methods the HTTP tests call, without MongoDB."""

    def __init__(self, config):
        self.config = config
        self.logged_out = []

    def verify_session(self, token):
        return verify_token(token, self.config.session_secret_key)

    def issue(self, *, version=0, issued_at=None):
        return issue_token(USER_ID, EMAIL, self.config.session_secret_key, version=version, issued_at=issued_at)

    async def _claims(self, token):
        claims = self.verify_session(token)
        if claims is None:
            raise AuthenticationError
        return claims

    async def register(self, email, password, name):
        if email == EMAIL:
            raise ValidationError("User already exists")
        return UserView(id=USER_ID + 1, email=email, name=name), self.issue()

    async def login(self, email, password):
        if (email, password) != (EMAIL, PASSWORD):
            raise AuthenticationError("Invalid credentials")
        return UserView(id=USER_ID, email=EMAIL, name="Ada"), self.issue()

    async def logout(self, token):
        self.logged_out.append(token)

    async def get_session(self, token):
        claims = await self._claims(token)
        return SessionView(user_id=claims.user_id, email=claims.email)

    async def change_password(self, token, current_password, new_password, confirm_password):
        claims = await self._claims(token)
        return self.issue(version=claims.version + 1)

    async def delete_account(self, token):
        await self._claims(token)

    async def list_bookmarks(self, token):
        await self._claims(token)
        return []

    async def get_note(self, token, note_id):
        await self._claims(token)
        raise NotFoundError("Note not found")

    async def get_focus_stats(self, token, period):
        await self._claims(token)
        raise ValidationError("Timestamp without timezone: 2025-03-15T10:00:00")

    async def get_dashboard_stats(self, token):
        await self._claims(token)
        raise RuntimeError("database unavailable")


@pytest.fixture
def fake_app(config):
    return FakeApp(config)


@pytest.fixture
def client(fake_app, config):
    """TestClient without lifespan, so no database connection is attempted."""
    return TestClient(create_fastapi_app(fake_app, config), raise_server_exceptions=False)


@pytest.fixture
def session_cookie(fake_app):
    """Cookie header carrying a valid session token."""
    return {"Cookie": f"session={fake_app.issue()}"}


@pytest.fixture
def expired_cookie(fake_app):
    return {"Cookie": f"session={fake_app.issue(issued_at=now() - timedelta(hours=25))}"}
