"""Shared pytest fixtures."""

from datetime import UTC, datetime

import pytest

from studysphere.config import Config

TEST_SECRET = "test-secret-key-with-at-least-32-bytes!"
NOW = datetime(2025, 3, 15, 12, 0, tzinfo=UTC)


@pytest.fixture
def secret():
    return TEST_SECRET


@pytest.fixture
def config():
    """Config that never touches a real database."""
    return Config(
        database_url="mongodb://localhost:27017/studysphere_test",
        session_secret_key=TEST_SECRET,
    )


@pytest.fixture
def now():
    """Fixed reference instant: 2025-03-15 12:00 UTC."""
    return NOW
